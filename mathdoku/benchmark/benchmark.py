"""Benchmarking framework for generated Mathdoku puzzles."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from concurrent.futures import ThreadPoolExecutor, TimeoutError
import json
import os

from tqdm import tqdm

from ..core.puzzle import MathdokuPuzzle
from ..generator import MathdokuGenerator
from ..solvers import BaseSolver, BacktrackingSolver

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from solving a single generated puzzle."""
    puzzle_id: int
    size: int
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    cage_sizes: List[int] = field(default_factory=list)
    operators: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "size": self.size,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "cage_sizes": self.cage_sizes,
            "operators": self.operators,
            **self.extra
        }


class Benchmark:
    """
    Generates puzzles for several board sizes and times the solver on each.

    Every generated puzzle is solved from an empty board, so the results
    show how search effort grows with the size.
    """

    def __init__(
        self,
        sizes: Optional[List[int]] = None,
        puzzles_per_size: int = 5,
        solver: Optional[BaseSolver] = None,
        timeout_seconds: float = 60.0,
        seed: Optional[int] = None
    ):
        """
        Initialize the benchmark.

        Args:
            sizes: Board sizes to test (default: 3, 4, 5).
            puzzles_per_size: Number of puzzles to generate per size.
            solver: Template solver; each run gets a fresh instance of its
                class with the same memory tracking (default: BacktrackingSolver).
            timeout_seconds: Maximum time per puzzle.
            seed: Random seed for reproducibility.
        """
        self.sizes = sizes or [3, 4, 5]
        self.puzzles_per_size = puzzles_per_size
        self.solver = solver or BacktrackingSolver(track_memory=True)
        self.timeout_seconds = timeout_seconds
        self.seed = seed

        self.puzzles: Dict[int, List[MathdokuPuzzle]] = {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self, show_progress: bool = True) -> None:
        """Generate all puzzles for benchmarking."""
        generator = MathdokuGenerator(seed=self.seed)

        for size in tqdm(self.sizes, desc="Sizes", disable=not show_progress):
            self.puzzles[size] = generator.generate_batch(self.puzzles_per_size, size)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles(show_progress)

        self.results = []
        total_tests = sum(len(puzzles) for puzzles in self.puzzles.values())

        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for size, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                self.results.append(self._run_single(puzzle, puzzle_id, size))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, puzzle: MathdokuPuzzle, puzzle_id: int, size: int) -> BenchmarkResult:
        """Solve one puzzle from an empty board."""
        probe = puzzle.copy()
        probe.solution = None
        probe.board.reset_values()

        cage_sizes = [len(cage) for cage in puzzle.cages]
        operators = []
        for cage in puzzle.cages:
            label = puzzle.label_for(cage)
            operators.append(label.operator.symbol if label.operator else "none")

        base = dict(
            puzzle_id=puzzle_id,
            size=size,
            algorithm=self.solver.name,
            cage_sizes=cage_sizes,
            operators=operators,
        )

        # One solver per run so its stats and tracemalloc session are its own
        solver = type(self.solver)(track_memory=self.solver.track_memory)

        # Use ThreadPoolExecutor to enforce timeout
        with ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(solver.solve, probe)
            try:
                solution, stats = future.result(timeout=self.timeout_seconds)
            except TimeoutError:
                # Leaving the block joins the worker once the search unwinds
                solver.cancel()
                logger.warning("Puzzle %d of size %d timed out", puzzle_id, size)
                return BenchmarkResult(
                    solved=False,
                    time_seconds=self.timeout_seconds,
                    memory_bytes=0,
                    iterations=0,
                    backtracks=0,
                    nodes_explored=0,
                    extra={"error": "Timeout"},
                    **base
                )

        return BenchmarkResult(
            solved=stats.solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=stats.extra,
            **base
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "algorithm": self.solver.name,
            "sizes": list(self.sizes),
            "results_by_size": {}
        }

        for size in self.sizes:
            size_results = [r for r in self.results if r.size == size]
            if not size_results:
                continue

            solved = [r for r in size_results if r.solved]
            times = [r.time_seconds for r in size_results]
            cage_sizes = [s for r in size_results for s in r.cage_sizes]

            summary["results_by_size"][str(size)] = {
                "accuracy": len(solved) / len(size_results) * 100,
                "avg_time_seconds": sum(times) / len(times),
                "max_time_seconds": max(times),
                "min_time_seconds": min(times),
                "avg_iterations": sum(r.iterations for r in size_results) / len(size_results),
                "avg_cage_size": sum(cage_sizes) / len(cage_sizes) if cage_sizes else 0.0,
                "total_solved": len(solved),
                "total_tested": len(size_results)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w", encoding="utf-8") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2, ensure_ascii=False)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w", encoding="utf-8") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for size, puzzles in self.puzzles.items():
            size_dir = os.path.join(puzzles_dir, f"{size}x{size}")
            MathdokuGenerator.save_to_folder(puzzles, size_dir, prefix=f"puzzle_{size}x{size}")

        logger.info("Results and puzzles saved to %s", output_dir)
