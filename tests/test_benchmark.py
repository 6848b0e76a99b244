"""Unit tests for the benchmark runner and its charts."""

import json
import os
import threading
import time

import matplotlib
matplotlib.use("Agg")

import pytest
from mathdoku.benchmark import Benchmark, BenchmarkResult, Visualizer
from mathdoku.game.loader import parse_puzzle
from mathdoku.generator import MathdokuGenerator
from mathdoku.solvers import BacktrackingSolver


@pytest.fixture(scope="module")
def finished_benchmark():
    benchmark = Benchmark(sizes=[2, 3], puzzles_per_size=2, seed=1)
    benchmark.run(show_progress=False)
    return benchmark


class TestBenchmark:
    """Tests for Benchmark."""

    def test_defaults(self):
        benchmark = Benchmark()
        assert benchmark.sizes == [3, 4, 5]
        assert benchmark.puzzles_per_size == 5
        assert isinstance(benchmark.solver, BacktrackingSolver)

    def test_generate_puzzles(self):
        benchmark = Benchmark(sizes=[3], puzzles_per_size=3, seed=4)
        benchmark.generate_puzzles(show_progress=False)

        assert list(benchmark.puzzles) == [3]
        assert len(benchmark.puzzles[3]) == 3

    def test_results(self, finished_benchmark):
        results = finished_benchmark.results

        assert len(results) == 4
        assert all(isinstance(r, BenchmarkResult) for r in results)
        assert all(r.solved for r in results)
        assert all(r.algorithm == "Backtracking" for r in results)
        assert sorted(r.size for r in results) == [2, 2, 3, 3]

    def test_result_records_cages(self, finished_benchmark):
        for result in finished_benchmark.results:
            assert sum(result.cage_sizes) == result.size * result.size
            assert len(result.operators) == len(result.cage_sizes)

    def test_puzzles_left_untouched(self, finished_benchmark):
        for puzzles in finished_benchmark.puzzles.values():
            for puzzle in puzzles:
                assert puzzle.board.count_filled() == 0
                assert puzzle.solution is not None

    def test_summary(self, finished_benchmark):
        summary = finished_benchmark.get_summary()

        assert summary["total_puzzles"] == 4
        assert summary["algorithm"] == "Backtracking"
        assert set(summary["results_by_size"]) == {"2", "3"}

        stats = summary["results_by_size"]["3"]
        assert stats["accuracy"] == 100.0
        assert stats["total_solved"] == 2
        assert stats["total_tested"] == 2
        assert stats["min_time_seconds"] <= stats["avg_time_seconds"] <= stats["max_time_seconds"]

    def test_save_results(self, finished_benchmark, tmp_path):
        finished_benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json", encoding="utf-8") as f:
            results = json.load(f)
        assert len(results) == 4
        assert "memory_mb" in results[0]

        assert (tmp_path / "benchmark_summary.json").exists()
        assert (tmp_path / "puzzles" / "3x3" / "puzzle_3x3_1.txt").exists()
        assert (tmp_path / "puzzles" / "2x2" / "puzzle_2x2_2.txt").exists()


class TestBenchmarkTimeout:
    """Tests for puzzles that run past the time limit."""

    def test_timeout_stops_the_search(self):
        benchmark = Benchmark(sizes=[9], puzzles_per_size=1, timeout_seconds=0.0, seed=2)
        benchmark.generate_puzzles(show_progress=False)

        start = time.perf_counter()
        results = benchmark.run(show_progress=False)
        elapsed = time.perf_counter() - start

        assert len(results) == 1
        assert not results[0].solved
        assert results[0].extra == {"error": "Timeout"}
        assert results[0].iterations == 0
        # The worker thread is joined before run() returns
        workers = [t for t in threading.enumerate() if t.name.startswith("ThreadPoolExecutor")]
        assert workers == []
        assert elapsed < 10

    def test_timed_out_run_leaves_later_stats_alone(self, scenario_a):
        expected = BacktrackingSolver().solve(parse_puzzle(scenario_a))[1]

        benchmark = Benchmark(sizes=[9, 3], timeout_seconds=0.0, seed=2)
        benchmark.puzzles = {9: [MathdokuGenerator(seed=2).generate(9)]}
        benchmark.run(show_progress=False)

        benchmark.timeout_seconds = 60.0
        benchmark.puzzles = {3: [parse_puzzle(scenario_a)]}
        result = benchmark.run(show_progress=False)[0]

        assert result.solved
        assert result.iterations == expected.iterations
        assert result.nodes_explored == expected.nodes_explored
        assert result.backtracks == expected.backtracks

    def test_memory_tracking_survives_a_timeout(self, scenario_a):
        benchmark = Benchmark(
            sizes=[9, 3],
            solver=BacktrackingSolver(track_memory=True),
            timeout_seconds=0.0,
            seed=2,
        )
        benchmark.puzzles = {9: [MathdokuGenerator(seed=2).generate(9)]}
        benchmark.run(show_progress=False)

        benchmark.timeout_seconds = 60.0
        benchmark.puzzles = {3: [parse_puzzle(scenario_a)]}
        result = benchmark.run(show_progress=False)[0]

        assert result.solved
        assert result.memory_bytes > 0


class TestVisualizer:
    """Tests for Visualizer."""

    def test_generate_all(self, finished_benchmark, tmp_path):
        visualizer = Visualizer(finished_benchmark.results, str(tmp_path))
        charts = visualizer.generate_all()

        assert len(charts) == 4
        for chart in charts:
            assert os.path.exists(chart)
            assert chart.endswith(".png")

    def test_summary_table(self, finished_benchmark, tmp_path):
        visualizer = Visualizer(finished_benchmark.results, str(tmp_path))
        path = visualizer.generate_summary_table()

        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "| 2x2 | 100.0% |" in content
        assert "| 3x3 | 100.0% |" in content


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
