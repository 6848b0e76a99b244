"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from collections import Counter
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for Mathdoku benchmark results.

    Plots solver effort per board size and the shape of the generated cages.
    """

    BAR_COLOR = "#3498db"

    OPERATOR_COLORS = {
        "+": "#2ecc71",
        "−": "#e74c3c",
        "×": "#9b59b6",
        "÷": "#f39c12",
        "none": "#95a5a6",
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_by_size(),
            self.plot_iterations_by_size(),
            self.plot_cage_size_distribution(),
            self.plot_operator_mix(),
        ]

    def _sizes(self) -> List[int]:
        return sorted(set(r.size for r in self.results))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_by_size(self) -> str:
        """Create bar chart of average solve time per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sizes = self._sizes()
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.size == size])
            for size in sizes
        ]
        labels = [f"{size}x{size}" for size in sizes]

        bars = ax.bar(labels, avg_times, color=self.BAR_COLOR, edgecolor='black', linewidth=0.5)

        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Board Size', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_by_size.png")

    def plot_iterations_by_size(self) -> str:
        """Create box plot of search iterations per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sizes = self._sizes()
        data = [[max(r.iterations, 1) for r in self.results if r.size == size] for size in sizes]

        bp = ax.boxplot(data, patch_artist=True)
        for patch in bp['boxes']:
            patch.set_facecolor(self.BAR_COLOR)
            patch.set_alpha(0.7)

        ax.set_xticks(range(1, len(sizes) + 1))
        ax.set_xticklabels([f"{size}x{size}" for size in sizes])
        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Iterations (Log Scale)', fontsize=12)
        ax.set_title('Search Iterations by Board Size', fontsize=14, fontweight='bold')

        # Iterations vary by several orders of magnitude
        ax.set_yscale('log')

        return self._save("iterations_by_size.png")

    def plot_cage_size_distribution(self) -> str:
        """Create histogram of generated cage sizes, one series per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        cage_sizes = [s for r in self.results for s in r.cage_sizes]
        board_sizes = [f"{r.size}x{r.size}" for r in self.results for _ in r.cage_sizes]

        sns.histplot(
            x=cage_sizes,
            hue=board_sizes,
            discrete=True,
            multiple="dodge",
            stat="probability",
            common_norm=False,
            shrink=0.8,
            ax=ax,
        )

        ax.set_xlabel('Cage Size (cells)', fontsize=12)
        ax.set_ylabel('Share of Cages', fontsize=12)
        ax.set_title('Generated Cage Sizes', fontsize=14, fontweight='bold')

        return self._save("cage_size_distribution.png")

    def plot_operator_mix(self) -> str:
        """Create bar chart of how often each operator was generated."""
        fig, ax = plt.subplots(figsize=(8, 6))

        counts = Counter(op for r in self.results for op in r.operators)
        operators = [op for op in self.OPERATOR_COLORS if op in counts]
        values = [counts[op] for op in operators]
        colors = [self.OPERATOR_COLORS[op] for op in operators]

        ax.bar(operators, values, color=colors, edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Operator', fontsize=12)
        ax.set_ylabel('Cages', fontsize=12)
        ax.set_title('Operator Mix of Generated Cages', fontsize=14, fontweight='bold')

        return self._save("operator_mix.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Size | Solved | Avg Time | Avg Iterations | Avg Cage Size |",
            "|------|--------|----------|----------------|---------------|"
        ]

        for size in self._sizes():
            size_results = [r for r in self.results if r.size == size]

            solved = sum(1 for r in size_results if r.solved)
            accuracy = (solved / len(size_results)) * 100

            avg_time = np.mean([r.time_seconds for r in size_results])
            avg_iters = np.mean([r.iterations for r in size_results])
            cage_sizes = [s for r in size_results for s in r.cage_sizes]
            avg_cage = np.mean(cage_sizes) if cage_sizes else 0.0

            lines.append(
                f"| {size}x{size} | {accuracy:.1f}% | {avg_time:.4f}s | {int(avg_iters):,} | {avg_cage:.2f} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)

        return path
