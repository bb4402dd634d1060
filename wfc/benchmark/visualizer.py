"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for solver benchmark results.

    Plots how solve time and search effort spread across seeds and puzzles.
    """

    SOLVED_COLOR = "#2ecc71"
    FAILED_COLOR = "#e74c3c"

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

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_distribution(),
            self.plot_backtracks_histogram(),
            self.plot_decisions_vs_time(),
        ]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_distribution(self) -> str:
        """Create box plot of solve times per puzzle."""
        fig, ax = plt.subplots(figsize=(10, 6))

        puzzle_ids = sorted(set(r.puzzle_id for r in self.results))
        data = [
            [r.time_seconds for r in self.results if r.puzzle_id == pid]
            for pid in puzzle_ids
        ]

        bp = ax.boxplot(data, patch_artist=True)
        for patch in bp['boxes']:
            patch.set_facecolor(self.SOLVED_COLOR)
            patch.set_alpha(0.7)

        ax.set_xticks(np.arange(1, len(puzzle_ids) + 1))
        ax.set_xticklabels([f"#{pid}" for pid in puzzle_ids])
        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Puzzle', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def plot_backtracks_histogram(self) -> str:
        """Create histogram of backtrack counts across all runs."""
        fig, ax = plt.subplots(figsize=(10, 6))

        backtracks = [r.backtracks for r in self.results]
        sns.histplot(backtracks, ax=ax, discrete=max(backtracks, default=0) < 50,
                     color=self.SOLVED_COLOR, edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Backtracks', fontsize=12)
        ax.set_ylabel('Runs', fontsize=12)
        ax.set_title('Backtracks per Run', fontsize=14, fontweight='bold')

        return self._save("backtracks_histogram.png")

    def plot_decisions_vs_time(self) -> str:
        """Create scatter plot of decisions against solve time."""
        fig, ax = plt.subplots(figsize=(10, 6))

        colors = [self.SOLVED_COLOR if r.solved else self.FAILED_COLOR for r in self.results]
        ax.scatter(
            [r.decisions for r in self.results],
            [r.time_seconds for r in self.results],
            c=colors, edgecolors='black', linewidths=0.5, alpha=0.8,
        )

        ax.set_xlabel('Decisions', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Search Effort vs Solve Time', fontsize=14, fontweight='bold')

        return self._save("decisions_vs_time.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        puzzle_ids = sorted(set(r.puzzle_id for r in self.results))

        lines = [
            "# Benchmark Summary\n",
            "| Puzzle | Solved | Avg Time | Avg Decisions | Avg Backtracks |",
            "|--------|--------|----------|---------------|----------------|"
        ]

        for pid in puzzle_ids:
            puzzle_results = [r for r in self.results if r.puzzle_id == pid]

            solved = sum(1 for r in puzzle_results if r.solved)
            accuracy = (solved / len(puzzle_results)) * 100

            avg_time = np.mean([r.time_seconds for r in puzzle_results])
            avg_decisions = np.mean([r.decisions for r in puzzle_results])
            avg_backtracks = np.mean([r.backtracks for r in puzzle_results])

            lines.append(
                f"| #{pid} | {accuracy:.1f}% | {avg_time:.4f}s | {avg_decisions:.1f} | {avg_backtracks:.1f} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
