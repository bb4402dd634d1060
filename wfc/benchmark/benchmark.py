"""Benchmarking framework for repeated seeded solves."""

from __future__ import annotations
import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np
from tqdm import tqdm

from ..core.board import Board
from ..core.errors import Exhausted, ReducerViolatesMonotonicity
from ..solvers import SolverBuilder, SolverStats


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    seed: int
    solved: bool
    status: str
    time_seconds: float
    memory_bytes: int
    decisions: int
    backtracks: int
    propagations: int
    reductions: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_stats(cls, puzzle_id: int, seed: int, stats: SolverStats) -> BenchmarkResult:
        return cls(
            puzzle_id=puzzle_id,
            seed=seed,
            solved=stats.solved,
            status=stats.status,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            decisions=stats.decisions,
            backtracks=stats.backtracks,
            propagations=stats.propagations,
            reductions=stats.reductions,
            extra=dict(stats.extra),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "seed": self.seed,
            "solved": self.solved,
            "status": self.status,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "decisions": self.decisions,
            "backtracks": self.backtracks,
            "propagations": self.propagations,
            "reductions": self.reductions,
            **self.extra
        }


class Benchmark:
    """
    Runs the solver on each puzzle with several seeds and collects metrics.

    ``rules`` is any object exposing ``neighbors(index)`` and
    ``reduce(index, neighbors)``, such as the classes in ``wfc.rules``.
    """

    def __init__(
        self,
        rules: Any,
        puzzles: List[Board],
        runs_per_puzzle: int = 10,
        seed: int = 0,
        track_memory: bool = False,
    ):
        """
        Initialize the benchmark.

        Args:
            rules: Rule set supplying adjacency and reduction.
            puzzles: Starting boards to solve.
            runs_per_puzzle: Number of seeds to try per puzzle.
            seed: First seed; runs use consecutive seeds from here.
            track_memory: Record peak memory with tracemalloc (slower).
        """
        if not puzzles:
            raise ValueError("At least one puzzle is required")
        self.rules = rules
        self.puzzles = puzzles
        self.runs_per_puzzle = runs_per_puzzle
        self.seed = seed
        self.track_memory = track_memory
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total_runs = len(self.puzzles) * self.runs_per_puzzle

        pbar = tqdm(total=total_runs, desc="Benchmarking", disable=not show_progress)

        for puzzle_id, puzzle in enumerate(self.puzzles):
            for run in range(self.runs_per_puzzle):
                self.results.append(self._run_single(puzzle, puzzle_id, self.seed + run))
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(self, puzzle: Board, puzzle_id: int, seed: int) -> BenchmarkResult:
        """Solve one puzzle with one seed."""
        solver = (
            SolverBuilder(self.rules.neighbors, self.rules.reduce)
            .state(puzzle)
            .seed(seed)
            .track_memory(self.track_memory)
            .build()
        )
        try:
            solver.solve()
        except Exhausted:
            pass
        except ReducerViolatesMonotonicity as e:
            solver.stats.extra["error"] = str(e)
        return BenchmarkResult.from_stats(puzzle_id, seed, solver.stats)

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary: Dict[str, Any] = {
            "total_runs": len(self.results),
            "puzzles": len(self.puzzles),
            "runs_per_puzzle": self.runs_per_puzzle,
            "results_by_puzzle": {},
        }
        if not self.results:
            return summary

        summary.update(self._aggregate(self.results))
        for puzzle_id in range(len(self.puzzles)):
            puzzle_results = [r for r in self.results if r.puzzle_id == puzzle_id]
            if puzzle_results:
                summary["results_by_puzzle"][puzzle_id] = self._aggregate(puzzle_results)
        return summary

    @staticmethod
    def _aggregate(results: List[BenchmarkResult]) -> Dict[str, Any]:
        solved = [r for r in results if r.solved]
        times = np.array([r.time_seconds for r in results])
        backtracks = np.array([r.backtracks for r in results])
        return {
            "accuracy": len(solved) / len(results) * 100,
            "total_solved": len(solved),
            "total_tested": len(results),
            "avg_time_seconds": float(times.mean()),
            "max_time_seconds": float(times.max()),
            "min_time_seconds": float(times.min()),
            "avg_backtracks": float(backtracks.mean()),
            "max_backtracks": int(backtracks.max()),
            "avg_decisions": float(np.mean([r.decisions for r in results])),
            "avg_memory_mb": float(np.mean([r.memory_bytes for r in results])) / (1024 * 1024),
        }

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

    def to_dataframe(self):
        """Convert results to pandas DataFrame (requires pandas)."""
        try:
            import pandas as pd
        except ImportError as e:
            raise ImportError("pandas is required for DataFrame conversion") from e
        return pd.DataFrame([r.to_dict() for r in self.results])
