"""Tests for the benchmark framework."""

import json
import os

import pytest
from wfc.benchmark import Benchmark, BenchmarkResult, Visualizer
from wfc.rules import RingColoring


class TestBenchmark:
    """Tests for Benchmark class."""

    def test_run(self):
        """Test that every puzzle runs once per seed."""
        rules = RingColoring(6, 3)
        benchmark = Benchmark(rules, [rules.empty_board(), rules.empty_board()], runs_per_puzzle=3, seed=10)

        results = benchmark.run(show_progress=False)

        assert len(results) == 6
        assert all(r.solved for r in results)
        assert [r.seed for r in results] == [10, 11, 12, 10, 11, 12]
        assert [r.puzzle_id for r in results] == [0, 0, 0, 1, 1, 1]

    def test_unsolvable_puzzle(self):
        """Test that exhausted runs are recorded as unsolved."""
        rules = RingColoring(5, 2)
        benchmark = Benchmark(rules, [rules.empty_board()], runs_per_puzzle=2)

        results = benchmark.run(show_progress=False)

        assert not any(r.solved for r in results)
        assert all(r.status == "exhausted" for r in results)
        assert benchmark.get_summary()["accuracy"] == 0

    def test_summary(self):
        """Test summary statistics."""
        rules = RingColoring(4, 2)
        benchmark = Benchmark(rules, [rules.empty_board()], runs_per_puzzle=4)
        benchmark.run(show_progress=False)

        summary = benchmark.get_summary()

        assert summary["total_runs"] == 4
        assert summary["accuracy"] == 100
        assert summary["total_solved"] == 4
        assert summary["results_by_puzzle"][0]["total_tested"] == 4

    def test_save_results(self, tmp_path):
        """Test writing results to disk."""
        rules = RingColoring(4, 2)
        benchmark = Benchmark(rules, [rules.empty_board()], runs_per_puzzle=2)
        benchmark.run(show_progress=False)

        benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json") as f:
            data = json.load(f)
        assert len(data) == 2
        assert data[0]["solved"] is True
        assert (tmp_path / "benchmark_summary.json").exists()

    def test_requires_puzzles(self):
        """Test that an empty puzzle list is rejected."""
        with pytest.raises(ValueError):
            Benchmark(RingColoring(4, 2), [])


class TestVisualizer:
    """Tests for Visualizer class."""

    def test_generate_all(self, tmp_path):
        """Test that charts and the summary table are written."""
        results = [
            BenchmarkResult(0, seed, True, "solved", 0.01 * (seed + 1), 0, 5, seed, 6, 40)
            for seed in range(4)
        ]
        visualizer = Visualizer(results, str(tmp_path))

        charts = visualizer.generate_all()
        table = visualizer.generate_summary_table()

        assert len(charts) == 3
        assert all(os.path.exists(path) for path in charts)
        with open(table) as f:
            assert "| #0 | 100.0% |" in f.read()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
