"""Command-line interface for the wave function collapse solver."""

import argparse
import logging
import sys

from .core.board import Pan
from .core.errors import SolverError
from .rules import PipeRules, SudokuRules
from .solvers import SolverBuilder
from .benchmark import Benchmark
from .benchmark.visualizer import Visualizer

DEFAULT_PUZZLE = (
    "6.....5.9.7..4..6.4........51.4...37....63.........9....29.8...........2.9.7.13.."
)


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Wave Function Collapse Constraint Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a Sudoku puzzle
  python -m wfc.cli sudoku --puzzle "6.....5.9.7..4..6.4..." --seed 5

  # Generate a pipe maze and scroll it down twice
  python -m wfc.cli pipes --width 40 --height 12 --pan 4 --steps 2

  # Benchmark a puzzle over 20 seeds
  python -m wfc.cli benchmark --runs 20 --output results/
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Sudoku command
    sudoku_parser = subparsers.add_parser("sudoku", help="Solve a Sudoku puzzle")
    sudoku_parser.add_argument(
        "--puzzle", "-p", type=str, default=DEFAULT_PUZZLE,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    sudoku_parser.add_argument(
        "--size", type=int, default=9,
        help="Board size (default: 9)"
    )
    sudoku_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    sudoku_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics and a debug trace"
    )

    # Pipes command
    pipes_parser = subparsers.add_parser("pipes", help="Generate a grid of connected pipes")
    pipes_parser.add_argument(
        "--width", "-W", type=int, default=40,
        help="Grid width (default: 40)"
    )
    pipes_parser.add_argument(
        "--height", "-H", type=int, default=12,
        help="Grid height (default: 12)"
    )
    pipes_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    pipes_parser.add_argument(
        "--pan", type=int, default=0,
        help="Rows to scroll down between steps (default: 0)"
    )
    pipes_parser.add_argument(
        "--steps", type=int, default=0,
        help="Number of scroll steps (default: 0)"
    )
    pipes_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics and a debug trace"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--puzzle", "-p", type=str, action="append", default=None,
        help="Sudoku puzzle to benchmark; repeat for several (default: built-in puzzle)"
    )
    bench_parser.add_argument(
        "--runs", "-n", type=int, default=10,
        help="Seeds per puzzle (default: 10)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=0,
        help="First seed (default: 0)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--memory", action="store_true",
        help="Track peak memory per run"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "sudoku":
        cmd_sudoku(args)
    elif args.command == "pipes":
        cmd_pipes(args)
    elif args.command == "benchmark":
        cmd_benchmark(args)


def cmd_sudoku(args):
    """Handle the sudoku command."""
    try:
        rules = SudokuRules(args.size)
        board = rules.parse(args.puzzle)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("Input puzzle:")
    print(rules.format(board))
    print()

    builder = SolverBuilder(rules.neighbors, rules.reduce).state(board)
    if args.seed is not None:
        builder.seed(args.seed)
    solver = builder.build()

    try:
        solution = solver.solve()
    except SolverError as e:
        print(f"✗ Failed to solve: {e}")
        sys.exit(1)

    stats = solver.stats
    print(f"✓ Solved in {stats.time_seconds * 1000:.4f} ms")
    if args.verbose:
        print(f"  Decisions: {stats.decisions:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Reductions: {stats.reductions:,}")
    print(rules.format(solution))

    if not rules.is_valid(solution):
        print("✗ Solution violates the Sudoku rules")
        sys.exit(1)


def cmd_pipes(args):
    """Handle the pipes command."""
    try:
        if args.steps and args.pan < 1:
            raise ValueError("--steps requires a positive --pan")
        rules = PipeRules(args.width, args.height)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    builder = SolverBuilder(rules.neighbors, rules.reduce).state(rules.empty_board())
    if args.seed is not None:
        builder.seed(args.seed)
    solver = builder.build()

    try:
        print(rules.format(solver.solve()))
        for _ in range(args.steps):
            solver.pan(Pan.DOWN, args.pan, args.width)
            board = solver.solve()
            print(rules.format(board, rows=args.pan))
    except SolverError as e:
        print(f"✗ Failed to generate: {e}")
        sys.exit(1)

    if args.verbose:
        stats = solver.stats
        print(f"\nLast solve: {stats.decisions:,} decisions, "
              f"{stats.backtracks:,} backtracks, {stats.time_seconds:.4f}s")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    rules = SudokuRules()
    try:
        puzzles = [rules.parse(p) for p in (args.puzzle or [DEFAULT_PUZZLE])]
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)

    print("=" * 60)
    print("WAVE FUNCTION COLLAPSE BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(puzzles)}")
    print(f"Seeds per puzzle: {args.runs} (from {args.seed})")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        rules,
        puzzles,
        runs_per_puzzle=args.runs,
        seed=args.seed,
        track_memory=args.memory,
    )
    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    print(f"  Accuracy: {summary['accuracy']:.1f}% ({summary['total_solved']}/{summary['total_tested']})")
    print(f"  Avg Time: {summary['avg_time_seconds']:.4f}s")
    print(f"  Avg Decisions: {summary['avg_decisions']:.1f}")
    print(f"  Avg Backtracks: {summary['avg_backtracks']:.1f} (max {summary['max_backtracks']})")
    if args.memory:
        print(f"  Avg Memory: {summary['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)
    print(f"\nResults saved to {args.output}")

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
