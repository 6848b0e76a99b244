"""Command-line interface for the Mathdoku engine."""

import argparse
import logging
import os
import re
import sys

from .core.errors import MathdokuError
from .core.validator import validate
from .game.loader import load_puzzle_file, to_text
from .game.session import GameSession
from .generator import MathdokuGenerator
from .solvers import BacktrackingSolver


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Mathdoku Puzzle Generator & Backtracking Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 puzzles of size 6
  python -m mathdoku.cli generate --size 6 --count 3

  # Solve a puzzle definition file
  python -m mathdoku.cli solve puzzles/puzzle_1.txt --verbose

  # Check a filled board against a definition
  python -m mathdoku.cli check puzzle.txt --values "1 2 3, 2 3 1, 3 1 2"

  # Time the solver on generated boards
  python -m mathdoku.cli benchmark --sizes 3 4 5 --puzzles 5 --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate Mathdoku puzzles")
    gen_parser.add_argument(
        "--size", "-n", type=int, default=6,
        help="Board size, 2-9 (default: 6)"
    )
    gen_parser.add_argument(
        "--count", "-c", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--output", "-o", type=str, default=None,
        help="Directory to save puzzle definition files"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a puzzle definition file")
    solve_parser.add_argument("file", help="Puzzle definition file")
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check values against a puzzle")
    check_parser.add_argument("file", help="Puzzle definition file")
    check_parser.add_argument(
        "--values", required=True,
        help="Row-major cell values separated by spaces or commas, 0 for empty"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run solver benchmarks")
    bench_parser.add_argument(
        "--sizes", type=int, nargs="+", default=[3, 4, 5],
        help="Board sizes to benchmark (default: 3 4 5)"
    )
    bench_parser.add_argument(
        "--puzzles", "-n", type=int, default=5,
        help="Puzzles per size (default: 5)"
    )
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--seed", "-s", type=int, default=42,
        help="Random seed for reproducibility (default: 42)"
    )
    bench_parser.add_argument(
        "--timeout", type=float, default=60.0,
        help="Seconds allowed per puzzle (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "generate": cmd_generate,
        "solve": cmd_solve,
        "check": cmd_check,
        "benchmark": cmd_benchmark,
    }

    try:
        commands[args.command](args)
    except MathdokuError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    generator = MathdokuGenerator(seed=args.seed)

    try:
        puzzles = generator.generate_batch(args.count, args.size)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for i, puzzle in enumerate(puzzles, 1):
        print(f"\n--- Puzzle {i} ({args.size}x{args.size}, {len(puzzle.cages)} cages) ---")
        print(to_text(puzzle), end="")
        print(puzzle.board)

    if args.output:
        paths = MathdokuGenerator.save_to_folder(puzzles, args.output)
        print(f"\nPuzzles saved to {os.path.dirname(paths[0]) or '.'}/")

    print(f"\nTotal puzzles generated: {len(puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    session = GameSession()
    stats = session.load_file(args.file)

    print("Input puzzle:")
    print(to_text(session.puzzle), end="")
    print()

    session.solve()
    print(f"✓ Solved in {stats.time_seconds:.4f}s")
    if args.verbose:
        print(f"  Iterations: {stats.iterations:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Nodes explored: {stats.nodes_explored:,}")
    print(session.board)


def cmd_check(args):
    """Handle the check command."""
    puzzle = load_puzzle_file(args.file)

    tokens = [token for token in re.split(r"[\s,]+", args.values) if token]
    if not all(token.isdecimal() for token in tokens):
        print("Error: every value must be an integer")
        sys.exit(1)

    values = [int(token) for token in tokens]
    if len(values) != puzzle.size * puzzle.size:
        print(f"Error: expected {puzzle.size * puzzle.size} values, got {len(values)}")
        sys.exit(1)

    for index, value in enumerate(values):
        row, col = divmod(index, puzzle.size)
        try:
            puzzle.board.set(row, col, value)
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)

    report = validate(puzzle)
    print(puzzle.board)
    print()

    for row, cols in report.incorrect_rows.items():
        print(f"✗ Row {row + 1}: duplicates in columns {[c + 1 for c in cols]}")
    for col, rows in report.incorrect_columns.items():
        print(f"✗ Column {col + 1}: duplicates in rows {[r + 1 for r in rows]}")
    for cage in report.incorrect_cages:
        cell_ids = [row * puzzle.size + col + 1 for row, col in sorted(cage.cells)]
        print(f"✗ Cage {puzzle.label_for(cage)} {cell_ids}: target not reached")

    if report.is_won:
        print("✓ Solved!")
    elif report.is_correct:
        print(f"No mistakes so far ({puzzle.board.count_empty()} cells empty)")


def cmd_benchmark(args):
    """Handle the benchmark command."""
    from .benchmark import Benchmark
    from .benchmark.visualizer import Visualizer

    print("=" * 60)
    print("MATHDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles per size: {args.puzzles}")
    print(f"Sizes: {args.sizes}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(
        sizes=args.sizes,
        puzzles_per_size=args.puzzles,
        solver=BacktrackingSolver(track_memory=True),
        timeout_seconds=args.timeout,
        seed=args.seed
    )

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)
    for size, stats in summary["results_by_size"].items():
        print(f"\n{size}x{size}:")
        print(f"  Solved: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Iterations: {stats['avg_iterations']:,.0f}")
        print(f"  Avg Cage Size: {stats['avg_cage_size']:.2f}")

    benchmark.save_results(args.output)

    if not args.no_charts:
        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {os.path.basename(chart)}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")


if __name__ == "__main__":
    main()
