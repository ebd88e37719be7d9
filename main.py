#!/usr/bin/env python3
"""
Minesweeper bot - Main entry point.

Usage:
    python main.py solve [--difficulty {easy,medium,hard}] [--seed N] [--show]
    python main.py watch [--delay SECONDS]
    python main.py benchmark [--games N] [--workers W] [--output FILE]
    python main.py compare [--games N]
"""
import argparse
import logging
import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield import ConsoleRenderer, Difficulty, grid_to_text
from bots import HeuristicBot, RandomBot, SolveOutcome
from benchmark import BenchmarkConfig, compare_bots, run_games


OUTCOME_MESSAGES = {
    SolveOutcome.WON: "Won",
    SolveOutcome.LOST: "Lost (hit a mine)",
    SolveOutcome.STALLED: "Could not fully solve the grid",
    SolveOutcome.CANCELLED: "Cancelled",
}


def solve(args: argparse.Namespace) -> None:
    """Solve a single grid and report the outcome."""
    bot = HeuristicBot(args.difficulty, seed=args.seed)
    result = bot.solve()

    print(OUTCOME_MESSAGES[result.outcome])
    print(f"  Time: {result.elapsed * 1000:.1f} ms")
    print(f"  Moves: {len(result.history)} ({result.safe_moves} certain, "
          f"{result.guesses} guesses)")

    if args.show:
        print()
        print(grid_to_text(bot.grid, reveal_mines=True))
    if args.history:
        print()
        for action in result.history:
            print(action.describe())


def watch(args: argparse.Namespace) -> None:
    """Watch the heuristic bot play, one frame per move."""
    renderer = ConsoleRenderer(clear=True)
    bot = HeuristicBot(
        args.difficulty, seed=args.seed, delay=args.delay, renderer=renderer
    )
    renderer.render(bot.grid)

    try:
        result = bot.solve()
    except KeyboardInterrupt:
        bot.stop_solving()
        print("\nStopped.")
        return

    print(f"\n*** {OUTCOME_MESSAGES[result.outcome]} ***")


def benchmark(args: argparse.Namespace) -> None:
    """Play many games in parallel and print aggregate results."""
    config = BenchmarkConfig(
        grid=args.difficulty,
        num_games=args.games,
        workers=args.workers,
        seed=args.seed,
    )

    print(f"Playing {args.games} {args.difficulty.value} games "
          f"on {args.workers} workers...")
    stats = run_games(config)

    print(f"  Win rate: {stats.win_rate:.1%} ({stats.wins}/{stats.games})")
    print(f"  Losses: {stats.losses} | Stalled: {stats.stalled}")
    print(f"  Avg time: {stats.avg_elapsed * 1000:.1f} ms")
    print(f"  Avg guesses: {stats.avg_guesses:.1f}")

    if args.output:
        stats.save(args.output)
        print(f"Stats saved to: {args.output}")


def compare(args: argparse.Namespace) -> None:
    """Compare the heuristic bot with the random baseline."""
    config = BenchmarkConfig(
        grid=args.difficulty,
        num_games=args.games,
        workers=args.workers,
        seed=args.seed,
    )
    results = compare_bots(config, {"Heuristic": HeuristicBot, "Random": RandomBot})

    print("\n" + "=" * 50)
    print("Bot Comparison Results")
    print("=" * 50)
    print(f"{'Bot':<20} {'Win Rate':<12} {'Avg Guesses':<12} {'Avg ms':<10}")
    print("-" * 50)

    for name, stats in results.items():
        print(
            f"{name:<20} {stats.win_rate:>10.1%} "
            f"{stats.avg_guesses:>12.1f} "
            f"{stats.avg_elapsed * 1000:>10.2f}"
        )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper bot - Solve and benchmark grids"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every move"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    def add_grid_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--difficulty",
            type=Difficulty,
            choices=list(Difficulty),
            default=Difficulty.EASY,
            help="Grid preset (easy, medium, hard)",
        )
        sub.add_argument("--seed", type=int, default=None, help="Random seed")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve one grid")
    add_grid_arguments(solve_parser)
    solve_parser.add_argument(
        "--show", action="store_true", help="Print the final grid"
    )
    solve_parser.add_argument(
        "--history", action="store_true", help="Print every move"
    )

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch the bot play")
    add_grid_arguments(watch_parser)
    watch_parser.add_argument(
        "--delay", type=float, default=0.1, help="Seconds between moves"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Play many games")
    add_grid_arguments(bench_parser)
    bench_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    bench_parser.add_argument(
        "--workers", type=int, default=4, help="Parallel games"
    )
    bench_parser.add_argument(
        "--output", type=str, default=None, help="Write stats JSON here"
    )

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare bots")
    add_grid_arguments(compare_parser)
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per bot"
    )
    compare_parser.add_argument(
        "--workers", type=int, default=4, help="Parallel games"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "solve":
        solve(args)
    elif args.command == "watch":
        watch(args)
    elif args.command == "benchmark":
        benchmark(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
