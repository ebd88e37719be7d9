"""
Benchmark module for Minesweeper bots.

Runs many independent games in parallel and aggregates outcomes.
"""
import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from minefield import Difficulty, GridConfig, resolve_config
from bots import BaseBot, HeuristicBot, SolveOutcome, SolveResult

logger = logging.getLogger(__name__)

BotFactory = Callable[..., BaseBot]


# ============================================================================
# Benchmark Configuration
# ============================================================================

@dataclass
class BenchmarkConfig:
    """Configuration for a batch of games."""

    # Grid settings
    grid: Union[GridConfig, Difficulty, str] = Difficulty.EASY

    # Batch settings
    num_games: int = 100
    workers: int = 4
    seed: Optional[int] = None

    # Pacing (0 for pure benchmarking)
    delay: float = 0.0

    # Logging
    log_frequency: int = 100

    def __post_init__(self) -> None:
        self.grid = resolve_config(self.grid)
        if self.num_games < 1:
            raise ValueError("Number of games must be positive")
        if self.workers < 1:
            raise ValueError("Number of workers must be positive")
        if self.delay < 0:
            raise ValueError("Delay cannot be negative")
        if self.log_frequency < 1:
            raise ValueError("Log frequency must be positive")

    def game_seed(self, index: int) -> Optional[int]:
        """Seed for the index-th game, or None for unseeded runs."""
        if self.seed is None:
            return None
        return self.seed + index


# ============================================================================
# Benchmark Statistics
# ============================================================================

@dataclass
class GameRecord:
    """Result of a single game in a batch."""

    index: int
    seed: Optional[int]
    outcome: SolveOutcome
    elapsed: float
    moves: int
    guesses: int
    revealed: int

    @classmethod
    def from_result(
        cls, index: int, seed: Optional[int], result: SolveResult
    ) -> "GameRecord":
        return cls(
            index=index,
            seed=seed,
            outcome=result.outcome,
            elapsed=result.elapsed,
            moves=len(result.history),
            guesses=result.guesses,
            revealed=result.revealed,
        )


@dataclass
class BenchmarkStats:
    """Accumulated batch statistics."""

    records: List[GameRecord] = field(default_factory=list)

    def _count(self, outcome: SolveOutcome) -> int:
        return sum(1 for record in self.records if record.outcome == outcome)

    @property
    def games(self) -> int:
        return len(self.records)

    @property
    def wins(self) -> int:
        return self._count(SolveOutcome.WON)

    @property
    def losses(self) -> int:
        return self._count(SolveOutcome.LOST)

    @property
    def stalled(self) -> int:
        return self._count(SolveOutcome.STALLED)

    @property
    def cancelled(self) -> int:
        return self._count(SolveOutcome.CANCELLED)

    @property
    def win_rate(self) -> float:
        """Wins over games played (0 when nothing ran)."""
        if not self.records:
            return 0.0
        return self.wins / self.games

    @property
    def avg_elapsed(self) -> float:
        if not self.records:
            return 0.0
        return sum(record.elapsed for record in self.records) / self.games

    @property
    def avg_guesses(self) -> float:
        if not self.records:
            return 0.0
        return sum(record.guesses for record in self.records) / self.games

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "stalled": self.stalled,
            "cancelled": self.cancelled,
            "win_rate": self.win_rate,
            "avg_elapsed": self.avg_elapsed,
            "avg_guesses": self.avg_guesses,
        }

    def save(self, path: Union[str, Path]) -> None:
        """Save statistics to JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


# ============================================================================
# Runner
# ============================================================================

def _play_one(
    config: BenchmarkConfig,
    bot_factory: BotFactory,
    index: int,
    stop_event: threading.Event,
) -> GameRecord:
    """Build a fresh grid and bot, solve, and record the outcome."""
    seed = config.game_seed(index)
    bot = bot_factory(
        config.grid, seed=seed, delay=config.delay, stop_event=stop_event
    )
    return GameRecord.from_result(index, seed, bot.solve())


def run_games(
    config: BenchmarkConfig,
    bot_factory: BotFactory = HeuristicBot,
    stop_event: Optional[threading.Event] = None,
) -> BenchmarkStats:
    """
    Play config.num_games independent games on a thread pool.

    Games share nothing but the stop event, so setting it cancels the
    whole batch cooperatively.

    Args:
        config: Batch configuration.
        bot_factory: Bot class (or callable with the same signature).
        stop_event: Optional flag to cancel every game.

    Returns:
        Statistics with one record per game, in game order.
    """
    stop_event = stop_event or threading.Event()
    stats = BenchmarkStats()

    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = [
            executor.submit(_play_one, config, bot_factory, index, stop_event)
            for index in range(config.num_games)
        ]
        for done, future in enumerate(futures, start=1):
            stats.records.append(future.result())
            if done % config.log_frequency == 0:
                logger.info(
                    "Game %d/%d | Win Rate: %.1f%%",
                    done,
                    config.num_games,
                    100 * stats.win_rate,
                )

    return stats


def compare_bots(
    config: BenchmarkConfig, bots: Dict[str, BotFactory]
) -> Dict[str, BenchmarkStats]:
    """
    Run the same batch (same seeds) for several bots.

    Args:
        config: Batch configuration shared by every bot.
        bots: Dictionary of bot_name -> factory.

    Returns:
        Dictionary of bot_name -> statistics.
    """
    results = {}
    for name, factory in bots.items():
        logger.info("Evaluating %s...", name)
        results[name] = run_games(config, factory)
    return results
