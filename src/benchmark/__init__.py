"""
Benchmark module for Minesweeper bots.

Provides parallel batch runs and bot comparison.
"""
from .runner import (
    BenchmarkConfig,
    GameRecord,
    BenchmarkStats,
    run_games,
    compare_bots,
)

__all__ = [
    "BenchmarkConfig",
    "GameRecord",
    "BenchmarkStats",
    "run_games",
    "compare_bots",
]
