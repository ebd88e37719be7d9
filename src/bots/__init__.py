"""
Minesweeper bots module.

Provides bots that play a grid through its observations only:
- KnownGrid: The bot's legally observed view of the grid
- BaseBot: Shared solve loop with cancellation and history
- HeuristicBot: Local deduction plus lowest-risk guessing
- RandomBot: Baseline random selection
"""
from .known_grid import KnownGrid
from .base_bot import BaseBot, SolveOutcome, SolveResult
from .heuristic_bot import HeuristicBot
from .random_bot import RandomBot

__all__ = [
    "KnownGrid",
    "BaseBot",
    "SolveOutcome",
    "SolveResult",
    "HeuristicBot",
    "RandomBot",
]
