"""
Random bot for Minesweeper.

Serves as a baseline by discovering random covered cells.
"""
from typing import Optional

import numpy as np

from minefield import Action

from .base_bot import BaseBot


# ============================================================================
# Random Bot
# ============================================================================

class RandomBot(BaseBot):
    """
    Bot that discovers a uniformly random covered cell each turn.

    It never marks, so a game only ends in a win or a loss. Useful as a
    baseline for the heuristic bot.
    """

    def __init__(self, *args, choice_seed: Optional[int] = None, **kwargs) -> None:
        """
        Initialize the random bot.

        Args:
            choice_seed: Seed for move selection; defaults to the grid seed.
            *args, **kwargs: Forwarded to BaseBot.
        """
        super().__init__(*args, **kwargs)
        if choice_seed is None:
            choice_seed = kwargs.get("seed")
        self.rng = np.random.default_rng(choice_seed)

    def select_action(self) -> Optional[Action]:
        covered = self.known.covered_positions()
        if not covered:
            return None

        self.guesses += 1
        row, col = covered[int(self.rng.integers(len(covered)))]
        return Action.discover(row, col)
