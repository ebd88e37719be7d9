"""
Heuristic bot for Minesweeper.

Plays certain moves found from single-cell constraints and, when
none exist, discovers the covered cell with the lowest estimated
mine probability.
"""
import logging
from typing import Optional

import numpy as np

from minefield import Action

from .base_bot import BaseBot

logger = logging.getLogger(__name__)


# ============================================================================
# Heuristic Bot
# ============================================================================

class HeuristicBot(BaseBot):
    """
    Bot combining local deduction with a greedy risk estimate.

    Strategy:
        1. For each discovered number (row-major), if its marks already
           account for every adjacent mine, its covered neighbours are
           safe; if its covered neighbours are exactly the missing mines,
           they are all mines. The first hit is played.
        2. Otherwise estimate, for each covered cell, the share of mines
           still expected by its discovered neighbours, and discover the
           cell with the lowest estimate.

    The estimate treats each cell independently and does not combine
    overlapping constraints, so it can pick a cell a full constraint
    solver would know to be riskier.
    """

    def select_action(self) -> Optional[Action]:
        action = self.find_safe_action()
        if action is not None:
            self.safe_moves += 1
            return action

        action = self.find_least_risky_action()
        if action is not None:
            self.guesses += 1
        return action

    # ========================================================================
    # Deduction
    # ========================================================================

    def find_safe_action(self) -> Optional[Action]:
        """
        Find a move that is certain from one discovered number.

        Returns:
            Discover or mark on the first covered neighbour of the first
            conclusive number, or None.
        """
        known = self.known
        for row, col in known.numbered_positions():
            count = known.count(row, col)
            covered = known.covered_neighbors(row, col)
            if not covered:
                continue

            marked = known.marked_neighbors(row, col)
            if len(marked) == count:
                return Action.discover(*covered[0])
            if len(covered) == count - len(marked):
                return Action.mark(*covered[0])
        return None

    # ========================================================================
    # Probability Fallback
    # ========================================================================

    def default_probability(self) -> float:
        """Base rate used for covered cells with no discovered neighbour."""
        covered = self.known.covered_count
        if covered == 0:
            return 0.0
        return (self.known.mines_remaining - self.known.marked_count) / covered

    def cell_probability(self, row: int, col: int, default: float) -> float:
        """
        Estimate the chance that a covered cell holds a mine.

        Sums, over discovered neighbours with a known count, the mines
        they still miss and the covered cells they touch.
        """
        known = self.known
        total_mines = 0
        total_possible = 0
        for neighbor_row, neighbor_col in known.neighbors(row, col):
            count = known.count(neighbor_row, neighbor_col)
            if count is None:
                continue
            marked = len(known.marked_neighbors(neighbor_row, neighbor_col))
            total_mines += max(0, count - marked)
            total_possible += len(known.covered_neighbors(neighbor_row, neighbor_col))

        if total_possible > 0:
            return total_mines / total_possible
        return default

    def mine_probabilities(self) -> np.ndarray:
        """
        Estimated mine probability for every cell.

        Returns:
            Float matrix with NaN for cells that are not covered.
        """
        probabilities = np.full((self.known.size, self.known.size), np.nan)
        default = self.default_probability()
        for row, col in self.known.covered_positions():
            probabilities[row, col] = self.cell_probability(row, col, default)
        return probabilities

    def find_least_risky_action(self) -> Optional[Action]:
        """
        Discover the covered cell with the lowest estimate.

        Ties go to the first cell in row-major order.
        """
        probabilities = self.mine_probabilities()
        if np.all(np.isnan(probabilities)):
            return None

        index = int(np.nanargmin(probabilities))
        row, col = divmod(index, self.known.size)
        logger.debug(
            "Guessing (%d, %d) with estimated risk %.3f",
            row,
            col,
            probabilities[row, col],
        )
        return Action.discover(row, col)
