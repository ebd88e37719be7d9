"""
The bot's knowledge of the grid.

A KnownGrid only ever receives observations (covered / marked /
discovered count), never mine positions, so any bot built on it plays
by the same rules as a human.
"""
from typing import List, Optional

import numpy as np

from minefield import CellState, Coordinates, Grid
from minefield.cell import OBS_COVERED, OBS_MARKED, OBS_MINE


# ============================================================================
# Known Grid
# ============================================================================

class KnownGrid:
    """
    Partial view of a grid made of legal observations.

    Observation encoding:
        -1 = covered
        -2 = marked
        0-8 = discovered with adjacent mine count
        9 = discovered mine
    """

    def __init__(self, size: int, total_mines: int) -> None:
        """
        Initialize an all-covered view.

        Args:
            size: Number of rows and columns of the grid.
            total_mines: Mine count announced for the grid.
        """
        self.size = size
        self.total_mines = total_mines
        self.mines_remaining = total_mines
        self._obs = np.full((size, size), OBS_COVERED, dtype=np.int8)

    @classmethod
    def from_observation(
        cls,
        observation: np.ndarray,
        total_mines: int,
        mines_remaining: Optional[int] = None,
    ) -> "KnownGrid":
        """Build a view directly from an observation matrix."""
        known = cls(observation.shape[0], total_mines)
        known.update(observation, mines_remaining)
        return known

    # ========================================================================
    # Synchronisation
    # ========================================================================

    def sync(self, grid: Grid) -> None:
        """Pull the latest observation and mine counter from the grid."""
        self.update(grid.get_observation(), grid.mines_remaining)

    def update(
        self, observation: np.ndarray, mines_remaining: Optional[int] = None
    ) -> None:
        """
        Replace the known state.

        Args:
            observation: Square int8 observation matrix.
            mines_remaining: Announced mines minus marks; derived from the
                observation when omitted.
        """
        if observation.shape != self._obs.shape:
            raise ValueError(
                f"Observation shape {observation.shape} does not match "
                f"{self._obs.shape}"
            )
        self._obs[...] = observation
        if mines_remaining is None:
            mines_remaining = self.total_mines - self.marked_count
        self.mines_remaining = mines_remaining

    # ========================================================================
    # Cell Queries
    # ========================================================================

    @property
    def observation(self) -> np.ndarray:
        """Read-only copy of the observation matrix."""
        obs = self._obs.copy()
        obs.setflags(write=False)
        return obs

    def state(self, row: int, col: int) -> CellState:
        value = self._obs[row, col]
        if value == OBS_COVERED:
            return CellState.COVERED
        if value == OBS_MARKED:
            return CellState.MARKED
        return CellState.DISCOVERED

    def count(self, row: int, col: int) -> Optional[int]:
        """Adjacent mine count of a discovered safe cell, else None."""
        value = int(self._obs[row, col])
        if 0 <= value < OBS_MINE:
            return value
        return None

    def is_covered(self, row: int, col: int) -> bool:
        return self._obs[row, col] == OBS_COVERED

    def is_marked(self, row: int, col: int) -> bool:
        return self._obs[row, col] == OBS_MARKED

    def neighbors(self, row: int, col: int) -> List[Coordinates]:
        """Moore neighbourhood of a cell in row-major order."""
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row, new_col = row + delta_row, col + delta_col
                if 0 <= new_row < self.size and 0 <= new_col < self.size:
                    neighbors.append(Coordinates(new_row, new_col))
        return neighbors

    def covered_neighbors(self, row: int, col: int) -> List[Coordinates]:
        return [n for n in self.neighbors(row, col) if self.is_covered(*n)]

    def marked_neighbors(self, row: int, col: int) -> List[Coordinates]:
        return [n for n in self.neighbors(row, col) if self.is_marked(*n)]

    # ========================================================================
    # Whole-grid Queries
    # ========================================================================

    @property
    def covered_count(self) -> int:
        return int(np.count_nonzero(self._obs == OBS_COVERED))

    @property
    def marked_count(self) -> int:
        return int(np.count_nonzero(self._obs == OBS_MARKED))

    def covered_positions(self) -> List[Coordinates]:
        """Covered cells in row-major order."""
        rows, cols = np.nonzero(self._obs == OBS_COVERED)
        return [Coordinates(int(r), int(c)) for r, c in zip(rows, cols)]

    def numbered_positions(self) -> List[Coordinates]:
        """Discovered safe cells (known count) in row-major order."""
        mask = (self._obs >= 0) & (self._obs < OBS_MINE)
        rows, cols = np.nonzero(mask)
        return [Coordinates(int(r), int(c)) for r, c in zip(rows, cols)]
