"""
Cell module for the minefield.

Represents a single square of the grid: whether it holds a mine,
whether it is covered, marked or discovered, and how many mines
surround it.
"""
from enum import Enum
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visible states of a cell."""

    COVERED = "covered"
    MARKED = "marked"
    DISCOVERED = "discovered"


# Observation encoding shared by the grid and the bots
OBS_COVERED = -1
OBS_MARKED = -2
OBS_MINE = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in the Moore neighbourhood (0-8).
        state: Current visible state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.COVERED

    def discover(self) -> bool:
        """
        Discover this cell.

        Marked cells must be unmarked first.

        Returns:
            True if the cell went from covered to discovered.
        """
        if self.state != CellState.COVERED:
            return False
        self.state = CellState.DISCOVERED
        return True

    def toggle_mark(self) -> bool:
        """
        Toggle the mark on this cell.

        Returns:
            True if the mark was toggled, False if cell is discovered.
        """
        if self.state == CellState.DISCOVERED:
            return False
        if self.state == CellState.COVERED:
            self.state = CellState.MARKED
        else:
            self.state = CellState.COVERED
        return True

    @property
    def is_covered(self) -> bool:
        """Check if cell is covered."""
        return self.state == CellState.COVERED

    @property
    def is_discovered(self) -> bool:
        """Check if cell is discovered."""
        return self.state == CellState.DISCOVERED

    @property
    def is_marked(self) -> bool:
        """Check if cell is marked."""
        return self.state == CellState.MARKED

    def to_observation(self) -> int:
        """
        Convert cell to what a player is allowed to see.

        Returns:
            -1: Covered cell
            -2: Marked cell
            0-8: Discovered cell with adjacent mine count
            9: Discovered mine (game lost)
        """
        if self.state == CellState.COVERED:
            return OBS_COVERED
        if self.state == CellState.MARKED:
            return OBS_MARKED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines
