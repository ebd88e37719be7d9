"""
Grid module for the minefield.

Implements the square grid with mine placement, adjacency counts,
cascading discovery and end-of-game evaluation.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

import numpy as np

from .actions import Action, ActionType, Coordinates
from .cell import Cell

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


class InvalidCoordinatesError(IndexError):
    """Raised when an action addresses a cell outside the grid."""

    def __init__(self, row: int, column: int, size: int) -> None:
        super().__init__(
            f"No cell at ({row}, {column}) on a {size}x{size} grid"
        )
        self.row = row
        self.column = column
        self.size = size


@dataclass(frozen=True)
class GridConfig:
    """
    Configuration for a square minefield.

    Attributes:
        size: Number of rows and columns.
        num_mines: Total mines to place.
    """

    size: int = 10
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Grid size must be positive")
        if self.num_mines < 1:
            raise ValueError("Number of mines must be positive")
        max_mines = self.size * self.size - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# Preset difficulty levels
EASY = GridConfig(10, 10)
MEDIUM = GridConfig(18, 40)
HARD = GridConfig(24, 99)


class Difficulty(Enum):
    """Named difficulty presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> GridConfig:
        return _PRESETS[self]


_PRESETS = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}


def resolve_config(config: Union[GridConfig, Difficulty, str, None]) -> GridConfig:
    """Accept a config, a Difficulty or its name and return a GridConfig."""
    if config is None:
        return EASY
    if isinstance(config, GridConfig):
        return config
    if isinstance(config, str):
        config = Difficulty(config.lower())
    return config.config


# ============================================================================
# Grid Class
# ============================================================================

@dataclass
class Grid:
    """
    Square Minesweeper grid.

    Owns the cell matrix. Cell states only change through
    perform_action; the size and mine count never change.
    """

    config: Union[GridConfig, Difficulty, str] = EASY
    seed: Optional[int] = None
    mines: Optional[FrozenSet[Tuple[int, int]]] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False, init=False)
    _safe_discovered: int = field(default=0, init=False)
    _marked: int = field(default=0, init=False)
    _mine_discovered: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Build the cells, then place mines and compute counts."""
        self.config = resolve_config(self.config)
        self._init_grid()
        if self.mines is None:
            self._place_mines(np.random.default_rng(self.seed))
        else:
            self._place_given_mines(self.mines)
        self._calculate_adjacent_mines()

    @classmethod
    def from_mine_positions(
        cls, size: int, positions: Iterable[Tuple[int, int]]
    ) -> "Grid":
        """
        Build a grid with a fixed mine layout.

        Args:
            size: Number of rows and columns.
            positions: (row, col) of every mine.
        """
        mines = frozenset((int(r), int(c)) for r, c in positions)
        return cls(GridConfig(size, len(mines)), mines=mines)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a matrix of covered, mine-free cells."""
        self._grid = [
            [Cell() for _ in range(self.config.size)]
            for _ in range(self.config.size)
        ]

    def _place_mines(self, rng: np.random.Generator) -> None:
        """
        Place exactly num_mines mines in a single row-major pass.

        Each cell gets a mine with probability remaining_mines /
        remaining_cells, which samples uniformly without rejection.
        """
        remaining_mines = self.config.num_mines
        remaining_cells = self.num_cells
        for row in range(self.config.size):
            for col in range(self.config.size):
                if rng.random() < remaining_mines / remaining_cells:
                    self._grid[row][col].is_mine = True
                    remaining_mines -= 1
                remaining_cells -= 1

    def _place_given_mines(self, mines: FrozenSet[Tuple[int, int]]) -> None:
        """Place a fixed layout; it must match the configured mine count."""
        if len(mines) != self.config.num_mines:
            raise ValueError(
                f"Layout has {len(mines)} mines, expected {self.config.num_mines}"
            )
        for row, col in mines:
            if not self._is_valid_position(row, col):
                raise InvalidCoordinatesError(row, col, self.config.size)
            self._grid[row][col].is_mine = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.size):
            for col in range(self.config.size):
                self._grid[row][col].adjacent_mines = self._count_adjacent_mines(
                    row, col
                )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get the Moore neighbourhood of a cell, clipped at the edges.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.config.size and 0 <= col < self.config.size

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def perform_action(self, action: Action) -> bool:
        """
        Apply a discover or mark action.

        Actions are accepted after the game has ended so that remaining
        mines can still be marked.

        Args:
            action: The move to apply.

        Returns:
            True if at least one cell changed state.

        Raises:
            InvalidCoordinatesError: If the coordinates are off the grid.
        """
        row, col = action.coordinates
        if not self._is_valid_position(row, col):
            raise InvalidCoordinatesError(row, col, self.config.size)

        if action.type == ActionType.DISCOVER:
            return self._discover(row, col)
        return self._toggle_mark(row, col)

    def _discover(self, row: int, col: int) -> bool:
        """Discover one cell and cascade through zero-count cells."""
        cell = self._grid[row][col]
        if not cell.discover():
            return False
        self._record_discovery(cell)

        if cell.is_mine:
            logger.debug("Mine discovered at (%d, %d)", row, col)
        elif cell.adjacent_mines == 0:
            self._cascade(row, col)
        return True

    def _cascade(self, row: int, col: int) -> None:
        """
        Discover every covered safe cell reachable through zero-count cells.

        Uses an explicit work-list so large openings do not grow the
        call stack. Marked cells are left alone.
        """
        pending: Deque[Tuple[int, int]] = deque([(row, col)])
        visited: Set[Tuple[int, int]] = {(row, col)}

        while pending:
            current_row, current_col = pending.popleft()
            for neighbor_row, neighbor_col in self.neighbors(current_row, current_col):
                if (neighbor_row, neighbor_col) in visited:
                    continue
                visited.add((neighbor_row, neighbor_col))

                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_mine or not neighbor.discover():
                    continue
                self._record_discovery(neighbor)
                if neighbor.adjacent_mines == 0:
                    pending.append((neighbor_row, neighbor_col))

    def _record_discovery(self, cell: Cell) -> None:
        if cell.is_mine:
            self._mine_discovered = True
        else:
            self._safe_discovered += 1

    def _toggle_mark(self, row: int, col: int) -> bool:
        """Toggle the mark on a covered or marked cell."""
        cell = self._grid[row][col]
        if not cell.toggle_mark():
            return False
        self._marked += 1 if cell.is_marked else -1
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def num_mines(self) -> int:
        return self.config.num_mines

    @property
    def num_cells(self) -> int:
        return self.config.size * self.config.size

    @property
    def cells(self) -> Tuple[Tuple[Cell, ...], ...]:
        """
        Snapshot of the cell matrix.

        The cells are the live objects; callers must not mutate them, as
        the end-state queries read counters kept by perform_action.
        """
        return tuple(tuple(row) for row in self._grid)

    @property
    def mines_remaining(self) -> int:
        """Total mines minus marked cells (can go negative)."""
        return self.config.num_mines - self._marked

    @property
    def is_win(self) -> bool:
        """Every safe cell discovered and no mine discovered."""
        return (
            not self._mine_discovered
            and self._safe_discovered == self.num_cells - self.config.num_mines
        )

    @property
    def is_loose(self) -> bool:
        """A mine has been discovered."""
        return self._mine_discovered

    @property
    def is_lost(self) -> bool:
        return self._mine_discovered

    @property
    def is_end(self) -> bool:
        return self.is_win or self.is_loose

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        if self.is_loose:
            return GameState.LOST
        if self.is_win:
            return GameState.WON
        return GameState.PLAYING

    @property
    def discovered_count(self) -> int:
        """Number of discovered cells, mines included."""
        return self._safe_discovered + int(self._mine_discovered)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get what a player may legally see of the grid.

        Returns:
            2D int8 array where:
                -1 = covered
                -2 = marked
                0-8 = discovered with adjacent count
                9 = discovered mine
        """
        obs = np.zeros((self.config.size, self.config.size), dtype=np.int8)
        for row in range(self.config.size):
            for col in range(self.config.size):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def covered_positions(self) -> List[Coordinates]:
        """All covered cells in row-major order."""
        return [
            Coordinates(row, col)
            for row in range(self.config.size)
            for col in range(self.config.size)
            if self._grid[row][col].is_covered
        ]
