"""
Unit tests for Grid class.

Tests configuration, mine placement, cascading discovery, marking,
bounds checking, win/lose conditions and observations.
"""
import pytest
import numpy as np
from minefield import (
    Action,
    ActionType,
    CellState,
    Coordinates,
    Difficulty,
    EASY,
    GameState,
    Grid,
    GridConfig,
    HARD,
    InvalidCoordinatesError,
    MEDIUM,
    resolve_config,
)


def _mine_count(grid: Grid) -> int:
    return sum(cell.is_mine for row in grid.cells for cell in row)


# ============================================================================
# Grid Configuration Tests
# ============================================================================

class TestGridConfig:
    """Test grid configuration validation."""

    def test_valid_config_creation(self, valid_config: GridConfig) -> None:
        """Valid configuration should be created successfully."""
        assert valid_config.size == 10
        assert valid_config.num_mines == 10

    def test_zero_size_raises_error(self) -> None:
        """Size of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="size must be positive"):
            GridConfig(0, 1)

    def test_zero_mines_raises_error(self) -> None:
        """A grid needs at least one mine."""
        with pytest.raises(ValueError, match="must be positive"):
            GridConfig(5, 0)

    def test_full_grid_of_mines_raises_error(self) -> None:
        """Mines must leave at least one safe cell."""
        with pytest.raises(ValueError, match="Too many mines"):
            GridConfig(3, 9)

    def test_max_mines_is_valid(self) -> None:
        """size² - 1 mines should be accepted."""
        assert GridConfig(3, 8).num_mines == 8

    def test_presets(self) -> None:
        """Difficulty presets map to the documented sizes."""
        assert Difficulty.EASY.config == EASY == GridConfig(10, 10)
        assert Difficulty.MEDIUM.config == MEDIUM == GridConfig(18, 40)
        assert Difficulty.HARD.config == HARD == GridConfig(24, 99)

    def test_resolve_config_accepts_names(self) -> None:
        """Preset names resolve case-insensitively."""
        assert resolve_config("Medium") == MEDIUM
        assert resolve_config(Difficulty.HARD) == HARD
        assert resolve_config(None) == EASY

    def test_presets_are_immutable(self) -> None:
        """Preset configs cannot be modified."""
        with pytest.raises(AttributeError):
            EASY.size = 3


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test random mine placement and adjacency counts."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    @pytest.mark.parametrize("seed", range(5))
    def test_exact_mine_count(self, difficulty: Difficulty, seed: int) -> None:
        """Every generated grid has exactly the configured mines."""
        grid = Grid(difficulty, seed=seed)
        assert grid.size == difficulty.config.size
        assert _mine_count(grid) == difficulty.config.num_mines

    def test_unseeded_grids_have_exact_mine_count(self) -> None:
        """Placement never over- or under-fills, seed or not."""
        for _ in range(50):
            assert _mine_count(Grid(GridConfig(4, 15))) == 15

    def test_same_seed_same_layout(self) -> None:
        """Seeded placement is reproducible."""
        first = Grid(MEDIUM, seed=42)
        second = Grid(MEDIUM, seed=42)
        layout = [[cell.is_mine for cell in row] for row in first.cells]
        assert layout == [[cell.is_mine for cell in row] for row in second.cells]

    @pytest.mark.parametrize("seed", range(5))
    def test_adjacency_counts(self, seed: int) -> None:
        """Each count matches an independent Moore neighbourhood count."""
        grid = Grid(MEDIUM, seed=seed)
        mines = np.array([[cell.is_mine for cell in row] for row in grid.cells])
        padded = np.pad(mines.astype(int), 1)
        for row in range(grid.size):
            for col in range(grid.size):
                window = padded[row:row + 3, col:col + 3]
                expected = int(window.sum()) - int(mines[row, col])
                assert grid.get_cell(row, col).adjacent_mines == expected

    def test_from_mine_positions(self, wall_grid: Grid) -> None:
        """Fixed layouts place mines exactly where asked."""
        assert wall_grid.num_mines == 5
        assert all(wall_grid.get_cell(row, 2).is_mine for row in range(5))
        assert wall_grid.get_cell(2, 1).adjacent_mines == 3
        assert wall_grid.get_cell(0, 1).adjacent_mines == 2

    def test_from_mine_positions_out_of_bounds(self) -> None:
        """A mine off the grid is rejected."""
        with pytest.raises(InvalidCoordinatesError):
            Grid.from_mine_positions(3, [(3, 0)])

    def test_layout_must_match_mine_count(self) -> None:
        """A fixed layout with the wrong number of mines is rejected."""
        with pytest.raises(ValueError, match="Layout has 1 mines, expected 3"):
            Grid(GridConfig(5, 3), mines=frozenset({(4, 4)}))

    def test_layout_matching_mine_count_can_be_won(self) -> None:
        """A layout given with its config wins once every safe cell is open."""
        grid = Grid(GridConfig(3, 1), mines=frozenset({(2, 2)}))
        grid.perform_action(Action.discover(0, 0))
        assert grid.is_win is True
        assert grid.mines_remaining == 1

    def test_cells_are_the_live_cells(self, default_grid: Grid) -> None:
        """The snapshot is immutable in shape and shares the grid's cells."""
        cells = default_grid.cells
        assert isinstance(cells, tuple)
        assert all(isinstance(row, tuple) for row in cells)
        assert cells[3][4] is default_grid.get_cell(3, 4)


# ============================================================================
# Discover Tests
# ============================================================================

class TestDiscover:
    """Test discovering and cascading."""

    def test_new_grid_all_cells_covered(self, default_grid: Grid) -> None:
        """All cells should be covered on a new grid."""
        assert all(cell.is_covered for row in default_grid.cells for cell in row)
        assert default_grid.game_state == GameState.PLAYING

    def test_discover_numbered_cell_does_not_cascade(self) -> None:
        """A cell with adjacent mines reveals only itself."""
        grid = Grid.from_mine_positions(5, [(2, 2)])
        assert grid.perform_action(Action.discover(1, 1)) is True
        assert grid.discovered_count == 1

    def test_zero_cell_cascades_to_neighbors(self, corner_mine_grid: Grid) -> None:
        """Discovering a zero cell opens every connected safe cell."""
        corner_mine_grid.perform_action(Action.discover(0, 0))
        for row in range(5):
            for col in range(5):
                cell = corner_mine_grid.get_cell(row, col)
                assert cell.is_discovered is (not cell.is_mine)

    def test_cascade_stops_at_numbered_cells(self, wall_grid: Grid) -> None:
        """The opening spreads up to numbered cells and not past them."""
        wall_grid.perform_action(Action.discover(0, 0))
        for row in range(5):
            assert wall_grid.get_cell(row, 0).is_discovered
            assert wall_grid.get_cell(row, 1).is_discovered
            for col in (2, 3, 4):
                assert wall_grid.get_cell(row, col).is_covered

    def test_cascade_skips_marked_cells(self, corner_mine_grid: Grid) -> None:
        """Marked safe cells stay marked during a cascade."""
        corner_mine_grid.perform_action(Action.mark(0, 4))
        corner_mine_grid.perform_action(Action.discover(0, 0))
        assert corner_mine_grid.get_cell(0, 4).is_marked
        assert corner_mine_grid.is_win is False

    def test_discover_marked_cell_is_noop(self, default_grid: Grid) -> None:
        """Discovering a marked cell changes nothing."""
        default_grid.perform_action(Action.mark(3, 3))
        assert default_grid.perform_action(Action.discover(3, 3)) is False
        assert default_grid.get_cell(3, 3).state == CellState.MARKED

    def test_discover_twice_is_noop(self, wall_grid: Grid) -> None:
        """Rediscovering a cell reports no change."""
        wall_grid.perform_action(Action.discover(0, 0))
        assert wall_grid.perform_action(Action.discover(0, 0)) is False


# ============================================================================
# Mark Tests
# ============================================================================

class TestMark:
    """Test marking behavior."""

    def test_mark_toggles(self, default_grid: Grid) -> None:
        """Mark then mark again returns to covered."""
        default_grid.perform_action(Action.mark(0, 0))
        assert default_grid.get_cell(0, 0).is_marked
        default_grid.perform_action(Action.mark(0, 0))
        assert default_grid.get_cell(0, 0).is_covered

    def test_mark_discovered_cell_is_noop(self, wall_grid: Grid) -> None:
        """Marking a discovered cell does nothing."""
        wall_grid.perform_action(Action.discover(0, 0))
        assert wall_grid.perform_action(Action.mark(0, 0)) is False
        assert wall_grid.get_cell(0, 0).is_discovered

    def test_mines_remaining_counts_marks(self, default_grid: Grid) -> None:
        """Each mark lowers the remaining counter, unmarking restores it."""
        default_grid.perform_action(Action.mark(0, 0))
        default_grid.perform_action(Action.mark(0, 1))
        assert default_grid.mines_remaining == 8
        default_grid.perform_action(Action.mark(0, 1))
        assert default_grid.mines_remaining == 9


# ============================================================================
# Bounds Tests
# ============================================================================

class TestBounds:
    """Test coordinate validation."""

    @pytest.mark.parametrize(
        "row, col", [(-1, 0), (0, -1), (10, 0), (0, 10), (99, 99)]
    )
    @pytest.mark.parametrize("action_type", list(ActionType))
    def test_out_of_range_raises(
        self, default_grid: Grid, row: int, col: int, action_type: ActionType
    ) -> None:
        """Out-of-range actions raise and leave the grid untouched."""
        before = default_grid.get_observation()
        with pytest.raises(InvalidCoordinatesError):
            default_grid.perform_action(Action(Coordinates(row, col), action_type))
        assert np.array_equal(default_grid.get_observation(), before)
        assert default_grid.mines_remaining == default_grid.num_mines

    def test_error_is_an_index_error(self, default_grid: Grid) -> None:
        """Callers can catch it as a plain IndexError."""
        with pytest.raises(IndexError, match=r"\(-1, 0\)"):
            default_grid.perform_action(Action.discover(-1, 0))

    def test_get_cell_invalid_returns_none(self, default_grid: Grid) -> None:
        """Queries outside the grid return None."""
        assert default_grid.get_cell(-1, 0) is None


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_discover_all_safe_cells_wins(self, default_grid: Grid) -> None:
        """Discovering every safe cell wins."""
        for row in range(default_grid.size):
            for col in range(default_grid.size):
                if not default_grid.get_cell(row, col).is_mine:
                    default_grid.perform_action(Action.discover(row, col))
        assert default_grid.is_win is True
        assert default_grid.is_loose is False
        assert default_grid.is_end is True
        assert default_grid.game_state == GameState.WON

    def test_marks_are_not_required_to_win(self, corner_mine_grid: Grid) -> None:
        """Only discovery matters; the last mine can stay covered."""
        corner_mine_grid.perform_action(Action.discover(0, 0))
        assert corner_mine_grid.get_cell(4, 4).is_covered
        assert corner_mine_grid.is_win is True

    def test_marking_mines_alone_does_not_win(self, corner_mine_grid: Grid) -> None:
        """Marking every mine without discovering is not a win."""
        corner_mine_grid.perform_action(Action.mark(4, 4))
        assert corner_mine_grid.is_win is False

    def test_discover_mine_loses(self, default_grid: Grid) -> None:
        """Discovering a mine loses regardless of other cells."""
        row, col = next(
            (r, c)
            for r in range(default_grid.size)
            for c in range(default_grid.size)
            if default_grid.get_cell(r, c).is_mine
        )
        default_grid.perform_action(Action.discover(row, col))
        assert default_grid.is_loose is True
        assert default_grid.is_lost is True
        assert default_grid.is_win is False
        assert default_grid.game_state == GameState.LOST

    def test_mark_allowed_after_win(self, corner_mine_grid: Grid) -> None:
        """Remaining mines can be flagged once the grid is won."""
        corner_mine_grid.perform_action(Action.discover(0, 0))
        assert corner_mine_grid.perform_action(Action.mark(4, 4)) is True
        assert corner_mine_grid.is_win is True
        assert corner_mine_grid.mines_remaining == 0


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test the player-visible observation matrix."""

    def test_observation_shape_and_dtype(self, default_grid: Grid) -> None:
        """Observation matches the grid size and is int8."""
        obs = default_grid.get_observation()
        assert obs.shape == (10, 10)
        assert obs.dtype == np.int8

    def test_new_grid_observation_all_covered(self, default_grid: Grid) -> None:
        """New grid observation should be all -1."""
        assert np.all(default_grid.get_observation() == -1)

    def test_observation_after_opening(self, wall_grid: Grid) -> None:
        """Discovered cells show counts, covered ones stay -1."""
        wall_grid.perform_action(Action.discover(0, 0))
        wall_grid.perform_action(Action.mark(0, 2))
        obs = wall_grid.get_observation()
        assert obs[0].tolist() == [0, 2, -2, -1, -1]
        assert obs[2].tolist() == [0, 3, -1, -1, -1]

    def test_covered_positions_row_major(self, wall_grid: Grid) -> None:
        """Covered cells are listed row by row."""
        wall_grid.perform_action(Action.discover(0, 0))
        covered = wall_grid.covered_positions()
        assert covered[:3] == [(0, 2), (0, 3), (0, 4)]
        assert len(covered) == 15


# ============================================================================
# Action Tests
# ============================================================================

class TestAction:
    """Test action helpers."""

    def test_constructors(self) -> None:
        """Shortcut constructors fill coordinates and type."""
        assert Action.discover(1, 2) == Action(Coordinates(1, 2), ActionType.DISCOVER)
        assert Action.mark(1, 2).type == ActionType.MARK

    def test_describe_uses_one_based_coordinates(self) -> None:
        """History lines use 1-based coordinates."""
        assert Action.discover(0, 0).describe() == "Discover (1, 1)"
        assert Action.mark(2, 3).describe() == "Mark (3, 4)"
