"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Cell, Grid, GridConfig


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def default_grid() -> Grid:
    """Create a seeded easy grid (10x10 with 10 mines)."""
    return Grid(seed=0)


@pytest.fixture
def corner_mine_grid() -> Grid:
    """5x5 grid whose only mine is in the bottom-right corner."""
    return Grid.from_mine_positions(5, [(4, 4)])


@pytest.fixture
def wall_grid() -> Grid:
    """5x5 grid with a full column of mines in the middle."""
    return Grid.from_mine_positions(5, [(row, 2) for row in range(5)])


@pytest.fixture
def mined_origin_grid() -> Grid:
    """3x3 grid with a mine on the opening cell."""
    return Grid.from_mine_positions(3, [(0, 0)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GridConfig:
    """Create a valid grid configuration."""
    return GridConfig(10, 10)
