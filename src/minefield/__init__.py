"""
Minefield module.

Provides the grid model: cells, actions, mine placement, cascading
discovery, end-of-game checks and presentation projections.
"""
from .actions import Action, ActionType, Coordinates
from .cell import Cell, CellState
from .grid import (
    Grid,
    GridConfig,
    GameState,
    Difficulty,
    InvalidCoordinatesError,
    resolve_config,
    EASY,
    MEDIUM,
    HARD,
)
from .render import (
    Renderer,
    NullRenderer,
    ConsoleRenderer,
    HtmlRenderer,
    grid_to_text,
    grid_to_html,
)

__all__ = [
    "Action",
    "ActionType",
    "Coordinates",
    "Cell",
    "CellState",
    "Grid",
    "GridConfig",
    "GameState",
    "Difficulty",
    "InvalidCoordinatesError",
    "resolve_config",
    "EASY",
    "MEDIUM",
    "HARD",
    "Renderer",
    "NullRenderer",
    "ConsoleRenderer",
    "HtmlRenderer",
    "grid_to_text",
    "grid_to_html",
]
