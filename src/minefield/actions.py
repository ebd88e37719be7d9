"""
Actions that can be applied to a grid.
"""
from enum import Enum
from typing import NamedTuple


class ActionType(Enum):
    """The two moves a player can make."""

    DISCOVER = "d"
    MARK = "m"


class Coordinates(NamedTuple):
    """Zero-based (row, column) position on the grid."""

    row: int
    column: int


class Action(NamedTuple):
    """A single move addressed to one cell."""

    coordinates: Coordinates
    type: ActionType

    @classmethod
    def discover(cls, row: int, column: int) -> "Action":
        return cls(Coordinates(row, column), ActionType.DISCOVER)

    @classmethod
    def mark(cls, row: int, column: int) -> "Action":
        return cls(Coordinates(row, column), ActionType.MARK)

    def describe(self) -> str:
        """Human readable form with 1-based coordinates, e.g. 'Mark (3, 4)'."""
        verb = "Discover" if self.type == ActionType.DISCOVER else "Mark"
        row, column = self.coordinates
        return f"{verb} ({row + 1}, {column + 1})"
