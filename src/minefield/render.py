"""
One-way text and HTML projections of a grid.

Renderers are injected into bots so the solve loop never has to know
whether anything is watching.
"""
import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

from .actions import Coordinates
from .cell import Cell, CellState
from .grid import Grid


# ============================================================================
# Projections
# ============================================================================

def _cell_symbol(cell: Cell, reveal_mines: bool) -> str:
    if cell.state == CellState.MARKED:
        return "F"
    if cell.state == CellState.COVERED:
        return "*" if reveal_mines and cell.is_mine else "."
    if cell.is_mine:
        return "*"
    if cell.adjacent_mines == 0:
        return " "
    return str(cell.adjacent_mines)


def grid_to_text(grid: Grid, reveal_mines: bool = False) -> str:
    """
    Render the grid as a plain-text board with 1-based headers.

    Args:
        grid: Grid to render.
        reveal_mines: Also show covered mines (end-of-game view).
    """
    width = len(str(grid.size))
    header = " " * (width + 1) + " ".join(
        str(col + 1).rjust(width) for col in range(grid.size)
    )
    lines = [header]
    for row, cells in enumerate(grid.cells):
        symbols = " ".join(
            _cell_symbol(cell, reveal_mines).rjust(width) for cell in cells
        )
        lines.append(f"{str(row + 1).rjust(width)} {symbols}")
    return "\n".join(lines)


def grid_to_html(grid: Grid, current: Optional[Coordinates] = None) -> str:
    """Render the grid as a fragment of header spans and cell buttons."""
    parts = ['<span class="grid-number"></span>']
    parts.extend(
        f'<span class="grid-number">{col + 1}</span>' for col in range(grid.size)
    )
    for row, cells in enumerate(grid.cells):
        parts.append(f'<span class="grid-number">{row + 1}</span>')
        for col, cell in enumerate(cells):
            parts.append(_cell_to_html(cell, row, col, current))
    return "".join(parts)


def _cell_to_html(
    cell: Cell, row: int, col: int, current: Optional[Coordinates]
) -> str:
    base = "game-cell"
    parity = "odd" if (row + col) % 2 == 0 else "even"
    classes = [base, f"{base}--{cell.state.value}", f"{base}--{parity}"]
    label = ""
    if cell.state == CellState.DISCOVERED:
        classes.append(f"{base}--{'mine' if cell.is_mine else cell.adjacent_mines}")
        label = _cell_symbol(cell, reveal_mines=False).strip()
    elif cell.state == CellState.MARKED:
        label = "F"
    if current is not None and tuple(current) == (row, col):
        classes.append(f"{base}--current")
    return (
        f'<button class="{" ".join(classes)}" '
        f'data-row="{row}" data-column="{col}">{label}</button>'
    )


# ============================================================================
# Renderers
# ============================================================================

class Renderer(ABC):
    """Something that displays a grid after each move."""

    @abstractmethod
    def render(self, grid: Grid, current: Optional[Coordinates] = None) -> None:
        """Display the grid, optionally highlighting the last cell played."""


class NullRenderer(Renderer):
    """Headless renderer used for batch runs."""

    def render(self, grid: Grid, current: Optional[Coordinates] = None) -> None:
        pass


class ConsoleRenderer(Renderer):
    """Writes the text board to a stream, optionally clearing the terminal."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        clear: bool = False,
        reveal_mines: bool = False,
    ) -> None:
        self.stream = stream or sys.stdout
        self.clear = clear
        self.reveal_mines = reveal_mines

    def render(self, grid: Grid, current: Optional[Coordinates] = None) -> None:
        if self.clear:
            self.stream.write("\033[2J\033[H")
        self.stream.write(grid_to_text(grid, self.reveal_mines) + "\n")
        if current is not None:
            self.stream.write(f"Last move: ({current[0] + 1}, {current[1] + 1})\n")
        self.stream.flush()


class HtmlRenderer(Renderer):
    """Keeps the most recent HTML fragment for a web front-end to pick up."""

    def __init__(self) -> None:
        self.html = ""
        self.frames = 0

    def render(self, grid: Grid, current: Optional[Coordinates] = None) -> None:
        self.html = grid_to_html(grid, current)
        self.frames += 1
