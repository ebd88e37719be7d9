"""
Base bot interface for Minesweeper.

Owns the solve loop shared by every strategy: opening move, sync,
action selection, cooperative cancellation and the post-win sweep.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple, Union

from minefield import (
    Action,
    Difficulty,
    Grid,
    GridConfig,
    NullRenderer,
    Renderer,
)

from .known_grid import KnownGrid

logger = logging.getLogger(__name__)


# ============================================================================
# Results
# ============================================================================

class SolveOutcome(Enum):
    """How a solve ended."""

    WON = auto()
    LOST = auto()
    STALLED = auto()
    CANCELLED = auto()


@dataclass(frozen=True)
class SolveResult:
    """
    Summary of one solve.

    Attributes:
        outcome: Terminal outcome.
        elapsed: Wall time in seconds.
        history: Every action applied to the grid, in order.
        safe_moves: Actions found by deduction.
        guesses: Actions taken without certainty (opening included).
        revealed: Discovered cells at the end.
    """

    outcome: SolveOutcome
    elapsed: float
    history: Tuple[Action, ...]
    safe_moves: int = 0
    guesses: int = 0
    revealed: int = 0

    @property
    def won(self) -> bool:
        return self.outcome == SolveOutcome.WON


# ============================================================================
# Base Bot
# ============================================================================

class BaseBot(ABC):
    """
    Abstract base class for Minesweeper bots.

    Subclasses implement select_action, which reads self.known and
    returns the next move or None when they have nothing to offer.
    """

    opening_action = Action.discover(0, 0)

    def __init__(
        self,
        config: Union[GridConfig, Difficulty, str, None] = None,
        *,
        grid: Optional[Grid] = None,
        seed: Optional[int] = None,
        delay: float = 0.0,
        renderer: Optional[Renderer] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        """
        Initialize the bot and its grid.

        Args:
            config: Grid configuration or difficulty preset.
            grid: Existing grid to solve instead of generating one.
            seed: Seed for mine placement.
            delay: Seconds to wait between turns (0 for batch runs).
            renderer: Display notified after every action.
            stop_event: Shared cancellation flag; a private one is
                created when omitted.
        """
        if delay < 0:
            raise ValueError("Delay cannot be negative")
        self.grid = grid if grid is not None else Grid(config, seed=seed)
        self.known = KnownGrid(self.grid.size, self.grid.num_mines)
        self.delay = delay
        self.renderer = renderer or NullRenderer()
        self._stop = stop_event or threading.Event()
        self.history: List[Action] = []
        self.safe_moves = 0
        self.guesses = 0

    @abstractmethod
    def select_action(self) -> Optional[Action]:
        """
        Choose the next action from the known grid.

        Returns:
            The action to apply, or None if the bot is stuck.
        """

    # ========================================================================
    # Cancellation
    # ========================================================================

    def stop_solving(self) -> None:
        """Ask the solve loop to stop before its next grid mutation."""
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    # ========================================================================
    # Loop Helpers
    # ========================================================================

    def sync(self) -> None:
        """Refresh the known grid from the real one."""
        self.known.sync(self.grid)

    def apply(self, action: Action) -> None:
        """Apply an action to the grid, record it and redraw."""
        self.grid.perform_action(action)
        self.history.append(action)
        logger.debug("%s", action.describe())
        self.renderer.render(self.grid, action.coordinates)

    def _pause(self) -> None:
        """Wait between turns; returns early when stopped."""
        if self.delay > 0:
            self._stop.wait(self.delay)

    # ========================================================================
    # Solve
    # ========================================================================

    def solve(self) -> SolveResult:
        """
        Play until the grid is won or lost, the bot is stuck, or
        stop_solving is called.

        Returns:
            Outcome, timing and move history.
        """
        start_time = time.perf_counter()
        outcome = self._play()
        elapsed = time.perf_counter() - start_time

        logger.info(
            "%s finished: %s in %.3fs (%d moves, %d guesses)",
            type(self).__name__,
            outcome.name,
            elapsed,
            len(self.history),
            self.guesses,
        )
        return SolveResult(
            outcome=outcome,
            elapsed=elapsed,
            history=tuple(self.history),
            safe_moves=self.safe_moves,
            guesses=self.guesses,
            revealed=self.grid.discovered_count,
        )

    def _play(self) -> SolveOutcome:
        if self.stopped:
            return SolveOutcome.CANCELLED

        self.guesses += 1
        self.apply(self.opening_action)
        self._pause()

        while not self.grid.is_end:
            if self.stopped:
                return SolveOutcome.CANCELLED

            self.sync()
            action = self.select_action()
            if action is None:
                logger.warning("No action available, grid left unsolved")
                return SolveOutcome.STALLED

            self.apply(action)
            self._pause()

        if self.grid.is_win:
            self._mark_remaining()
            return SolveOutcome.WON
        return SolveOutcome.LOST

    def _mark_remaining(self) -> None:
        """Flag every cell still covered once the grid is won."""
        self.sync()
        for coordinates in self.known.covered_positions():
            if self.stopped:
                return
            self.apply(Action.mark(*coordinates))
            self._pause()
