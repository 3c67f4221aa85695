"""
Game session for Minefield.

Runs one play-through at a time on top of a ``Board``: clamps the
start configuration, defers hazard generation to the first reveal,
applies the win/loss rules and notifies listeners of every change.
"""
import logging
from enum import Enum, auto
from typing import Any, List, Optional, Tuple

import numpy as np

from .board import Board
from .cell import CellView
from .config import GameConfig
from .events import (
    BoardInitialized,
    CellMarked,
    CellsRevealed,
    GameLost,
    GameWon,
    Intent,
    Listener,
    MarkIntent,
    Notification,
    RemainingHazardCount,
    RevealIntent,
    StartGame,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Lifecycle phases of a session."""

    CONFIGURING = auto()
    AWAITING_FIRST_REVEAL = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


TERMINAL_PHASES = frozenset({GamePhase.WON, GamePhase.LOST})


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    Orchestrates a play-through and reports changes to listeners.

    Reveal and mark intents never raise: anything that does not apply
    in the current phase, or targets a revealed, marked or
    out-of-bounds cell, is ignored without notification.
    """

    def __init__(self, rng: Optional[Any] = None) -> None:
        """
        Initialize an unconfigured session.

        Args:
            rng: Random source handed to every board this session
                creates (see ``Board``).
        """
        self._rng = rng
        self._listeners: List[Listener] = []
        self._board: Optional[Board] = None
        self._config: Optional[GameConfig] = None
        self._phase = GamePhase.CONFIGURING

    # ========================================================================
    # Listeners
    # ========================================================================

    def subscribe(self, listener: Listener) -> None:
        """Register a callback for notifications."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a previously registered callback."""
        self._listeners.remove(listener)

    def _notify(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            listener(notification)

    # ========================================================================
    # Intents
    # ========================================================================

    def dispatch(self, intent: Intent) -> None:
        """
        Route an intent to the matching action.

        Raises:
            TypeError: If the intent type is unknown.
            InvalidConfiguration: From ``start`` only.
        """
        if isinstance(intent, StartGame):
            self.start(intent.rows, intent.cols, intent.hazard_count)
        elif isinstance(intent, RevealIntent):
            self.reveal(intent.row, intent.col)
        elif isinstance(intent, MarkIntent):
            self.toggle_mark(intent.row, intent.col)
        else:
            raise TypeError(f"Unknown intent: {intent!r}")

    def start(self, rows: Any, cols: Any, hazard_count: Any) -> GameConfig:
        """
        Start a new game on a fresh board.

        Args:
            rows: Requested number of rows (clamped to at least 5).
            cols: Requested number of columns (clamped to at least 5).
            hazard_count: Requested hazards (clamped to [1, rows*cols-1]).

        Returns:
            The effective configuration after clamping.

        Raises:
            InvalidConfiguration: If no valid board can be built.
        """
        config = GameConfig.from_raw(rows, cols, hazard_count)
        self._config = config
        self._board = Board(config, rng=self._rng)
        self._phase = GamePhase.AWAITING_FIRST_REVEAL
        logger.info(
            "Started %dx%d game with %d hazards",
            config.rows, config.cols, config.hazard_count,
        )

        self._notify(BoardInitialized(config.rows, config.cols))
        self._notify(RemainingHazardCount(self._board.remaining_hazard_count))
        return config

    def reveal(self, row: int, col: int) -> None:
        """Reveal a cell, generating hazards first on the opening move."""
        board = self._board
        if board is None or self.is_over or not board.in_bounds(row, col):
            return

        if self._phase == GamePhase.AWAITING_FIRST_REVEAL:
            board.place_hazards(row, col)
            board.compute_adjacency()
            self._phase = GamePhase.IN_PROGRESS

        result = board.reveal(row, col)
        if result.is_empty:
            return

        if result.hit_hazard:
            self._lose(row, col)
            return

        self._notify(CellsRevealed(result.cells))
        if board.is_won():
            self._win()

    def toggle_mark(self, row: int, col: int) -> None:
        """Toggle a mark; only allowed once hazards exist and before the end."""
        board = self._board
        if self._phase != GamePhase.IN_PROGRESS or not board.in_bounds(row, col):
            return

        view = board.cell_view(row, col)
        if view.revealed:
            return

        marked = board.toggle_mark(row, col)
        self._notify(CellMarked(row, col, marked))
        self._notify(RemainingHazardCount(board.remaining_hazard_count))

    # ========================================================================
    # Terminal Transitions
    # ========================================================================

    def _lose(self, row: int, col: int) -> None:
        self._phase = GamePhase.LOST
        logger.info("Game lost at (%d, %d)", row, col)
        self._notify(GameLost(tuple(self._board.hazard_locations())))

    def _win(self) -> None:
        board = self._board
        self._phase = GamePhase.WON
        for row, col in board.mark_remaining_hazards():
            self._notify(CellMarked(row, col, True))
        self._notify(RemainingHazardCount(board.remaining_hazard_count))
        logger.info("Game won with %d cells revealed", board.revealed_safe_count)
        self._notify(GameWon())

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def config(self) -> Optional[GameConfig]:
        """Effective configuration of the current game, if started."""
        return self._config

    @property
    def is_over(self) -> bool:
        """Check if the game reached a terminal phase."""
        return self._phase in TERMINAL_PHASES

    @property
    def is_won(self) -> bool:
        return self._phase == GamePhase.WON

    @property
    def is_lost(self) -> bool:
        return self._phase == GamePhase.LOST

    @property
    def revealed_safe_count(self) -> int:
        return self._board.revealed_safe_count if self._board else 0

    @property
    def marked_count(self) -> int:
        return self._board.marked_count if self._board else 0

    @property
    def remaining_hazard_count(self) -> int:
        return self._board.remaining_hazard_count if self._board else 0

    def cell_view(self, row: int, col: int) -> Optional[CellView]:
        """
        Get a read-only view of a cell.

        Hazard flags are only included once the game is over.
        """
        if self._board is None:
            return None
        return self._board.cell_view(row, col, expose_hazards=self.is_over)

    def observation(self) -> np.ndarray:
        """Board state array, with hazards shown once the game is over."""
        if self._board is None:
            raise RuntimeError("No game has been started")
        return self._board.get_observation(expose_hazards=self.is_over)

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """Cells a reveal intent would still act on."""
        if self._board is None or self.is_over:
            return []
        return self._board.hidden_positions()
