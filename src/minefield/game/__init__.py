"""
Minefield game module.

Provides the board engine, the session state machine and the
intents/notifications exchanged with presentation code.
"""
from .cell import Cell, CellState, CellView
from .config import (
    BoardConfig,
    GameConfig,
    InvalidConfiguration,
    DEFAULT_ROWS,
    DEFAULT_COLS,
    DEFAULT_HAZARDS,
    MIN_SIDE,
)
from .board import Board, RevealResult, RevealedCell
from .events import (
    StartGame,
    RevealIntent,
    MarkIntent,
    BoardInitialized,
    CellsRevealed,
    CellMarked,
    GameLost,
    GameWon,
    RemainingHazardCount,
)
from .session import GameSession, GamePhase
from .environment import MinefieldEnv, render_observation

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "BoardConfig",
    "GameConfig",
    "InvalidConfiguration",
    "DEFAULT_ROWS",
    "DEFAULT_COLS",
    "DEFAULT_HAZARDS",
    "MIN_SIDE",
    "Board",
    "RevealResult",
    "RevealedCell",
    "StartGame",
    "RevealIntent",
    "MarkIntent",
    "BoardInitialized",
    "CellsRevealed",
    "CellMarked",
    "GameLost",
    "GameWon",
    "RemainingHazardCount",
    "GameSession",
    "GamePhase",
    "MinefieldEnv",
    "render_observation",
]
