"""
Intents and notifications exchanged with the presentation layer.

Intents flow into ``GameSession.dispatch``; notifications flow out to
subscribed listeners. All of them are immutable and addressed by
coordinate only.
"""
from dataclasses import dataclass
from typing import Any, Callable, Tuple, Union

from .board import RevealedCell


# ============================================================================
# Intents
# ============================================================================

@dataclass(frozen=True)
class StartGame:
    """Request a new game. Values are clamped before use."""

    rows: Any
    cols: Any
    hazard_count: Any


@dataclass(frozen=True)
class RevealIntent:
    row: int
    col: int


@dataclass(frozen=True)
class MarkIntent:
    row: int
    col: int


Intent = Union[StartGame, RevealIntent, MarkIntent]


# ============================================================================
# Notifications
# ============================================================================

@dataclass(frozen=True)
class BoardInitialized:
    rows: int
    cols: int


@dataclass(frozen=True)
class CellsRevealed:
    """Every cell revealed by one reveal intent, flood-fill included."""

    cells: Tuple[RevealedCell, ...]


@dataclass(frozen=True)
class CellMarked:
    row: int
    col: int
    marked: bool


@dataclass(frozen=True)
class GameLost:
    """The player revealed a hazard; carries the full hazard layout."""

    hazard_locations: Tuple[Tuple[int, int], ...]


@dataclass(frozen=True)
class GameWon:
    pass


@dataclass(frozen=True)
class RemainingHazardCount:
    """Hazard count minus marks placed."""

    value: int


Notification = Union[
    BoardInitialized,
    CellsRevealed,
    CellMarked,
    GameLost,
    GameWon,
    RemainingHazardCount,
]

Listener = Callable[[Notification], None]
