"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield.game import Board, BoardConfig, Cell, GameSession


# ============================================================================
# Random Sources
# ============================================================================

class ScriptedRandom:
    """
    Random source that yields scripted (row, col) draws first.

    Board draws the row then the column for each attempt, so each pair
    in ``draws`` is consumed as two ``randrange`` calls. Once the script
    runs out, draws come from a seeded ``random.Random``.
    """

    def __init__(self, draws: Iterable[Tuple[int, int]], seed: int = 0) -> None:
        self._values: List[int] = [value for pair in draws for value in pair]
        self._fallback = random.Random(seed)

    def randrange(self, stop: int) -> int:
        if self._values:
            return self._values.pop(0)
        return self._fallback.randrange(stop)


class Recorder:
    """Listener that keeps every notification it receives."""

    def __init__(self) -> None:
        self.events: list = []

    def __call__(self, notification) -> None:
        self.events.append(notification)

    def of_type(self, kind) -> list:
        return [event for event in self.events if isinstance(event, kind)]

    def clear(self) -> None:
        self.events.clear()


def scripted_board(
    config: BoardConfig, hazards: Iterable[Tuple[int, int]], first: Tuple[int, int]
) -> Board:
    """Board with hazards at the given positions and adjacency computed."""
    board = Board(config, rng=ScriptedRandom(hazards))
    board.place_hazards(*first)
    board.compute_adjacency()
    return board


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 hazards, not yet seeded."""
    return Board(BoardConfig(), rng=random.Random(1234))


@pytest.fixture
def corner_board() -> Board:
    """8x8 board with a single hazard in the bottom-right corner."""
    return scripted_board(BoardConfig(8, 8, 1), [(7, 7)], first=(0, 0))


@pytest.fixture
def small_board() -> Board:
    """
    3x3 board with one hazard at (0, 0).

    Counts:
        * 1 .
        1 1 .
        . . .
    """
    return scripted_board(BoardConfig(3, 3, 1), [(0, 0)], first=(2, 2))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def hazard_cell() -> Cell:
    """Create a cell holding a hazard."""
    return Cell(0, 0, has_hazard=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def session(recorder: Recorder) -> GameSession:
    """Unstarted session with a seeded random source and a recorder."""
    game = GameSession(rng=random.Random(42))
    game.subscribe(recorder)
    return game


@pytest.fixture
def corner_session(recorder: Recorder) -> GameSession:
    """Started 8x8 session whose single hazard will land on (7, 7)."""
    game = GameSession(rng=ScriptedRandom([(7, 7)]))
    game.subscribe(recorder)
    game.start(8, 8, 1)
    recorder.clear()
    return game


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def make_board():
    """Factory building boards with hazards at chosen positions."""
    return scripted_board


@pytest.fixture
def scripted_rng():
    """The ScriptedRandom class, for tests that build their own sessions."""
    return ScriptedRandom
