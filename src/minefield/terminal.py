"""
Text presentation for a Minefield session.

``TerminalView`` builds its picture of the board purely from session
notifications and keeps its own coordinate -> glyph map.
"""
from typing import List

from .game.events import (
    BoardInitialized,
    CellMarked,
    CellsRevealed,
    GameLost,
    GameWon,
    Notification,
    RemainingHazardCount,
)
from .game.session import GameSession

HIDDEN = "."
MARKED = "F"
HAZARD = "*"
EMPTY = " "

STATUS_PLAYING = "Game Status: Playing"
STATUS_LOST = "Game Over! You hit a mine."
STATUS_WON = "Victory! You cleared all safe areas."


class TerminalView:
    """Listener that mirrors a session as a grid of characters."""

    def __init__(self, session: GameSession) -> None:
        self.glyphs: List[List[str]] = []
        self.status = ""
        self.remaining = 0
        self._session = session
        session.subscribe(self)

    def close(self) -> None:
        """Stop listening to the session."""
        self._session.unsubscribe(self)

    def __call__(self, notification: Notification) -> None:
        if isinstance(notification, BoardInitialized):
            self.glyphs = [
                [HIDDEN] * notification.cols for _ in range(notification.rows)
            ]
            self.status = STATUS_PLAYING
        elif isinstance(notification, CellsRevealed):
            for cell in notification.cells:
                count = cell.adjacent_hazards
                self.glyphs[cell.row][cell.col] = str(count) if count else EMPTY
        elif isinstance(notification, CellMarked):
            self.glyphs[notification.row][notification.col] = (
                MARKED if notification.marked else HIDDEN
            )
        elif isinstance(notification, GameLost):
            for row, col in notification.hazard_locations:
                self.glyphs[row][col] = HAZARD
            self.status = STATUS_LOST
        elif isinstance(notification, GameWon):
            self.status = STATUS_WON
        elif isinstance(notification, RemainingHazardCount):
            self.remaining = notification.value

    def render(self) -> str:
        """Board with column/row headers, the hazard counter and status."""
        if not self.glyphs:
            return ""
        cols = len(self.glyphs[0])
        width = len(str(max(len(self.glyphs), cols) - 1))
        header = " " * (width + 1) + " ".join(
            str(col).rjust(width) for col in range(cols)
        )
        lines = [header]
        for index, row in enumerate(self.glyphs):
            cells = " ".join(glyph.rjust(width) for glyph in row)
            lines.append(f"{str(index).rjust(width)} {cells}")
        lines.append(f"Mines: {self.remaining}")
        lines.append(self.status)
        return "\n".join(lines)
