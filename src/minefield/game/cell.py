"""
Cell module for the Minefield game.

Represents individual grid positions with their visible state
(hidden/revealed/marked) and content (hazard/adjacency count).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Dict, Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    MARKED = auto()


# Allowed visible-state changes, keyed by the current state
_REVEAL = {CellState.HIDDEN: CellState.REVEALED}
_MARK = {CellState.HIDDEN: CellState.MARKED}
_TOGGLE_MARK = {
    CellState.HIDDEN: CellState.MARKED,
    CellState.MARKED: CellState.HIDDEN,
}


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single position in the Minefield grid.

    Attributes:
        row: Row index of the cell.
        col: Column index of the cell.
        has_hazard: Whether this cell holds a hazard.
        adjacent_hazards: Count of hazards in neighboring cells (0-8).
        state: Current visible state (hidden, revealed, or marked).
    """

    row: int
    col: int
    has_hazard: bool = False
    adjacent_hazards: int = 0
    state: CellState = CellState.HIDDEN

    def _advance(self, transitions: Dict[CellState, CellState]) -> bool:
        next_state = transitions.get(self.state)
        if next_state is None:
            return False
        self.state = next_state
        return True

    def reveal(self) -> bool:
        """Open a hidden cell. Returns False for revealed or marked cells."""
        return self._advance(_REVEAL)

    def mark(self) -> bool:
        """Mark a hidden cell without ever clearing an existing mark."""
        return self._advance(_MARK)

    def toggle_mark(self) -> int:
        """
        Flip the mark on an unrevealed cell.

        Returns:
            The change in the number of marked cells: +1 when a mark was
            placed, -1 when one was removed, 0 for a revealed cell.
        """
        if not self._advance(_TOGGLE_MARK):
            return 0
        return 1 if self.is_marked else -1

    @property
    def is_hidden(self) -> bool:
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_marked(self) -> bool:
        return self.state is CellState.MARKED

    def to_observation(self, expose_hazard: bool = False) -> int:
        """
        Convert cell to an integer observation value.

        Args:
            expose_hazard: Show hazards regardless of visible state.

        Returns:
            -1: Hidden cell
            -2: Marked cell
            0-8: Revealed cell with adjacent hazard count
            9: Hazard (revealed, or exposed after game over)
        """
        if self.has_hazard and (expose_hazard or self.is_revealed):
            return 9
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.MARKED:
            return -2
        return self.adjacent_hazards

    def snapshot(self, expose_hazard: bool = False) -> "CellView":
        """Build a read-only view of this cell."""
        return CellView(
            row=self.row,
            col=self.col,
            revealed=self.is_revealed,
            marked=self.is_marked,
            adjacent_hazards=self.adjacent_hazards if self.is_revealed else None,
            has_hazard=self.has_hazard if expose_hazard else None,
        )


@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of a cell handed to presentation code.

    ``adjacent_hazards`` is None while the cell is unrevealed and
    ``has_hazard`` is None unless hazards have been exposed.
    """

    row: int
    col: int
    revealed: bool
    marked: bool
    adjacent_hazards: Optional[int] = None
    has_hazard: Optional[bool] = None
