"""
Board module for the Minefield game.

Implements the grid with hazard placement, adjacency counts,
flood-fill revealing and the win check.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellView
from .config import BoardConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Reveal Results
# ============================================================================

@dataclass(frozen=True)
class RevealedCell:
    """A cell that changed to revealed, with its adjacency count."""

    row: int
    col: int
    adjacent_hazards: int


@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a single reveal call.

    Attributes:
        cells: Safe cells that changed to revealed, in reveal order.
        hit_hazard: Whether the revealed origin held a hazard.
    """

    cells: Tuple[RevealedCell, ...] = ()
    hit_hazard: bool = False

    @property
    def is_empty(self) -> bool:
        """True when the reveal changed nothing."""
        return not self.cells and not self.hit_hazard

    def __len__(self) -> int:
        return len(self.cells)


EMPTY_RESULT = RevealResult()


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minefield game board.

    Owns the grid of cells, hazard placement, reveal propagation and
    the counters the win check depends on. Rules about when an action
    is allowed live in ``GameSession``.
    """

    def __init__(self, config: BoardConfig, rng: Optional[Any] = None) -> None:
        """
        Allocate an empty grid.

        Args:
            config: Validated board configuration.
            rng: Object with a ``randrange(stop)`` method used for hazard
                placement (default: a fresh ``random.Random``).
        """
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self._grid: List[List[Cell]] = [
            [Cell(row, col) for col in range(config.cols)]
            for row in range(config.rows)
        ]
        self._hazards_placed = False
        self.revealed_safe_count = 0
        self.marked_count = 0

    # ========================================================================
    # Dimensions
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def hazard_count(self) -> int:
        return self.config.hazard_count

    @property
    def hazards_placed(self) -> bool:
        """Whether hazards (and adjacency counts) exist yet."""
        return self._hazards_placed

    # ========================================================================
    # Hazard Placement (Low-level)
    # ========================================================================

    def place_hazards(self, exclude_row: int, exclude_col: int) -> None:
        """
        Place hazards uniformly at random, keeping one cell free.

        Draws coordinates and retries on the excluded cell or on a cell
        that already holds a hazard.

        Args:
            exclude_row: Row of the cell to keep hazard-free.
            exclude_col: Column of the cell to keep hazard-free.

        Raises:
            RuntimeError: If hazards were already placed.
        """
        if self._hazards_placed:
            raise RuntimeError("Hazards have already been placed")

        placed = 0
        draws = 0
        while placed < self.hazard_count:
            row = self._rng.randrange(self.rows)
            col = self._rng.randrange(self.cols)
            draws += 1
            if row == exclude_row and col == exclude_col:
                continue
            cell = self._grid[row][col]
            if cell.has_hazard:
                continue
            cell.has_hazard = True
            placed += 1

        self._hazards_placed = True
        logger.debug(
            "Placed %d hazards in %d draws, excluding (%d, %d)",
            placed, draws, exclude_row, exclude_col,
        )

    def compute_adjacency(self) -> None:
        """Calculate adjacent hazard counts for all safe cells."""
        for row in range(self.rows):
            for col in range(self.cols):
                cell = self._grid[row][col]
                if not cell.has_hazard:
                    cell.adjacent_hazards = self._count_adjacent_hazards(row, col)

    def _count_adjacent_hazards(self, row: int, col: int) -> int:
        """Count hazards adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].has_hazard:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get in-bounds neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for up to 8 neighbors.
        """
        result = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    result.append((new_row, new_col))
        return result

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # Player Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell, flood-filling from it when it has no adjacent hazards.

        The flood-fill expands through zero-count cells only. Numbered cells
        on the frontier are revealed but not expanded, and marked, revealed
        or hazard cells are never entered.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The cells that changed to revealed, and whether the origin
            was a hazard. Empty if the cell is out of bounds, revealed
            or marked.
        """
        if not self.in_bounds(row, col):
            return EMPTY_RESULT

        origin = self._grid[row][col]
        if not origin.reveal():
            return EMPTY_RESULT

        if origin.has_hazard:
            return RevealResult(hit_hazard=True)

        revealed = [self._record_reveal(origin)]
        if origin.adjacent_hazards == 0:
            revealed.extend(self._flood_fill(row, col))

        if len(revealed) > 1:
            logger.debug(
                "Flood-fill from (%d, %d) revealed %d cells",
                row, col, len(revealed),
            )
        return RevealResult(cells=tuple(revealed))

    def _flood_fill(self, row: int, col: int) -> List[RevealedCell]:
        """Reveal the region around an already revealed zero-count cell."""
        revealed = []
        frontier: Deque[Tuple[int, int]] = deque([(row, col)])
        while frontier:
            current_row, current_col = frontier.popleft()
            for neighbor_row, neighbor_col in self.neighbors(current_row, current_col):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.has_hazard or not neighbor.reveal():
                    continue
                revealed.append(self._record_reveal(neighbor))
                if neighbor.adjacent_hazards == 0:
                    frontier.append((neighbor_row, neighbor_col))
        return revealed

    def _record_reveal(self, cell: Cell) -> RevealedCell:
        """Count a newly revealed safe cell."""
        self.revealed_safe_count += 1
        return RevealedCell(cell.row, cell.col, cell.adjacent_hazards)

    def toggle_mark(self, row: int, col: int) -> bool:
        """
        Toggle the mark on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The cell's marked state after the call. Revealed and
            out-of-bounds cells are left unchanged.
        """
        if not self.in_bounds(row, col):
            return False
        cell = self._grid[row][col]
        self.marked_count += cell.toggle_mark()
        return cell.is_marked

    def mark_remaining_hazards(self) -> List[Tuple[int, int]]:
        """Mark every hazard not marked yet, returning their positions."""
        marked = [
            (cell.row, cell.col)
            for line in self._grid
            for cell in line
            if cell.has_hazard and cell.mark()
        ]
        self.marked_count += len(marked)
        return marked

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def safe_cell_count(self) -> int:
        return self.config.safe_cells

    @property
    def remaining_hazard_count(self) -> int:
        """Hazards not yet accounted for by marks (may go negative)."""
        return self.hazard_count - self.marked_count

    def is_won(self) -> bool:
        """Check if all safe cells are revealed."""
        return self.revealed_safe_count == self.safe_cell_count

    def hazard_locations(self) -> List[Tuple[int, int]]:
        """Positions of all hazards, in row-major order."""
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if self._grid[row][col].has_hazard
        ]

    def cell_view(
        self, row: int, col: int, expose_hazards: bool = False
    ) -> Optional[CellView]:
        """Get a read-only view of a cell, or None if out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col].snapshot(expose_hazards)

    def get_observation(self, expose_hazards: bool = False) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = marked
                0-8 = revealed with adjacent count
                9 = hazard (revealed or exposed)
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                obs[row, col] = self._grid[row][col].to_observation(expose_hazards)
        return obs

    def hidden_positions(self) -> List[Tuple[int, int]]:
        """Positions of cells that are neither revealed nor marked."""
        return [
            (row, col)
            for row in range(self.rows)
            for col in range(self.cols)
            if self._grid[row][col].is_hidden
        ]
