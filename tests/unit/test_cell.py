"""
Unit tests for Cell class.

Tests cell state management, reveal/mark behavior, observation
conversion and read-only snapshots.
"""
import dataclasses

import pytest
from minefield.game import Cell, CellState, CellView


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_has_no_hazard(self) -> None:
        """New cell should not hold a hazard by default."""
        cell = Cell(2, 3)
        assert cell.has_hazard is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell(0, 0)
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_hazards(self) -> None:
        """New cell has no adjacent hazards."""
        cell = Cell(0, 0)
        assert cell.adjacent_hazards == 0

    def test_cell_keeps_coordinates(self) -> None:
        """A cell knows its own position."""
        cell = Cell(4, 7)
        assert (cell.row, cell.col) == (4, 7)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_marked_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a marked cell."""
        hidden_cell.toggle_mark()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_marked is True


# ============================================================================
# Cell Mark Tests
# ============================================================================

class TestCellMark:
    """Test cell marking behavior."""

    def test_mark_hidden_cell(self, hidden_cell: Cell) -> None:
        """Marking a hidden cell adds one mark."""
        assert hidden_cell.toggle_mark() == 1
        assert hidden_cell.state == CellState.MARKED

    def test_unmark_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unmarking a cell removes the mark and returns it to hidden."""
        hidden_cell.toggle_mark()
        assert hidden_cell.toggle_mark() == -1
        assert hidden_cell.is_hidden is True

    def test_mark_revealed_cell_changes_nothing(self, hidden_cell: Cell) -> None:
        """Cannot mark a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_mark() == 0
        assert hidden_cell.is_revealed is True

    def test_mark_only_sets(self, hidden_cell: Cell) -> None:
        """mark() never clears an existing mark."""
        assert hidden_cell.mark() is True
        assert hidden_cell.mark() is False
        assert hidden_cell.is_marked is True

    def test_mark_skips_revealed_cell(self, hidden_cell: Cell) -> None:
        """mark() leaves revealed cells alone."""
        hidden_cell.reveal()
        assert hidden_cell.mark() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test integer observation values."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell observes as -1."""
        assert hidden_cell.to_observation() == -1

    def test_marked_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Marked cell observes as -2."""
        hidden_cell.toggle_mark()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        """Revealed cell returns its adjacent hazard count."""
        cell = Cell(0, 0, adjacent_hazards=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_hidden_hazard_is_not_exposed_by_default(
        self, hazard_cell: Cell
    ) -> None:
        """A hidden hazard looks like any hidden cell."""
        assert hazard_cell.to_observation() == -1

    def test_exposed_hazard_observation_is_nine(self, hazard_cell: Cell) -> None:
        """Exposed hazard observes as 9."""
        assert hazard_cell.to_observation(expose_hazard=True) == 9

    def test_revealed_hazard_observation_is_nine(self, hazard_cell: Cell) -> None:
        """Revealed hazard observes as 9."""
        hazard_cell.reveal()
        assert hazard_cell.to_observation() == 9


# ============================================================================
# Snapshot Tests
# ============================================================================

class TestCellSnapshot:
    """Test read-only views handed to presentation code."""

    def test_hidden_snapshot_hides_count_and_hazard(
        self, hazard_cell: Cell
    ) -> None:
        """An unrevealed snapshot leaks neither count nor hazard."""
        view = hazard_cell.snapshot()
        assert view == CellView(row=0, col=0, revealed=False, marked=False)
        assert view.has_hazard is None
        assert view.adjacent_hazards is None

    def test_exposed_snapshot_includes_hazard(self, hazard_cell: Cell) -> None:
        """Exposed snapshots carry the hazard flag."""
        assert hazard_cell.snapshot(expose_hazard=True).has_hazard is True

    def test_revealed_snapshot_includes_count(self) -> None:
        """Revealed snapshots carry the adjacency count."""
        cell = Cell(1, 2, adjacent_hazards=3)
        cell.reveal()
        view = cell.snapshot()
        assert view.revealed is True
        assert view.adjacent_hazards == 3

    def test_snapshot_is_immutable(self, hidden_cell: Cell) -> None:
        """Snapshots cannot be modified."""
        view = hidden_cell.snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            view.revealed = True  # type: ignore[misc]
