"""
Configuration for Minefield boards and games.

``BoardConfig`` is strict and rejects anything outside the board's
invariants. ``GameConfig.from_raw`` applies the clamping rules used when a
new game is started from untrusted input.
"""
import numbers
import operator
import re
from dataclasses import dataclass
from typing import Any, Optional


# ============================================================================
# Constants
# ============================================================================

DEFAULT_ROWS = 9
DEFAULT_COLS = 9
DEFAULT_HAZARDS = 10

# Smallest side length a started game may have
MIN_SIDE = 5


class InvalidConfiguration(ValueError):
    """Raised when board dimensions or hazard count cannot be satisfied."""


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minefield board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        hazard_count: Total hazards to place.
    """

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    hazard_count: int = DEFAULT_HAZARDS

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("rows", "cols", "hazard_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfiguration(f"{name} must be an integer")
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.hazard_count < 1:
            raise InvalidConfiguration("At least one hazard is required")
        max_hazards = self.max_hazards
        if self.hazard_count > max_hazards:
            raise InvalidConfiguration(f"Too many hazards (max {max_hazards})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols

    @property
    def max_hazards(self) -> int:
        """Largest hazard count that still leaves one safe cell."""
        return self.rows * self.cols - 1

    @property
    def safe_cells(self) -> int:
        """Number of cells without a hazard."""
        return self.total_cells - self.hazard_count


# ============================================================================
# Game Configuration
# ============================================================================

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _coerce_int(value: Any) -> Optional[int]:
    """
    Parse a raw input value as an integer, or None if it isn't one.

    Any integral number is accepted as is (numpy integers included).
    Floats are truncated. Strings contribute their leading integer, so
    ``"7.5"`` and ``"12 mines"`` parse as 7 and 12.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return operator.index(value)
    if isinstance(value, numbers.Real):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


@dataclass(frozen=True)
class GameConfig(BoardConfig):
    """Board configuration produced by clamping raw game-start input."""

    @classmethod
    def from_raw(cls, rows: Any, cols: Any, hazard_count: Any) -> "GameConfig":
        """
        Clamp raw inputs into a playable configuration.

        Rows and columns below ``MIN_SIDE`` (or unparseable) become
        ``MIN_SIDE``. The hazard count is clamped into
        ``[1, rows * cols - 1]``, with unparseable values treated as 1.

        Args:
            rows: Requested number of rows.
            cols: Requested number of columns.
            hazard_count: Requested number of hazards.

        Returns:
            A validated configuration.

        Raises:
            InvalidConfiguration: If the clamped values are still invalid.
        """
        clamped_rows = _coerce_int(rows)
        if clamped_rows is None or clamped_rows < MIN_SIDE:
            clamped_rows = MIN_SIDE

        clamped_cols = _coerce_int(cols)
        if clamped_cols is None or clamped_cols < MIN_SIDE:
            clamped_cols = MIN_SIDE

        max_hazards = clamped_rows * clamped_cols - 1
        clamped_hazards = _coerce_int(hazard_count)
        if clamped_hazards is None or clamped_hazards < 1:
            clamped_hazards = 1
        if clamped_hazards > max_hazards:
            clamped_hazards = max_hazards

        return cls(clamped_rows, clamped_cols, clamped_hazards)
