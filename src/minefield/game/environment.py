"""
Gymnasium environment wrapper for Minefield.

Drives a ``GameSession`` through the standard RL interface so scripted
players can exercise the engine end to end.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import BoardConfig, GameConfig
from .events import CellsRevealed, Notification
from .session import GameSession


# ============================================================================
# Constants
# ============================================================================

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_HAZARD = -10.0
REWARD_NO_OP = -0.1

GLYPHS = {-1: ".", -2: "F", 9: "*", 0: " "}


def render_observation(obs: np.ndarray) -> str:
    """Render an observation array as ASCII rows."""
    lines = []
    for row in obs:
        lines.append(" ".join(GLYPHS.get(int(val), str(int(val))) for val in row))
    return "\n".join(lines)


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for Minefield.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = marked cell
        - 0-8 = revealed cell with adjacent hazard count
        - 9 = hazard (shown once the game is over)

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for revealing a hazard
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 hazards).
                Passed through the game-start clamping rules.
            render_mode: How to render the environment.
        """
        super().__init__()

        requested = config or BoardConfig()
        self.config = GameConfig.from_raw(
            requested.rows, requested.cols, requested.hazard_count
        )
        self.render_mode = render_mode
        self.session: Optional[GameSession] = None

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.rows * self.config.cols)

        self._steps = 0
        self._last_revealed = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game in a fresh session.

        Args:
            seed: Random seed for reproducible hazard layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.session = GameSession(rng=_GeneratorAdapter(self.np_random))
        self.session.subscribe(self._on_notification)
        self.session.start(self.config.rows, self.config.cols, self.config.hazard_count)
        self._steps = 0

        return self.session.observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell addressed by ``action``.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.session is None:
            raise RuntimeError("Call reset() before step()")

        row, col = self._action_to_position(action)
        self._steps += 1
        self._last_revealed = 0

        self.session.reveal(row, col)
        reward = self._calculate_reward()

        observation = self.session.observation()
        terminated = self.session.is_over
        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _on_notification(self, notification: Notification) -> None:
        if isinstance(notification, CellsRevealed):
            self._last_revealed += len(notification.cells)

    def _calculate_reward(self) -> float:
        if self.session.is_lost:
            return REWARD_HAZARD
        if self.session.is_won:
            return REWARD_WIN
        if self._last_revealed:
            return REWARD_SAFE
        return REWARD_NO_OP

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.session.revealed_safe_count,
            "total_safe": self.config.safe_cells,
            "phase": self.session.phase.name,
            "valid_actions": len(self.session.hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.session is None:
            return None
        text = render_observation(self.session.observation())
        if self.render_mode == "ansi":
            return text
        if self.render_mode == "human":
            print(text)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would still change the board.

        Returns:
            int8 array where 1 = valid action, usable as
            ``action_space.sample(mask=...)``.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self.session is None:
            return mask
        for row, col in self.session.hidden_positions():
            mask[row * self.config.cols + col] = 1
        return mask


class _GeneratorAdapter:
    """Expose ``randrange`` on top of a numpy ``Generator``."""

    def __init__(self, generator: np.random.Generator) -> None:
        self._generator = generator

    def randrange(self, stop: int) -> int:
        return int(self._generator.integers(stop))
