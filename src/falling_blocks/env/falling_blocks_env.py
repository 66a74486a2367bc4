from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, GameSnapshot, ManualScheduler, TetrominoType
from falling_blocks.visualization.palette import color_for_value


class FallingBlocksEnv(gym.Env):
    """Gymnasium view of the engine.

    Each step applies one ``Action`` and then advances the virtual gravity
    clock by ``step_ms``, so pieces fall at the level's real interval.
    Reward is the score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 step_ms: int = 100, max_episode_steps: int = 10000) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.scheduler = ManualScheduler()
        self.game = FallingBlocksGame(config, scheduler=self.scheduler)
        self.render_mode = render_mode
        self.step_ms = int(step_ms)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(TetrominoType)
        # Observation: locked cells plus the falling piece, as color tags (0 = empty)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=n_kinds, shape=(h, w), dtype=np.int8),
                "current": spaces.Discrete(n_kinds + 1),
                "next": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._snapshot: Optional[GameSnapshot] = None
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        snap = self._snapshot
        assert snap is not None
        return {
            "board": snap.board_with_piece().astype(np.int8),
            "current": int(snap.current.kind) if snap.current is not None else 0,
            "next": int(snap.next.kind) if snap.next is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        snap = self._snapshot
        assert snap is not None
        return {
            "score": snap.score,
            "level": snap.level,
            "lines_cleared": snap.lines_cleared,
            "drop_interval_ms": snap.drop_interval_ms,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        self._snapshot = self.game.snapshot()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        score_before = self.game.score
        self.game.step(Action(int(action)))
        ticks = self.scheduler.advance(self.step_ms)
        self._steps += 1
        self._snapshot = self.game.snapshot()

        terminated = bool(self._snapshot.over)
        truncated = not terminated and self._steps >= self.max_episode_steps
        reward = float(self._snapshot.score - score_before)

        info = self._get_info()
        info["gravity_ticks"] = ticks
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._snapshot.board_with_piece() if self._snapshot is not None else self.game.grid.clone_state()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color_for_value(int(board[y, x]))
            return img
        return None

    def close(self) -> None:
        self.scheduler.cancel()
