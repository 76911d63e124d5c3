from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from cubes.game import BOARD_HEIGHT, BOARD_WIDTH, CATALOG, Action, GameConfig, Phase, TetrisGame
from cubes.game.actions import MOVE_ACTIONS

SETTLED_COLOR = (192, 192, 192)
EMPTY_COLOR = (30, 30, 36)


class CubesEnv(gym.Env):
    """Falling-block game exposed one engine tick per step.

    Actions are the movement actions of the engine (PAUSE is left out):
      0: None   1: Rotate CW   2: Rotate CCW   3: Left
      4: Right  5: Soft drop   6: Hard drop

    Observation is the board as int8 with 1 for settled cells and
    -(kind + 1) for the cells of the falling piece.
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 step_dt: float = 1.0 / 60.0,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = TetrisGame(config)
        self.render_mode = render_mode
        self.step_dt = float(step_dt)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,   # per engine point
            "rows": 0.0,     # per row cleared
            "locks": 0.0,    # per piece locked
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        self.observation_space = spaces.Box(
            low=-len(CATALOG), high=1, shape=(BOARD_HEIGHT, BOARD_WIDTH), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(MOVE_ACTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state()

    def _get_info(self) -> Dict[str, Any]:
        board = self.game.board
        return {
            "score": self.game.score,
            "level": board.level if board is not None else 1,
            "highscore": max(self.game.highscore, board.highscore if board is not None else 0),
            "phase": self.game.phase.name,
            "steps": self._steps,
        }

    def _ensure_piece(self) -> None:
        # the engine spawns on the tick after a lock; do it here so every
        # observation carries a falling piece
        if self.game.phase is Phase.PLAYING and self.game.active is None:
            self.game.tick(Action.NONE, 0.0)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.reseed(seed)
        self.game.restart()
        self._ensure_piece()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"action {action!r} is outside {self.action_space}")
        move = MOVE_ACTIONS[int(action)]
        score_before = self.game.score

        result = self.game.tick(move, self.step_dt)
        self._ensure_piece()
        self._steps += 1

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.game.score - score_before),
            "rows": self.reward_weights["rows"] * float(result.rows_cleared),
            "locks": self.reward_weights["locks"] * float(result.locked),
            "step": self.step_penalty,
        }
        terminated = self.game.phase is Phase.GAME_OVER
        truncated = not terminated and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        info["rows_cleared"] = result.rows_cleared
        info["locked"] = result.locked
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._get_obs()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(grid[y, x])
                    if v > 0:
                        color = SETTLED_COLOR
                    elif v < 0:
                        color = CATALOG[-v - 1].color
                    else:
                        color = EMPTY_COLOR
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to the pygame host; noop
        return None

    def close(self) -> None:
        pass
