from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Cell, Command, Game, GameConfig, ManualClock, PieceSequencer, ShapeKind
from falling_blocks.visualization.palette import board_to_rgb


class FallingBlocksEnv(gym.Env):
    """
    Falling Blocks with one discrete action per game command.

    Actions (8 total): the values of `Command` (Left, Right, SoftDrop,
    UpNudge, RotateCCW, RotateCW, DebugCycleShape, NoOp).

    Notes:
    - Each step is one game tick. The game's clock is simulated and advances
      by `tick_seconds` per step, so gravity fires every
      `drop_interval / tick_seconds` steps regardless of wall time.
    - Reward is the score gained during the step.
    - The episode terminates when a new piece cannot be placed.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        tick_seconds: float = 0.05,
        max_episode_steps: int = 20000,
    ) -> None:
        super().__init__()
        if tick_seconds <= 0:
            raise ValueError(f"tick_seconds must be positive, got {tick_seconds}")
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.tick_seconds = float(tick_seconds)
        self.max_episode_steps = int(max_episode_steps)
        self.clock = ManualClock()
        self.game = self._new_game(self.config.random_seed)

        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=int(max(Cell)), shape=(self.game.board.height, self.game.board.width), dtype=np.int8),
                "next": spaces.Discrete(len(ShapeKind)),
            }
        )
        self.action_space = spaces.Discrete(len(Command))
        self._steps = 0

    def _new_game(self, seed: Optional[int]) -> Game:
        sequencer = PieceSequencer(random.Random(seed))
        return Game(self.config, sequencer=sequencer, clock=self.clock)

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.render_board().astype(np.int8),
            # ShapeKind starts at 1
            "next": int(self.game.next_shape.kind) - 1,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "drop_interval": self.game.drop_interval,
            "message": self.game.message,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        self.clock = ManualClock()
        self.game = self._new_game(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        command = Command(int(action))
        before = self.game.score

        self.clock.advance(self.tick_seconds)
        self.game.tick(command)
        self._steps += 1

        reward = float(self.game.score - before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            return board_to_rgb(self.game.render_board())
        # human rendering is done by falling_blocks.visualization.human_play
        return None

    def close(self) -> None:
        pass
