import unittest

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_blocks_env import FallingBlocksEnv
from falling_blocks.game import Command, GameConfig


class TestFallingBlocksEnv(unittest.TestCase):
    def test_given_seed_when_reset_then_observation_in_space(self):
        env = FallingBlocksEnv()
        obs, info = env.reset(seed=3)
        self.assertTrue(env.observation_space.contains(obs))
        self.assertEqual(obs["board"].shape, (20, 10))
        self.assertEqual(info["score"], 0)
        self.assertEqual(env.action_space.n, len(Command))

    def test_given_same_seed_when_reset_twice_then_same_pieces(self):
        env = FallingBlocksEnv()
        first, _ = env.reset(seed=21)
        second, _ = env.reset(seed=21)
        np.testing.assert_array_equal(first["board"], second["board"])
        self.assertEqual(first["next"], second["next"])

    def test_given_simulated_clock_when_stepping_then_gravity_every_interval(self):
        env = FallingBlocksEnv(GameConfig(drop_interval=0.75), tick_seconds=0.25)
        env.reset(seed=0)
        start_row = env.game.active_piece.row
        env.step(int(Command.NO_OP))
        env.step(int(Command.NO_OP))
        self.assertEqual(env.game.active_piece.row, start_row)
        env.step(int(Command.NO_OP))
        self.assertEqual(env.game.active_piece.row, start_row + 1)

    def test_given_stacking_in_center_when_soft_dropping_then_episode_terminates(self):
        env = FallingBlocksEnv(tick_seconds=0.25)
        env.reset(seed=1)
        terminated = False
        total_reward = 0.0
        for _ in range(5000):
            obs, reward, terminated, truncated, info = env.step(int(Command.SOFT_DROP))
            total_reward += reward
            if terminated:
                break
        self.assertTrue(terminated)
        self.assertFalse(truncated)
        self.assertEqual(total_reward, 0.0)
        self.assertEqual(info["message"], "You lost!")

    def test_given_step_limit_when_reached_then_truncated(self):
        env = FallingBlocksEnv(max_episode_steps=5)
        env.reset(seed=2)
        for _ in range(5):
            _, _, terminated, truncated, _ = env.step(int(Command.NO_OP))
        self.assertFalse(terminated)
        self.assertTrue(truncated)

    def test_given_rgb_mode_when_rendering_then_image_of_board(self):
        env = FallingBlocksEnv(render_mode="rgb_array")
        env.reset(seed=4)
        img = env.render()
        self.assertEqual(img.shape, (240, 120, 3))
        self.assertEqual(img.dtype, np.uint8)
        self.assertIsNone(FallingBlocksEnv().render())

    def test_given_registry_when_making_env_then_env_created(self):
        env = gym.make("FallingBlocks-10x20-v0")
        obs, _ = env.reset(seed=5)
        obs, reward, terminated, truncated, _ = env.step(env.action_space.sample())
        self.assertIn("board", obs)
        env.close()


if __name__ == '__main__':
    unittest.main()
