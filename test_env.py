"""
tests for the 2048 gymnasium environment
"""
import unittest

import numpy as np

import grid_engine
from game_gym import Game2048Env


class TestGame2048Env(unittest.TestCase):

    def setUp(self):
        self.env = Game2048Env()

    def test_reset(self):
        observation, info = self.env.reset(seed=0)
        self.assertEqual(observation.shape, (4, 4))
        self.assertEqual(observation.dtype, np.int32)
        self.assertEqual(np.count_nonzero(observation), 2)
        self.assertTrue(self.env.observation_space.contains(observation))
        self.assertEqual(info["score"], 0)

    def test_seeded_reset_is_reproducible(self):
        first, _ = self.env.reset(seed=123)
        moves = [self.env.step(a)[0] for a in (2, 0, 3, 1)]

        second, _ = self.env.reset(seed=123)
        replay = [self.env.step(a)[0] for a in (2, 0, 3, 1)]

        np.testing.assert_array_equal(first, second)
        for a, b in zip(moves, replay):
            np.testing.assert_array_equal(a, b)

    def test_step_merge(self):
        self.env.reset(seed=0)
        self.env.state = grid_engine.from_board([
            [2, 2, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])

        observation, reward, terminated, truncated, info = self.env.step(2)

        self.assertEqual(reward, 4.0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertTrue(info["moved"])
        self.assertEqual(info["score"], 4)
        self.assertEqual(info["points_gained"], 4)
        self.assertEqual(observation[0, 0], 4)
        self.assertEqual(np.count_nonzero(observation), 2)
        np.testing.assert_array_equal(info["afterstate"][0], [4, 0, 0, 0])
        self.assertEqual(np.count_nonzero(info["afterstate"]), 1)

    def test_step_noop(self):
        self.env.reset(seed=0)
        self.env.state = grid_engine.from_board([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])

        observation, reward, terminated, _, info = self.env.step(2)

        self.assertEqual(reward, 0.0)
        self.assertFalse(info["moved"])
        self.assertIsNone(info["afterstate"])
        self.assertEqual(np.count_nonzero(observation), 1)

    def test_valid_actions(self):
        self.env.reset(seed=0)
        self.env.state = grid_engine.from_board([
            [2, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        # down and right only
        self.assertEqual(self.env.valid_actions(), [1, 3])

    def test_terminated_on_loss(self):
        self.env.reset(seed=0)
        self.env.state = grid_engine.from_board([[2, 4], [4, 2]])
        _, reward, terminated, _, info = self.env.step(0)
        self.assertTrue(terminated)
        self.assertEqual(reward, 0.0)
        self.assertFalse(info["moved"])

    def test_best_survives_reset(self):
        self.env.reset(seed=0)
        self.env.state = grid_engine.from_board([[8, 8, 0, 0]] + [[0] * 4] * 3)
        self.env.step(2)
        _, info = self.env.reset(seed=1)
        self.assertEqual(info["score"], 0)
        self.assertEqual(info["best"], 16)

    def test_invalid_action(self):
        self.env.reset(seed=0)
        with self.assertRaises(ValueError):
            self.env.step(4)

    def test_random_episode(self):
        self.env.reset(seed=5)
        score = 0
        for _ in range(200):
            action = int(self.env.action_space.sample())
            _, reward, terminated, _, info = self.env.step(action)
            score += reward
            self.assertEqual(info["score"], score)
            if terminated:
                break

    def test_ansi_render(self):
        env = Game2048Env(size=3, render_mode="ansi")
        env.reset(seed=0)
        text = env.render()
        self.assertIn("Score: 0", text)
        self.assertEqual(len(text.splitlines()), 3 + 3)


if __name__ == "__main__":
    unittest.main()
