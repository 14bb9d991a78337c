import gymnasium as gym
from gymnasium import spaces
import numpy as np

import grid_engine
from grid_engine import Spawner


class Game2048Env(gym.Env):
    """
    gymnasium environment around the grid engine

    afterstate framework:
    - the observation is the board after the random tile
    - info['afterstate'] is the board after the move, before the tile
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, size=grid_engine.DEFAULT_SIZE, render_mode=None):
        super().__init__()

        self.size = size
        self.render_mode = render_mode

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # raw tile values, not log2
        self.observation_space = spaces.Box(
            low=0,
            high=131072,
            shape=(size, size),
            dtype=np.int32
        )

        self.action_to_direction = {
            0: 'up',
            1: 'down',
            2: 'left',
            3: 'right'
        }

        self.spawner = Spawner()
        self.state = grid_engine.new_game(size, spawner=self.spawner)
        self.last_afterstate = None

    def _get_observation(self):
        return np.array(self.state.board, dtype=np.int32)

    def _direction(self, action):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        return self.action_to_direction[int(action)]

    def get_afterstate(self, action):
        """
        board after the move but before the random tile

        returns:
            afterstate_board: board after the move, None if the move is invalid
            reward: points earned from merging
            valid: if the move changed the board
        """
        direction = self._direction(action)
        if self.state.over:
            return None, 0, False

        board, points = grid_engine.slide(self.state.board, direction)
        afterstate = np.array(board, dtype=np.int32)
        if np.array_equal(afterstate, self._get_observation()):
            return None, 0, False
        return afterstate, points, True

    def valid_actions(self):
        """actions that would change the board"""
        return [action for action in range(4) if self.get_afterstate(action)[2]]

    def reset(self, seed=None, options=None):
        """start a new game, keeping the best score"""
        super().reset(seed=seed)

        # the engine draws from its own generator, seeded from np_random
        self.spawner = Spawner.from_seed(int(self.np_random.integers(2**32)))
        self.state = grid_engine.new_game(self.size, best=self.state.best, spawner=self.spawner)
        self.last_afterstate = None

        info = {"score": self.state.score, "best": self.state.best}
        return self._get_observation(), info

    def step(self, action):
        direction = self._direction(action)
        afterstate_board, _, valid = self.get_afterstate(action)

        outcome = grid_engine.move(self.state, direction, spawner=self.spawner)
        self.state = outcome.state

        if valid:
            self.last_afterstate = afterstate_board

        reward = float(outcome.gained)
        info = {
            "score": self.state.score,
            "best": self.state.best,
            "moved": outcome.changed,
            "points_gained": outcome.gained,
            "afterstate": afterstate_board if valid else None,
            "max_tile": grid_engine.max_tile(self.state.board)
        }

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, outcome.game_over, False, info

    def render(self):
        text = grid_engine.format_board(self.state)
        if self.render_mode == "ansi":
            return text
        print(text)
