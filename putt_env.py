import logging
import math

import gymnasium as gym
from gymnasium import spaces
import numpy as np
import pygame

import putt_input
from putt_config import field_size, load_config
from putt_physics import step as physics_step
from putt_render import render as render_state
from putt_state import DRAG_SCALE, MAX_POWER, GameState

logger = logging.getLogger("putting.env")


class PuttingEnv(gym.Env):
    """
    The putting green as a Gymnasium environment.

    One action is one putt: the action index picks a direction and a power
    level, the putt is played through the same drag/release handling a
    player uses, and the simulation runs until the ball stops or drops.
    """

    metadata = {
        "render_modes": ["human", "rgb_array", None],
        "render_fps": 60,
    }

    def __init__(self, render_mode=None, config=None, max_shots=10, n_angles=8, n_powers=5):
        super().__init__()
        assert render_mode in self.metadata["render_modes"]

        self.render_mode = render_mode
        self.config = config or load_config()
        self.width, self.height = field_size(self.config["window_width"], self.config)
        self.window = None
        self.clock = None

        self.state = None
        self.max_shots = max_shots
        self.max_iterations = 2000  # frames per putt, safety valve
        self.initial_distance = 1.0
        self.trajectory = []

        # Action space discretization
        self.n_angles = n_angles
        self.n_powers = n_powers
        self.max_power = MAX_POWER
        self.action_space = spaces.Discrete(self.n_angles * self.n_powers)

        # Ball and hole positions, normalized to the field
        self.observation_space = spaces.Box(
            low=np.array([0, 0, 0, 0], dtype=np.float32),
            high=np.array([1, 1, 1, 1], dtype=np.float32),
            dtype=np.float32
        )

    def _get_obs(self):
        return np.array([
            self.state.ball.x / self.state.width,
            self.state.ball.y / self.state.height,
            self.state.hole.x / self.state.width,
            self.state.hole.y / self.state.height
        ], dtype=np.float32)

    def _get_info(self):
        return {
            "shots": self.state.strokes,
            "distance_to_hole": self.state.distance_to_hole(),
            "in_hole": self.state.sinking or self.state.over,
            "message": self.state.scoreboard.message,
        }

    def reset(self, seed=None, options=None):
        # Seeds self.np_random, which also picks the win message
        super().reset(seed=seed)

        if self.state is None:
            self.state = GameState(self.width, self.height)
        else:
            self.state.reset()
        self.initial_distance = self.state.distance_to_hole()
        self.trajectory = [(self.state.ball.x, self.state.ball.y)]

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), self._get_info()

    def _decode_action(self, action_idx):
        angle_idx = action_idx // self.n_powers
        power_idx = action_idx % self.n_powers

        angle = 2 * math.pi * angle_idx / self.n_angles
        power = (power_idx + 1) * self.max_power / self.n_powers
        return angle, power

    def putt(self, angle, power):
        """Play a putt as a drag pulled back from the ball centre and released."""
        ball = self.state.ball
        pull = power / DRAG_SCALE
        start = (ball.x, ball.y)
        end = (ball.x - math.cos(angle) * pull, ball.y - math.sin(angle) * pull)

        if not putt_input.on_pointer_down(self.state, start):
            return None
        putt_input.on_pointer_move(self.state, end)
        return putt_input.on_pointer_up(self.state)

    def _simulate(self):
        state = self.state
        for _ in range(self.max_iterations):
            physics_step(state, self.np_random)
            self.trajectory.append((state.ball.x, state.ball.y))

            if self.render_mode == "human":
                self.render()

            if state.over:
                break
            if not state.sinking and state.ball.vel_x == 0 and state.ball.vel_y == 0:
                break
        else:
            logger.warning("Putt still rolling after %d frames", self.max_iterations)

    def _is_terminated(self):
        return self.state.over

    def _is_truncated(self):
        return not self.state.over and self.state.strokes >= self.max_shots

    def step(self, action):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r} for {self.action_space}")

        if self._is_terminated() or self._is_truncated():
            return self._get_obs(), 0.0, self._is_terminated(), self._is_truncated(), self._get_info()

        angle, power = self._decode_action(int(action))
        self.putt(angle, power)
        self._simulate()

        terminated = self._is_terminated()
        truncated = self._is_truncated()

        if terminated:
            # Higher reward for fewer shots
            reward = 100 - (self.state.strokes - 1) * 10
        elif truncated:
            reward = -50
        else:
            # Reward for getting closer to the hole
            distance = self.state.distance_to_hole()
            reward = (self.initial_distance - distance) / self.initial_distance * 5

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self._render_frame()

        self._render_frame()
        pygame.event.pump()
        pygame.display.flip()
        self.clock.tick(self.metadata["render_fps"])
        return None

    def _render_frame(self):
        if self.window is None and self.render_mode == "human":
            pygame.init()
            pygame.display.init()
            self.window = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(self.config["caption"])

        if self.clock is None and self.render_mode == "human":
            self.clock = pygame.time.Clock()

        canvas = pygame.Surface((self.state.width, self.state.height))
        render_state(canvas, self.state)

        if self.render_mode == "human":
            self.window.blit(canvas, canvas.get_rect())
            return None
        return np.transpose(
            np.array(pygame.surfarray.pixels3d(canvas)), axes=(1, 0, 2)
        )

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            pygame.quit()
            self.window = None
            self.clock = None
