"""Gymnasium environment wrapper for the runner.

Runs the real game (same scheduler, tick and collision path as the window)
on an offscreen surface with a simulated clock, one frame per step.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import gymnasium
import numpy as np
import pygame
from gymnasium import spaces

from .assets import PlaceholderAssets
from .config import GameConfig
from .entities import Obstacle
from .game import GameState, RunnerGame
from .input import InputEvent
from .loop import FrameScheduler
from .renderer import PygameRenderer


logger = logging.getLogger(__name__)

OBS_SIZE = 8


class RunnerEnv(gymnasium.Env):
    """Gymnasium wrapper for the runner.

    Observation (float32, shape (8,)):
        [0] player height above its resting position (px, up is positive)
        [1] player vertical velocity (px/s, screen coordinates)
        [2] player airborne (0/1)
        [3] gap from the player's right edge to the nearest obstacle ahead
            (canvas width if none)
        [4-5] that obstacle's width and height (0 if none)
        [6] gap to the second obstacle ahead (canvas width if none)
        [7] spawn countdown as a fraction of the maximum spawn interval

    Action space: Discrete(2), 0 = keep running, 1 = jump.

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        progress: metres gained this step
        death:    1.0 on the colliding step
        jump:     1.0 when a jump actually started
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 3000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = max_episode_steps
        self.reward_weights = reward_weights or {
            "progress": 1.0,
            "death": -10.0,
            "jump": -0.01,
        }

        self.action_space = spaces.Discrete(2)
        self.observation_space = spaces.Box(
            low=-np.inf, high=np.inf, shape=(OBS_SIZE,), dtype=np.float32,
        )

        # Caller sets SDL_VIDEODRIVER for headless use
        if not pygame.get_init():
            pygame.init()

        size = (self.config.canvas_width, self.config.canvas_height)
        self._surface = pygame.Surface(size)
        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(size)
            pygame.display.set_caption("RunnerEnv")

        self._now_ms = 0.0
        self._scheduler = FrameScheduler(clock=lambda: self._now_ms)
        self.game = RunnerGame(
            self.config,
            PygameRenderer(self._surface),
            self._scheduler,
            rng=self.np_random,
        )
        assets = PlaceholderAssets(size, self.config.ground_line)
        asyncio.run(self.game.load(assets))

        self._episode_steps = 0

    @property
    def frame_ms(self) -> float:
        return self.config.frame_ms

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        # Spawning draws from the env's seeded generator
        self.game.rng = self.np_random
        self.game.obstacles.rng = self.np_random

        self.game.reset()
        self.game.start(timestamp_ms=self._now_ms)
        self._episode_steps = 0
        logger.debug("Episode reset at t=%.0f ms (seed=%s)", self._now_ms, seed)

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.game.state is not GameState.READY, "Must call reset() before step()"

        jumped = False
        if int(action) == 1 and self.game.state is GameState.RUNNING:
            was_airborne = self.game.player.airborne
            self.game.handle_input(InputEvent.JUMP)
            jumped = not was_airborne and self.game.player.airborne

        distance_before = self.game.distance
        self._now_ms += self.frame_ms
        self._scheduler.dispatch(self._now_ms)
        self._episode_steps += 1

        terminated = self.game.state is GameState.GAME_OVER
        truncated = self._episode_steps >= self.max_episode_steps

        reward_signals = {
            "progress": self.game.distance - distance_before,
            "death": 1.0 if terminated else 0.0,
            "jump": 1.0 if jumped else 0.0,
        }
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _obstacles_ahead(self) -> List[Obstacle]:
        player = self.game.player
        ahead = [o for o in self.game.obstacles.obstacles if o.x + o.width > player.x]
        return sorted(ahead, key=lambda o: o.x)

    def _get_obs(self) -> np.ndarray:
        obs = np.zeros(OBS_SIZE, dtype=np.float32)
        player = self.game.player
        front = player.x + player.width

        obs[0] = player.ground_y - player.y
        obs[1] = player.velocity_y
        obs[2] = float(player.airborne)

        ahead = self._obstacles_ahead()
        obs[3] = ahead[0].x - front if ahead else self.config.canvas_width
        if ahead:
            obs[4] = ahead[0].width
            obs[5] = ahead[0].height
        obs[6] = ahead[1].x - front if len(ahead) > 1 else self.config.canvas_width

        obs[7] = self.game.obstacles.spawn_timer_ms / self.config.obstacles.max_spawn_interval_ms
        return obs

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.get_state()
        info["episode_steps"] = self._episode_steps
        info["time_ms"] = self._now_ms
        return info

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self) -> np.ndarray:
        """Render current state to numpy array (H, W, 3) uint8."""
        self.game.draw()
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(self._surface)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            self.game.draw()
            self._display.blit(self._surface, (0, 0))
            pygame.display.flip()

    def close(self):
        self.game.destroy()
        if self._display:
            pygame.display.quit()
            self._display = None
