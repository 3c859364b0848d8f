"""Obstacle spawning, scrolling, culling and collision queries."""

import logging
from typing import List, Optional, Sequence

import numpy as np
import pygame

from .config import ObstacleConfig
from .entities import DEFAULT_PADDING, Obstacle, Player
from .exceptions import ConfigError
from .geometry import overlaps, random_int_inclusive
from .renderer import Renderer


logger = logging.getLogger(__name__)


class ObstacleManager:
    """Owns the live obstacles and the randomized spawn countdown.

    Obstacles enter at `spawn_x` (the right edge of the canvas), sit on the
    ground line and move left at the shared scroll speed. They are dropped
    once fully offscreen to the left.
    """

    def __init__(
        self,
        images: Sequence[pygame.Surface],
        spawn_x: float,
        ground_line: float,
        speed_px_per_sec: float,
        config: Optional[ObstacleConfig] = None,
        rng: Optional[np.random.Generator] = None,
        padding: float = DEFAULT_PADDING,
    ):
        """Create an empty manager.

        Args:
            images: Sprite variants; each spawn picks one uniformly.
            spawn_x: X where new obstacles appear.
            ground_line: Y the obstacle bases rest on.
            speed_px_per_sec: Leftward scroll speed.
            config: Spawn interval bounds. Uses defaults if None.
            rng: Random source. A fresh default_rng() if None.
            padding: Collision box inset for spawned obstacles.
        """
        if not images:
            raise ConfigError("ObstacleManager needs at least one obstacle image")

        self.images = list(images)
        self.spawn_x = spawn_x
        self.ground_line = ground_line
        self.speed_px_per_sec = speed_px_per_sec
        self.config = config or ObstacleConfig()
        self.rng = rng or np.random.default_rng()
        self.padding = padding

        self.obstacles: List[Obstacle] = []
        self.spawn_timer_ms: float = self.config.min_spawn_interval_ms

    def __len__(self) -> int:
        return len(self.obstacles)

    def update(self, dt_ms: float) -> None:
        """Move and cull obstacles, then run the spawn countdown.

        Args:
            dt_ms: Time step in milliseconds.
        """
        for obstacle in self.obstacles:
            obstacle.update(dt_ms)
        self.obstacles = [o for o in self.obstacles if not o.is_offscreen()]

        self.spawn_timer_ms -= dt_ms
        if self.spawn_timer_ms <= 0:
            self.spawn()
            self.reset_spawn_timer()

    def spawn(self) -> Obstacle:
        """Add one obstacle at the spawn edge using a random sprite variant."""
        index = random_int_inclusive(self.rng, 0, len(self.images) - 1)
        obstacle = Obstacle(
            self.spawn_x,
            self.ground_line,
            self.images[index],
            self.speed_px_per_sec,
            padding=self.padding,
        )
        self.obstacles.append(obstacle)
        logger.debug(
            "Spawned obstacle variant %d (%dx%d), %d live",
            index, obstacle.width, obstacle.height, len(self.obstacles),
        )
        return obstacle

    def reset_spawn_timer(self) -> None:
        self.spawn_timer_ms = random_int_inclusive(
            self.rng,
            self.config.min_spawn_interval_ms,
            self.config.max_spawn_interval_ms,
        )

    def check_collision(self, player: Player) -> bool:
        """Whether the player's collision box overlaps any live obstacle."""
        player_bounds = player.bounds
        return any(overlaps(player_bounds, o.bounds) for o in self.obstacles)

    def clear(self) -> None:
        """Remove every obstacle and restart the countdown at the minimum."""
        self.obstacles = []
        self.spawn_timer_ms = self.config.min_spawn_interval_ms

    def draw(self, renderer: Renderer) -> None:
        for obstacle in self.obstacles:
            obstacle.draw(renderer)

    def draw_bounds(self, renderer: Renderer) -> None:
        for obstacle in self.obstacles:
            obstacle.draw_bounds(renderer)
