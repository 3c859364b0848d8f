"""Game entities: Player, obstacles, scrolling background.

Positions are top-left screen coordinates in pixels with y growing downward.
Time steps arrive in milliseconds; velocities are in pixels per second.
"""

import logging
from typing import Optional, Sequence

import pygame

from .config import BackgroundConfig, PlayerConfig
from .exceptions import ConfigError
from .geometry import Rect
from .renderer import COLOR_BOUNDS, Renderer


logger = logging.getLogger(__name__)

DEFAULT_PADDING = 5.0


class Entity:
    """Moving rectangle with a padded collision box.

    `rect` is the visual rectangle; `bounds` is the forgiving collision box
    used only for overlap tests.
    """

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        velocity_x: float = 0.0,
        velocity_y: float = 0.0,
        padding: float = DEFAULT_PADDING,
    ):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.velocity_x = velocity_x
        self.velocity_y = velocity_y
        self.padding = padding

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def bounds(self) -> Rect:
        """Collision box: `rect` shrunk by `padding` on every side."""
        return self.rect.inset(self.padding)

    def is_offscreen(self) -> bool:
        """Whether the entity has fully left the screen to the left."""
        return self.x + self.width < 0

    def update(self, dt_ms: float) -> None:
        """Integrate position with the current velocity.

        Args:
            dt_ms: Time step in milliseconds.
        """
        dt = dt_ms / 1000
        self.x += self.velocity_x * dt
        self.y += self.velocity_y * dt

    def draw_bounds(self, renderer: Renderer) -> None:
        b = self.bounds
        renderer.draw_rectangle(b.x, b.y, b.width, b.height, COLOR_BOUNDS)


class Player(Entity):
    """Runner with a grounded/airborne jump state and a run-cycle animation.

    The sprite size is taken from the first run frame. `ground_y` is the
    resting top-left y, so the feet sit exactly on `ground_line`.
    """

    def __init__(
        self,
        run_frames: Sequence[pygame.Surface],
        jump_image: pygame.Surface,
        ground_line: float,
        config: Optional[PlayerConfig] = None,
        padding: float = DEFAULT_PADDING,
    ):
        """Create player standing on the ground line.

        Args:
            run_frames: Run animation frames, shown in order while grounded.
            jump_image: Sprite shown while airborne.
            ground_line: Y coordinate the feet rest on.
            config: Physics/animation parameters. Uses defaults if None.
            padding: Collision box inset.
        """
        if not run_frames:
            raise ConfigError("Player needs at least one run frame")

        self.config = config or PlayerConfig()
        self.run_frames = list(run_frames)
        self.jump_image = jump_image

        width, height = self.run_frames[0].get_size()
        self.ground_y = ground_line - height
        self.start_x = self.config.start_x

        super().__init__(self.start_x, self.ground_y, width, height, padding=padding)

        self.airborne = False
        self.frame_index = 0
        self.anim_elapsed = 0.0

    @property
    def grounded(self) -> bool:
        return not self.airborne

    @property
    def is_at_rest(self) -> bool:
        """Grounded and standing exactly on the ground line."""
        return self.grounded and self.y == self.ground_y

    @property
    def image(self) -> pygame.Surface:
        """Sprite for the current state."""
        if self.airborne:
            return self.jump_image
        return self.run_frames[self.frame_index]

    def jump(self) -> bool:
        """Start a jump if grounded. Returns whether a jump started."""
        if self.airborne:
            return False
        self.airborne = True
        self.velocity_y = -self.config.jump_strength
        return True

    def update(self, dt_ms: float) -> None:
        """Advance jump physics or the run animation.

        Airborne: semi-implicit Euler (position first, then velocity), landing
        clamps to `ground_y`. Grounded: the frame advances once the accumulator
        exceeds `animation_speed_ms`.
        """
        if self.airborne:
            dt = dt_ms / 1000
            self.y += self.velocity_y * dt
            self.velocity_y += self.config.gravity * dt

            if self.y >= self.ground_y:
                self.y = self.ground_y
                self.velocity_y = 0.0
                self.airborne = False
        else:
            self.anim_elapsed += dt_ms
            if self.anim_elapsed > self.config.animation_speed_ms:
                self.anim_elapsed = 0.0
                self.frame_index = (self.frame_index + 1) % len(self.run_frames)

    def reset(self) -> None:
        """Back to the start position, grounded, first animation frame."""
        self.x = self.start_x
        self.y = self.ground_y
        self.velocity_y = 0.0
        self.airborne = False
        self.frame_index = 0
        self.anim_elapsed = 0.0

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_image(self.image, self.x, self.y)


class Obstacle(Entity):
    """Ground obstacle scrolling left at constant speed.

    Shape and sprite are fixed at creation; only the position changes.
    """

    def __init__(
        self,
        x: float,
        ground_line: float,
        image: pygame.Surface,
        speed_px_per_sec: float,
        padding: float = DEFAULT_PADDING,
    ):
        width, height = image.get_size()
        super().__init__(
            x,
            ground_line - height,
            width,
            height,
            velocity_x=-speed_px_per_sec,
            padding=padding,
        )
        self.image = image

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_image(self.image, self.x, self.y)


class Background(Entity):
    """Endlessly tiling background made of two copies of one image.

    `x` is the first segment, `x2` the second. Whenever a segment has
    scrolled a full width past the left edge it is moved to directly after
    the other one, so the pair always differs by exactly `width`.
    """

    def __init__(
        self,
        image: pygame.Surface,
        canvas_width: float,
        canvas_height: float,
        config: Optional[BackgroundConfig] = None,
        y: float = 0.0,
    ):
        self.config = config or BackgroundConfig()
        self.image = image
        width = image.get_width()
        if width <= 0:
            raise ConfigError("Background image has zero width")
        if width * 2 < canvas_width:
            logger.warning(
                "Background tile (%dpx) is narrower than half the canvas (%dpx); gaps will show",
                width, canvas_width,
            )
        super().__init__(0.0, y, width, canvas_height, padding=0.0)
        self.x2 = float(width)

    @property
    def x1(self) -> float:
        return self.x

    def update(self, dt_ms: float, scroll_speed_px_per_sec: float = 0.0) -> None:
        """Scroll both segments left and wrap whichever fell off.

        Args:
            dt_ms: Time step in milliseconds.
            scroll_speed_px_per_sec: Foreground speed; scaled by scroll_ratio.
        """
        self.velocity_x = -scroll_speed_px_per_sec * self.config.scroll_ratio
        shift = self.velocity_x * dt_ms / 1000
        self.x += shift
        self.x2 += shift

        # A long frame can push both segments past; keep wrapping until tiled
        while self.x <= -self.width or self.x2 <= -self.width:
            if self.x <= -self.width:
                self.x = self.x2 + self.width
            if self.x2 <= -self.width:
                self.x2 = self.x + self.width

    def reset(self) -> None:
        self.x = 0.0
        self.x2 = float(self.width)

    def draw(self, renderer: Renderer) -> None:
        renderer.draw_image(self.image, self.x, self.y, self.width, self.height)
        renderer.draw_image(self.image, self.x2, self.y, self.width, self.height)
