"""Configuration system for the endless runner.

Values are grouped by the component that consumes them:
- PlayerConfig: jump physics and run animation timing
- ObstacleConfig: spawn interval bounds
- BackgroundConfig: parallax ratio
- GameConfig: canvas geometry, scroll speed and everything above

Speeds are configured in km/h and converted once to pixels/second through
`pixels_per_meter`, so distance in metres and scroll speed stay consistent.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .exceptions import ConfigError
from .geometry import to_pixels_per_second


@dataclass
class PlayerConfig:
    """Player physics and animation parameters."""

    start_x: float = 50.0  # Left edge of the player sprite (px)
    gravity: float = 1800.0  # Downward acceleration while airborne (px/s^2)
    jump_strength: float = 700.0  # Initial upward speed of a jump (px/s)
    animation_speed_ms: float = 150.0  # Time each run frame is shown (ms)

    @property
    def peak_height(self) -> float:
        """Apex height of a jump under continuous integration: v0^2 / 2g."""
        return self.jump_strength ** 2 / (2 * self.gravity)

    def __post_init__(self):
        if self.gravity <= 0:
            raise ConfigError(f"gravity must be positive, got {self.gravity}")
        if self.jump_strength <= 0:
            raise ConfigError(f"jump_strength must be positive, got {self.jump_strength}")
        if self.animation_speed_ms <= 0:
            raise ConfigError(
                f"animation_speed_ms must be positive, got {self.animation_speed_ms}"
            )

    def to_dict(self) -> Dict[str, float]:
        return {
            "start_x": self.start_x,
            "gravity": self.gravity,
            "jump_strength": self.jump_strength,
            "animation_speed_ms": self.animation_speed_ms,
        }


@dataclass
class ObstacleConfig:
    """Obstacle spawn scheduling.

    The countdown to the next spawn is drawn uniformly from
    [min_spawn_interval_ms, max_spawn_interval_ms] after every spawn.
    """

    min_spawn_interval_ms: int = 1500
    max_spawn_interval_ms: int = 3500

    def __post_init__(self):
        if self.min_spawn_interval_ms <= 0:
            raise ConfigError(
                f"min_spawn_interval_ms must be positive, got {self.min_spawn_interval_ms}"
            )
        if self.min_spawn_interval_ms > self.max_spawn_interval_ms:
            raise ConfigError(
                "min_spawn_interval_ms "
                f"({self.min_spawn_interval_ms}) > max_spawn_interval_ms "
                f"({self.max_spawn_interval_ms})"
            )

    def to_dict(self) -> Dict[str, int]:
        return {
            "min_spawn_interval_ms": self.min_spawn_interval_ms,
            "max_spawn_interval_ms": self.max_spawn_interval_ms,
        }


@dataclass
class BackgroundConfig:
    """Background parallax. A ratio of 1.0 scrolls with the foreground."""

    scroll_ratio: float = 1.0

    def __post_init__(self):
        if self.scroll_ratio < 0:
            raise ConfigError(f"scroll_ratio must be >= 0, got {self.scroll_ratio}")

    def to_dict(self) -> Dict[str, float]:
        return {"scroll_ratio": self.scroll_ratio}


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    player: PlayerConfig = field(default_factory=PlayerConfig)
    obstacles: ObstacleConfig = field(default_factory=ObstacleConfig)
    background: BackgroundConfig = field(default_factory=BackgroundConfig)

    # Logical canvas; the ground line sits ground_margin px above the bottom
    canvas_width: int = 800
    canvas_height: int = 400
    ground_margin: int = 100

    speed_kmh: float = 70.0
    pixels_per_meter: float = 10.0

    # Collision boxes are inset by this much on every side
    bounds_padding: float = 5.0

    fps: int = 60
    debug: bool = False

    def __post_init__(self):
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ConfigError(
                f"canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if not 0 <= self.ground_margin < self.canvas_height:
            raise ConfigError(
                f"ground_margin must be within the canvas height, got {self.ground_margin}"
            )
        if self.speed_kmh < 0:
            raise ConfigError(f"speed_kmh must be >= 0, got {self.speed_kmh}")
        if self.pixels_per_meter <= 0:
            raise ConfigError(f"pixels_per_meter must be positive, got {self.pixels_per_meter}")
        if self.bounds_padding < 0:
            raise ConfigError(f"bounds_padding must be >= 0, got {self.bounds_padding}")
        if self.fps <= 0:
            raise ConfigError(f"fps must be positive, got {self.fps}")

    @property
    def ground_line(self) -> float:
        """Y coordinate the player's feet and obstacle bases rest on."""
        return float(self.canvas_height - self.ground_margin)

    @property
    def speed_px_per_sec(self) -> float:
        """Scroll speed shared by obstacles, background and distance."""
        return to_pixels_per_second(self.speed_kmh, self.pixels_per_meter)

    @property
    def frame_ms(self) -> float:
        """Nominal duration of one frame at the target fps."""
        return 1000.0 / self.fps

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "player": self.player.to_dict(),
            "obstacles": self.obstacles.to_dict(),
            "background": self.background.to_dict(),
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "ground_margin": self.ground_margin,
            "speed_kmh": self.speed_kmh,
            "pixels_per_meter": self.pixels_per_meter,
            "bounds_padding": self.bounds_padding,
            "fps": self.fps,
            "debug": self.debug,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameConfig":
        """Create from a (possibly partial) dictionary produced by `to_dict`."""
        defaults = cls()
        return cls(
            player=PlayerConfig(**d.get("player", {})),
            obstacles=ObstacleConfig(**d.get("obstacles", {})),
            background=BackgroundConfig(**d.get("background", {})),
            canvas_width=d.get("canvas_width", defaults.canvas_width),
            canvas_height=d.get("canvas_height", defaults.canvas_height),
            ground_margin=d.get("ground_margin", defaults.ground_margin),
            speed_kmh=d.get("speed_kmh", defaults.speed_kmh),
            pixels_per_meter=d.get("pixels_per_meter", defaults.pixels_per_meter),
            bounds_padding=d.get("bounds_padding", defaults.bounds_padding),
            fps=d.get("fps", defaults.fps),
            debug=d.get("debug", defaults.debug),
        )


# Predefined configurations selectable from the command line
CONFIGS = {
    "default": GameConfig(),

    # Slower scroll and wider spawn gaps
    "relaxed": GameConfig(
        speed_kmh=50.0,
        obstacles=ObstacleConfig(min_spawn_interval_ms=2000, max_spawn_interval_ms=4500),
    ),

    # Fast scroll, tight spawns, snappier jump to keep it survivable
    "frantic": GameConfig(
        speed_kmh=95.0,
        player=PlayerConfig(gravity=2400.0, jump_strength=850.0),
        obstacles=ObstacleConfig(min_spawn_interval_ms=900, max_spawn_interval_ms=2200),
    ),

    # Default tuning with the collision-box overlay on
    "debug": GameConfig(debug=True),
}
