"""endless-runner: side-scrolling endless runner built on pygame.

The player runs at a fixed speed, jumps over obstacles that spawn at random
intervals, and scores the distance covered in metres. The same game runs in a
window (`python -m endless_runner`) or headless as a Gymnasium environment for
scripted and learned agents.
"""

from .config import PlayerConfig, ObstacleConfig, BackgroundConfig, GameConfig, CONFIGS
from .geometry import Rect, overlaps, to_pixels_per_second, random_int_inclusive
from .entities import Entity, Player, Obstacle, Background
from .obstacles import ObstacleManager
from .assets import ASSET_MANIFEST, AssetSpec, AssetManager, PlaceholderAssets
from .game import GameState, RunnerGame
from .exceptions import RunnerError, ConfigError, AssetError, AssetLoadError, AssetNotLoadedError

__all__ = [
    "PlayerConfig",
    "ObstacleConfig",
    "BackgroundConfig",
    "GameConfig",
    "CONFIGS",
    "Rect",
    "overlaps",
    "to_pixels_per_second",
    "random_int_inclusive",
    "Entity",
    "Player",
    "Obstacle",
    "Background",
    "ObstacleManager",
    "ASSET_MANIFEST",
    "AssetSpec",
    "AssetManager",
    "PlaceholderAssets",
    "GameState",
    "RunnerGame",
    "RunnerError",
    "ConfigError",
    "AssetError",
    "AssetLoadError",
    "AssetNotLoadedError",
]
