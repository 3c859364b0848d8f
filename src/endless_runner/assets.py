"""Image acquisition.

Both providers expose the same interface:

    await provider.load_all(ASSET_MANIFEST)   # single join point
    provider.get("player_jump")               # only after load_all succeeded

`AssetManager` decodes image files concurrently and fails the whole batch if
any file fails; nothing is registered from a failed batch. `PlaceholderAssets`
generates flat-coloured sprites with the same names and sizes, for headless
runs and for playing without an asset directory.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pygame

from .exceptions import AssetLoadError, AssetNotLoadedError
from .renderer import PygameRenderer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetSpec:
    """Name under which an image is registered and its path."""
    name: str
    path: str


ASSET_MANIFEST: Tuple[AssetSpec, ...] = (
    AssetSpec("player_run_1", "player_run_1.png"),
    AssetSpec("player_run_2", "player_run_2.png"),
    AssetSpec("player_jump", "player_jump.png"),
    AssetSpec("background", "background_tile.png"),
    AssetSpec("obstacle_rock_1", "obstacle_rock.png"),
    AssetSpec("obstacle_rock_2", "obstacle_rock50-80.png"),
    AssetSpec("obstacle_rock_3", "obstacle_rock40-50.png"),
)

RUN_FRAMES = ("player_run_1", "player_run_2")
JUMP_FRAME = "player_jump"
BACKGROUND = "background"
OBSTACLE_PREFIX = "obstacle_"


def obstacle_names(names: Iterable[str]) -> List[str]:
    """Obstacle sprite names in manifest order."""
    return [n for n in names if n.startswith(OBSTACLE_PREFIX)]


class AssetManager:
    """Loads image files from `base_dir` and caches them by name."""

    def __init__(self, base_dir: Union[str, Path] = "assets"):
        self.base_dir = Path(base_dir)
        self._assets: Dict[str, pygame.Surface] = {}
        self.loaded = False

    def names(self) -> List[str]:
        return list(self._assets)

    def get(self, name: str) -> pygame.Surface:
        try:
            return self._assets[name]
        except KeyError:
            raise AssetNotLoadedError(name) from None

    async def load_all(self, specs: Sequence[AssetSpec]) -> None:
        """Load every asset concurrently; all or nothing.

        Raises:
            AssetLoadError: Listing every asset that failed.
        """
        results = await asyncio.gather(
            *(self._load_one(spec) for spec in specs),
            return_exceptions=True,
        )

        failures: Dict[str, str] = {}
        loaded: Dict[str, pygame.Surface] = {}
        for spec, result in zip(specs, results):
            if isinstance(result, BaseException):
                logger.error("Failed to load asset: %s at %s (%s)", spec.name, spec.path, result)
                failures[spec.name] = str(result)
            else:
                loaded[spec.name] = result

        if failures:
            raise AssetLoadError(failures)

        self._assets.update(loaded)
        self.loaded = True
        logger.info("All assets loaded (%d)", len(loaded))

    async def _load_one(self, spec: AssetSpec) -> pygame.Surface:
        path = self.base_dir / spec.path
        image = await asyncio.to_thread(pygame.image.load, str(path))
        return _prepare(image)


class PlaceholderAssets:
    """Generated sprites matching the manifest names and the artwork sizes."""

    # name -> (size, RGB)
    SPRITES: Dict[str, Tuple[Tuple[int, int], Tuple[int, int, int]]] = {
        "player_run_1": ((48, 64), (52, 101, 164)),
        "player_run_2": ((48, 64), (70, 130, 200)),
        "player_jump": ((48, 64), (230, 126, 34)),
        "obstacle_rock_1": ((40, 40), (127, 140, 141)),
        "obstacle_rock_2": ((50, 80), (95, 106, 106)),
        "obstacle_rock_3": ((40, 50), (149, 165, 166)),
    }

    def __init__(self, canvas_size: Tuple[int, int] = (800, 400), ground_line: Optional[float] = None):
        self.canvas_size = canvas_size
        self.ground_line = ground_line if ground_line is not None else canvas_size[1] - 100
        self._assets: Dict[str, pygame.Surface] = {}
        self.loaded = False

    def names(self) -> List[str]:
        return list(self._assets)

    def get(self, name: str) -> pygame.Surface:
        try:
            return self._assets[name]
        except KeyError:
            raise AssetNotLoadedError(name) from None

    async def load_all(self, specs: Sequence[AssetSpec]) -> None:
        """Generate a sprite for each requested name.

        Raises:
            AssetLoadError: For names this provider cannot generate.
        """
        generated: Dict[str, pygame.Surface] = {}
        failures: Dict[str, str] = {}
        for spec in specs:
            surface = self._generate(spec.name)
            if surface is None:
                failures[spec.name] = "no placeholder for this asset"
            else:
                generated[spec.name] = surface

        if failures:
            raise AssetLoadError(failures)

        self._assets.update(generated)
        self.loaded = True
        logger.info("Generated %d placeholder assets", len(generated))

    def _generate(self, name: str) -> Optional[pygame.Surface]:
        if name == BACKGROUND:
            tile = pygame.Surface(self.canvas_size)
            renderer = PygameRenderer(tile)
            renderer.clear()
            renderer.draw_ground(self.ground_line)
            return _prepare(tile)

        if name not in self.SPRITES:
            return None
        size, color = self.SPRITES[name]
        sprite = pygame.Surface(size, pygame.SRCALPHA)
        sprite.fill(color)
        return _prepare(sprite)


def _prepare(image: pygame.Surface) -> pygame.Surface:
    """Convert to the display format once a window exists."""
    if pygame.display.get_init() and pygame.display.get_surface() is not None:
        return image.convert_alpha()
    return image
