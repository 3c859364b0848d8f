"""Windowed host: owns the pygame display and drives the game's frames."""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pygame

from .assets import AssetManager, PlaceholderAssets
from .config import GameConfig
from .exceptions import AssetLoadError
from .game import RunnerGame
from .input import InputEvent, InputMapper
from .loop import FrameScheduler
from .renderer import PygameRenderer


logger = logging.getLogger(__name__)

WINDOW_TITLE = "Endless Runner"


def run(
    config: Optional[GameConfig] = None,
    asset_dir: Optional[Union[str, Path]] = None,
    seed: Optional[int] = None,
) -> int:
    """Open the window and play until it is closed.

    Args:
        config: Game configuration. Uses defaults if None.
        asset_dir: Directory holding the sprite files. Generated placeholder
            sprites are used if None.
        seed: Seed for obstacle spawning.

    Returns:
        Process exit code: 0 on a normal quit, 1 if assets failed to load.
    """
    config = config or GameConfig()
    size = (config.canvas_width, config.canvas_height)

    pygame.init()
    screen = pygame.display.set_mode(size)
    pygame.display.set_caption(WINDOW_TITLE)
    clock = pygame.time.Clock()

    scheduler = FrameScheduler()
    game = RunnerGame(
        config,
        PygameRenderer(screen),
        scheduler,
        rng=np.random.default_rng(seed),
    )
    mapper = InputMapper()

    if asset_dir is None:
        assets = PlaceholderAssets(size, config.ground_line)
    else:
        assets = AssetManager(asset_dir)

    exit_code = 0
    try:
        try:
            asyncio.run(game.load(assets))
        except AssetLoadError:
            # The failure screen stays up until the window is closed
            exit_code = 1

        running = True
        while running:
            for event in mapper.translate(pygame.event.get()):
                if event is InputEvent.QUIT:
                    running = False
                    break
                game.handle_input(event)

            scheduler.dispatch()
            pygame.display.flip()
            clock.tick(config.fps)
    finally:
        game.destroy()
        pygame.quit()

    logger.info("Window closed")
    return exit_code
