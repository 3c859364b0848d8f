"""Pytest configuration and shared fixtures."""

import asyncio
import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'

import numpy as np
import pygame
import pytest

from endless_runner.assets import PlaceholderAssets
from endless_runner.config import GameConfig
from endless_runner.game import RunnerGame
from endless_runner.loop import FrameScheduler


class RecordingRenderer:
    """Renderer that records draw calls instead of drawing."""

    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def draw_image(self, image, x, y, width=None, height=None):
        self.calls.append(("image", image, x, y, width, height))

    def draw_text(self, text, x, y, size=24, color=(0, 0, 0), align="left"):
        self.calls.append(("text", text, x, y, size, color, align))

    def draw_rectangle(self, x, y, width, height, color, filled=True):
        self.calls.append(("rect", x, y, width, height, color, filled))

    def texts(self):
        return [c[1] for c in self.calls if c[0] == "text"]

    def rects(self):
        return [c for c in self.calls if c[0] == "rect"]

    def reset(self):
        self.calls.clear()


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return FrameScheduler(clock=clock)


@pytest.fixture
def make_surface():
    def _make(width, height, color=(200, 50, 50)):
        surface = pygame.Surface((width, height), pygame.SRCALPHA)
        surface.fill(color)
        return surface
    return _make


@pytest.fixture
def loaded_game(game_config, renderer, scheduler):
    """Game with placeholder sprites, on the title screen."""
    game = RunnerGame(game_config, renderer, scheduler, rng=np.random.default_rng(0))
    assets = PlaceholderAssets(
        (game_config.canvas_width, game_config.canvas_height), game_config.ground_line
    )
    asyncio.run(game.load(assets))
    return game
