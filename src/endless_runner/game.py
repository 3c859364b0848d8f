"""Game session orchestrator.

Owns the player, background and obstacle manager, drives the
update -> draw cycle from frame callbacks, tracks distance and handles the
title / running / game-over states.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Sequence

import numpy as np

from .assets import ASSET_MANIFEST, BACKGROUND, JUMP_FRAME, RUN_FRAMES, AssetSpec, obstacle_names
from .config import GameConfig
from .entities import Background, Player
from .exceptions import AssetLoadError
from .input import InputEvent
from .loop import FrameScheduler
from .obstacles import ObstacleManager
from .renderer import COLOR_GAME_OVER, COLOR_TEXT, Renderer


logger = logging.getLogger(__name__)


class GameState(Enum):
    LOADING = "loading"
    READY = "ready"
    RUNNING = "running"
    GAME_OVER = "game_over"
    LOAD_FAILED = "load_failed"


class RunnerGame:
    """Main game object coordinating all systems.

    Handles:
    - Asset acquisition (one awaited batch) and entity construction
    - Frame callbacks: per-tick update then draw
    - Collision -> game over, distance tracking, restart

    Usage:
        game = RunnerGame(config, renderer, scheduler)
        await game.load(assets)
        game.handle_input(InputEvent.JUMP)   # starts the run
        scheduler.dispatch(now)              # once per display refresh
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        renderer: Optional[Renderer] = None,
        scheduler: Optional[FrameScheduler] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize game in the LOADING state.

        Args:
            config: Game configuration. Uses defaults if None.
            renderer: Drawing surface for every frame.
            scheduler: Frame scheduler. A pygame-clocked one if None.
            rng: Random source for obstacle spawning.
        """
        if renderer is None:
            raise ValueError("RunnerGame needs a renderer")
        self.config = config or GameConfig()
        self.renderer = renderer
        self.scheduler = scheduler or FrameScheduler()
        self.rng = rng or np.random.default_rng()

        self.state = GameState.LOADING
        self.debug = self.config.debug

        self.player: Optional[Player] = None
        self.background: Optional[Background] = None
        self.obstacles: Optional[ObstacleManager] = None

        self.distance = 0.0  # metres
        self.last_frame_time = 0.0
        self._frame_handle: Optional[int] = None

        self.speed_px_per_sec = self.config.speed_px_per_sec

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    async def load(self, assets, manifest: Sequence[AssetSpec] = ASSET_MANIFEST) -> None:
        """Acquire every asset, then build entities and show the title screen.

        Args:
            assets: Provider with `async load_all(specs)` and `get(name)`.
            manifest: Assets to request.

        Raises:
            AssetLoadError: If any asset failed; the game stays in LOAD_FAILED.
        """
        self.state = GameState.LOADING
        self.draw()

        try:
            await assets.load_all(manifest)
        except AssetLoadError as e:
            self.state = GameState.LOAD_FAILED
            logger.error("Asset loading failed: %s", e)
            self.draw()
            raise

        self._build_entities(assets, [spec.name for spec in manifest])
        self.state = GameState.READY
        logger.info("Ready: %.1f px/s scroll, ground at y=%.0f",
                    self.speed_px_per_sec, self.config.ground_line)
        self.draw()

    def _build_entities(self, assets, names: Sequence[str]) -> None:
        cfg = self.config
        ground_line = cfg.ground_line

        self.player = Player(
            [assets.get(n) for n in RUN_FRAMES],
            assets.get(JUMP_FRAME),
            ground_line,
            config=cfg.player,
            padding=cfg.bounds_padding,
        )
        self.background = Background(
            assets.get(BACKGROUND),
            cfg.canvas_width,
            cfg.canvas_height,
            config=cfg.background,
        )
        self.obstacles = ObstacleManager(
            [assets.get(n) for n in obstacle_names(names)],
            spawn_x=cfg.canvas_width,
            ground_line=ground_line,
            speed_px_per_sec=self.speed_px_per_sec,
            config=cfg.obstacles,
            rng=self.rng,
            padding=cfg.bounds_padding,
        )

    # ------------------------------------------------------------------
    # Input and state transitions
    # ------------------------------------------------------------------

    def handle_input(self, event: InputEvent) -> None:
        """Apply a discrete input event. Events that do not apply are ignored."""
        if self.state in (GameState.LOADING, GameState.LOAD_FAILED):
            return

        if event is InputEvent.JUMP:
            if self.state is GameState.READY:
                if self.player.is_at_rest:
                    self.start()
            elif self.state is GameState.RUNNING:
                self.player.jump()
        elif event is InputEvent.RESTART:
            if self.state is GameState.GAME_OVER:
                self.start()

    def start(self, timestamp_ms: Optional[float] = None) -> None:
        """Reset the session and enter the frame loop.

        Args:
            timestamp_ms: Timestamp the first frame delta is measured from.
                Defaults to the scheduler clock.
        """
        if self.state not in (GameState.READY, GameState.GAME_OVER):
            raise RuntimeError(f"Cannot start from state {self.state.value}")

        self.reset()
        self.state = GameState.RUNNING
        self.last_frame_time = self.scheduler.now() if timestamp_ms is None else timestamp_ms
        self._frame_handle = self.scheduler.request_frame(self.tick)
        logger.info("Run started")

    def reset(self) -> None:
        """Abandon any run and return to the title screen."""
        if self.state in (GameState.LOADING, GameState.LOAD_FAILED):
            raise RuntimeError(f"Cannot reset from state {self.state.value}")
        self.stop()
        self.distance = 0.0
        self.player.reset()
        self.background.reset()
        self.obstacles.clear()
        self.state = GameState.READY

    def game_over(self) -> None:
        """Stop the run. Repeated calls have no effect."""
        if self.state is not GameState.RUNNING:
            return
        self.state = GameState.GAME_OVER
        self.stop()
        logger.info("Game over at %.1f m", self.distance)
        self.draw()

    def stop(self) -> None:
        """Revoke the pending frame callback."""
        self.scheduler.cancel_frame(self._frame_handle)
        self._frame_handle = None

    def destroy(self) -> None:
        """Teardown: no callback may run after this."""
        self.stop()
        logger.debug("Game destroyed in state %s", self.state.value)

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def tick(self, timestamp_ms: float) -> None:
        """Frame callback: reschedule, then one update/draw pass.

        Non-positive deltas (duplicate or out-of-order timestamps) skip the
        pass but keep the loop alive. Any error stops the loop and propagates.
        """
        if self.state is not GameState.RUNNING:
            self._frame_handle = None
            return

        self._frame_handle = self.scheduler.request_frame(self.tick)

        dt_ms = timestamp_ms - self.last_frame_time
        self.last_frame_time = timestamp_ms
        if dt_ms <= 0:
            return

        try:
            self.update(dt_ms)
            # game_over() has already drawn the final frame
            if self.state is GameState.RUNNING:
                self.draw()
        except Exception:
            # Fail fast rather than keep running on corrupted state
            self.stop()
            logger.exception("Frame failed at t=%.0f ms; loop halted", timestamp_ms)
            raise

    def update(self, dt_ms: float) -> None:
        """Advance the simulation by dt_ms. Only runs while RUNNING.

        Args:
            dt_ms: Time step in milliseconds.
        """
        if self.state is not GameState.RUNNING:
            return

        self.background.update(dt_ms, self.speed_px_per_sec)
        self.player.update(dt_ms)
        self.obstacles.update(dt_ms)

        if self.obstacles.check_collision(self.player):
            self.game_over()
            return

        # px/s * s / (px/m) = m
        self.distance += self.speed_px_per_sec * (dt_ms / 1000) / self.config.pixels_per_meter

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def draw(self) -> None:
        """Render the current state."""
        r = self.renderer
        cx = self.config.canvas_width / 2
        cy = self.config.canvas_height / 2

        if self.state is GameState.LOADING:
            r.clear()
            r.draw_text("Loading assets...", cx, cy, 30, COLOR_TEXT, "center")
            return

        if self.state is GameState.LOAD_FAILED:
            r.clear()
            r.draw_text("Failed to load assets", cx, cy, 30, COLOR_GAME_OVER, "center")
            return

        r.clear()
        self.background.draw(r)
        self.obstacles.draw(r)
        self.player.draw(r)

        if self.state is GameState.READY:
            r.draw_text("Press Space or Tap to Start", cx, cy, 30, COLOR_TEXT, "center")
            return

        r.draw_text(f"Distance: {int(self.distance)} m", 20, 40, 24, COLOR_TEXT)

        if self.debug:
            self.player.draw_bounds(r)
            self.obstacles.draw_bounds(r)

        if self.state is GameState.GAME_OVER:
            r.draw_text("Game Over", cx, cy - 40, 50, COLOR_GAME_OVER, "center")
            r.draw_text(f"Final Distance: {int(self.distance)} m", cx, cy, 30, COLOR_TEXT, "center")
            r.draw_text('Press "R" to Restart', cx, cy + 40, 24, COLOR_TEXT, "center")

    def get_state(self) -> Dict[str, Any]:
        """Snapshot for logging and tests."""
        state: Dict[str, Any] = {
            "state": self.state.value,
            "distance": self.distance,
        }
        if self.player:
            state["player_position"] = (self.player.x, self.player.y)
            state["player_velocity_y"] = self.player.velocity_y
            state["player_airborne"] = self.player.airborne
        if self.obstacles is not None:
            state["obstacles"] = len(self.obstacles)
            state["spawn_timer_ms"] = self.obstacles.spawn_timer_ms
        return state
