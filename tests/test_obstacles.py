"""Tests for obstacle spawning, culling and collision."""

import numpy as np
import pytest

from endless_runner.config import ObstacleConfig
from endless_runner.entities import Player
from endless_runner.exceptions import ConfigError
from endless_runner.obstacles import ObstacleManager

GROUND_LINE = 300.0
SPEED = 194.44444444444446


@pytest.fixture
def images(make_surface):
    return [make_surface(40, 40), make_surface(50, 80), make_surface(40, 50)]


@pytest.fixture
def manager(images):
    return ObstacleManager(images, 800, GROUND_LINE, SPEED, rng=np.random.default_rng(0))


@pytest.fixture
def player(make_surface):
    return Player([make_surface(48, 64)], make_surface(48, 64), GROUND_LINE)


class TestSpawning:
    def test_needs_images(self):
        with pytest.raises(ConfigError):
            ObstacleManager([], 800, GROUND_LINE, SPEED)

    def test_timer_starts_at_minimum(self, manager):
        assert manager.spawn_timer_ms == 1500
        assert len(manager) == 0

    def test_no_spawn_before_timer_expires(self, manager):
        manager.update(1499)
        assert len(manager) == 0

    def test_spawn_when_timer_expires(self, manager):
        manager.update(1500)
        assert len(manager) == 1
        o = manager.obstacles[0]
        assert o.x == 800
        assert o.y == GROUND_LINE - o.height

    def test_timer_redrawn_in_range(self, manager):
        manager.update(1500)
        assert 1500 <= manager.spawn_timer_ms <= 3500

    def test_spawn_intervals_within_bounds(self, images):
        config = ObstacleConfig(min_spawn_interval_ms=100, max_spawn_interval_ms=300)
        m = ObstacleManager(images, 800, GROUND_LINE, SPEED, config=config, rng=np.random.default_rng(3))
        for _ in range(50):
            m.reset_spawn_timer()
            assert 100 <= m.spawn_timer_ms <= 300

    def test_one_spawn_per_expiry(self, manager):
        """A long frame spawns once; the timer is redrawn, not carried over."""
        manager.update(10_000)
        assert len(manager) == 1

    def test_uses_every_variant(self, images):
        m = ObstacleManager(images, 800, GROUND_LINE, SPEED, rng=np.random.default_rng(5))
        sizes = {(o.width, o.height) for o in (m.spawn() for _ in range(60))}
        assert sizes == {(40, 40), (50, 80), (40, 50)}

    def test_seeded_sequence_reproducible(self, images):
        def run(seed):
            m = ObstacleManager(images, 800, GROUND_LINE, SPEED, rng=np.random.default_rng(seed))
            out = []
            for _ in range(500):
                m.update(16)
                out.append((len(m), m.spawn_timer_ms))
            return out

        assert run(11) == run(11)


class TestMovement:
    def test_obstacles_move_left(self, manager):
        o = manager.spawn()
        manager.update(1000)
        assert o.x == pytest.approx(800 - SPEED)

    def test_offscreen_obstacles_removed(self, manager):
        o = manager.spawn()
        o.x = -o.width + 1
        manager.update(16)
        assert o not in manager.obstacles

    def test_partially_visible_obstacle_kept(self, manager):
        o = manager.spawn()
        o.x = -o.width + 10
        manager.update(16)
        assert o in manager.obstacles

    def test_clear(self, manager):
        manager.update(1500)
        manager.update(200)
        manager.clear()
        assert len(manager) == 0
        assert manager.spawn_timer_ms == 1500


class TestCollision:
    def test_no_obstacles_no_collision(self, manager, player):
        assert not manager.check_collision(player)

    def test_overlapping_obstacle_collides(self, manager, player):
        o = manager.spawn()
        o.x = player.x
        assert manager.check_collision(player)

    def test_padding_forgives_touching_sprites(self, manager, player):
        o = manager.spawn()
        # Sprites overlap by 9 px; padded boxes (5 px each side) do not
        o.x = player.x + player.width - 9
        assert player.rect.right > o.x
        assert not manager.check_collision(player)

    def test_player_above_obstacle_safe(self, manager, player):
        o = manager.spawn()
        o.x = player.x
        player.y = o.y - player.height - 1
        assert not manager.check_collision(player)

    def test_draw_and_bounds(self, manager, renderer):
        manager.spawn()
        manager.spawn()
        manager.draw(renderer)
        manager.draw_bounds(renderer)
        assert sum(1 for c in renderer.calls if c[0] == "image") == 2
        assert len(renderer.rects()) == 2
