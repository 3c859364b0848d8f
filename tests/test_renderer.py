"""Tests for the pygame renderer."""

import pygame
import pytest

from endless_runner.renderer import COLOR_GROUND, COLOR_SKY, PygameRenderer


@pytest.fixture
def surface():
    return pygame.Surface((200, 100))


@pytest.fixture
def renderer(surface):
    return PygameRenderer(surface)


class TestPygameRenderer:
    def test_clear_fills_background(self, renderer, surface):
        surface.fill((0, 0, 0))
        renderer.clear()
        assert surface.get_at((150, 50))[:3] == COLOR_SKY

    def test_draw_image_native(self, renderer, surface):
        image = pygame.Surface((10, 10))
        image.fill((255, 0, 0))
        renderer.clear()
        renderer.draw_image(image, 20, 30)
        assert surface.get_at((25, 35))[:3] == (255, 0, 0)
        assert surface.get_at((31, 35))[:3] == COLOR_SKY

    def test_draw_image_stretched(self, renderer, surface):
        image = pygame.Surface((10, 10))
        image.fill((0, 0, 255))
        renderer.clear()
        renderer.draw_image(image, 0, 0, 50, 20)
        assert surface.get_at((45, 15))[:3] == (0, 0, 255)
        assert surface.get_at((55, 15))[:3] == COLOR_SKY

    def test_filled_rectangle(self, renderer, surface):
        renderer.clear()
        renderer.draw_rectangle(10, 10, 20, 20, (0, 255, 0))
        assert surface.get_at((20, 20))[:3] == (0, 255, 0)

    def test_outline_rectangle(self, renderer, surface):
        renderer.clear()
        renderer.draw_rectangle(10, 10, 40, 40, (0, 255, 0), filled=False)
        assert surface.get_at((10, 20))[:3] == (0, 255, 0)
        assert surface.get_at((30, 30))[:3] == COLOR_SKY

    def test_translucent_rectangle_blends(self, renderer, surface):
        surface.fill((0, 0, 255))
        renderer.draw_rectangle(0, 0, 20, 20, (255, 0, 0, 128))
        r, g, b = surface.get_at((10, 10))[:3]
        assert 100 < r < 160
        assert 100 < b < 160

    def test_draw_text_changes_pixels(self, renderer, surface):
        renderer.clear()
        before = pygame.image.tostring(surface, "RGB")
        renderer.draw_text("Distance: 12 m", 100, 50, 24, (0, 0, 0), "center")
        assert pygame.image.tostring(surface, "RGB") != before

    def test_bad_alignment(self, renderer):
        with pytest.raises(ValueError):
            renderer.draw_text("x", 0, 0, align="justify")

    def test_draw_ground(self, renderer, surface):
        renderer.clear()
        renderer.draw_ground(60)
        assert surface.get_at((5, 90))[:3] == COLOR_GROUND
        assert surface.get_at((5, 30))[:3] == COLOR_SKY

    def test_size(self, renderer):
        assert renderer.size == (200, 100)
