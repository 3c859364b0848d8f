"""Drawing surface abstraction.

Game code draws only through the `Renderer` protocol; `PygameRenderer` is the
implementation backed by a pygame Surface (the window or an offscreen frame).
"""

from typing import Dict, Optional, Protocol, Tuple, Union

import pygame


Color = Union[Tuple[int, int, int], Tuple[int, int, int, int]]

# Colors (RGB / RGBA)
COLOR_SKY = (135, 206, 235)
COLOR_TEXT = (0, 0, 0)
COLOR_GAME_OVER = (224, 60, 60)
COLOR_GROUND = (46, 204, 113)
COLOR_GROUND_LINE = (39, 174, 96)
COLOR_BOUNDS = (255, 0, 0, 128)  # Semi-transparent red for debug boxes


class Renderer(Protocol):
    """Capability surface used by entities and the game to draw a frame."""

    def clear(self) -> None:
        ...

    def draw_image(
        self,
        image: pygame.Surface,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> None:
        ...

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        size: int = 24,
        color: Color = COLOR_TEXT,
        align: str = "left",
    ) -> None:
        ...

    def draw_rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
        filled: bool = True,
    ) -> None:
        ...


class PygameRenderer:
    """Renderer drawing onto a pygame Surface.

    Text is anchored at (x, y) on the vertical middle of the rendered line:
    `align` picks whether x is the left edge, the centre or the right edge.
    """

    _ANCHORS = ("left", "center", "right")

    def __init__(self, surface: pygame.Surface, background: Color = COLOR_SKY):
        self.surface = surface
        self.background = background
        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def clear(self) -> None:
        self.surface.fill(self.background)

    def draw_image(self, image, x, y, width=None, height=None) -> None:
        """Blit `image` at native size, or stretched when width/height are given."""
        if width is not None or height is not None:
            w = int(round(width if width is not None else image.get_width()))
            h = int(round(height if height is not None else image.get_height()))
            if (w, h) != image.get_size():
                image = pygame.transform.scale(image, (max(w, 0), max(h, 0)))
        self.surface.blit(image, (int(round(x)), int(round(y))))

    def draw_text(self, text, x, y, size=24, color=COLOR_TEXT, align="left") -> None:
        if align not in self._ANCHORS:
            raise ValueError(f"align must be one of {self._ANCHORS}, got {align!r}")
        surface = self._font(size).render(text, True, color[:3])
        pos = (int(round(x)), int(round(y)))
        if align == "left":
            rect = surface.get_rect(midleft=pos)
        elif align == "center":
            rect = surface.get_rect(center=pos)
        else:
            rect = surface.get_rect(midright=pos)
        self.surface.blit(surface, rect)

    def draw_rectangle(self, x, y, width, height, color, filled=True) -> None:
        rect = pygame.Rect(int(round(x)), int(round(y)), int(round(width)), int(round(height)))
        border = 0 if filled else 2

        if len(color) == 4 and color[3] < 255:
            # Alpha needs a per-pixel-alpha overlay; plain draw ignores it
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            pygame.draw.rect(overlay, color, overlay.get_rect(), width=border)
            self.surface.blit(overlay, rect.topleft)
        else:
            pygame.draw.rect(self.surface, color[:3], rect, width=border)

    def draw_ground(
        self,
        y: float,
        color: Color = COLOR_GROUND,
        line_color: Color = COLOR_GROUND_LINE,
    ) -> None:
        """Fill everything below `y` and add a light hatch along the edge."""
        width, height = self.size
        top = int(round(y))
        pygame.draw.rect(self.surface, color, (0, top, width, height - top))
        for i in range(0, width, 20):
            pygame.draw.line(self.surface, line_color, (i, top), (i + 10, top + 5), 2)

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font
