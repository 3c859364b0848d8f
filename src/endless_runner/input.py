"""Translation of raw pygame events into discrete game inputs."""

from enum import Enum, auto
from typing import Iterable, List

import pygame


class InputEvent(Enum):
    JUMP = auto()  # also starts the run from the title screen
    RESTART = auto()
    QUIT = auto()


class InputMapper:
    """Translates raw pygame events into discrete game events.

    A held SPACE yields a single JUMP until it is released, whatever the
    pygame key-repeat setting.
    """

    def __init__(self) -> None:
        self._jump_down = False

    def translate(self, events: Iterable[pygame.event.Event]) -> List[InputEvent]:
        out: List[InputEvent] = []
        for event in events:
            if event.type == pygame.QUIT:
                out.append(InputEvent.QUIT)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    if not self._jump_down:
                        out.append(InputEvent.JUMP)
                    self._jump_down = True
                elif event.key == pygame.K_r:
                    out.append(InputEvent.RESTART)
                elif event.key == pygame.K_ESCAPE:
                    out.append(InputEvent.QUIT)
            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_SPACE:
                    self._jump_down = False
            elif event.type == pygame.FINGERDOWN:
                out.append(InputEvent.JUMP)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # SDL mirrors every touch as a click; the FINGERDOWN already counted
                if not getattr(event, "touch", False):
                    out.append(InputEvent.JUMP)
        return out
