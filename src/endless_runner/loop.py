"""Per-frame callback scheduling.

The game never loops on its own: it asks the scheduler for the next frame
and gets called back once with the frame timestamp. Stopping the game
revokes the pending handle so no callback runs after teardown.
"""

from typing import Callable, Dict, Optional

import pygame


FrameCallback = Callable[[float], None]


class FrameScheduler:
    """requestAnimationFrame-style scheduler driven by the host loop.

    The host calls `dispatch()` once per display refresh. Callbacks requested
    during a dispatch run on the following one.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        """
        Args:
            clock: Millisecond clock used for `now()` and default timestamps.
                Defaults to pygame.time.get_ticks.
        """
        self._clock = clock or pygame.time.get_ticks
        self._callbacks: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def now(self) -> float:
        return float(self._clock())

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        """Revoke a pending callback. Unknown or spent handles are ignored."""
        if handle is not None:
            self._callbacks.pop(handle, None)

    def dispatch(self, timestamp_ms: Optional[float] = None) -> int:
        """Run every callback pending at entry. Returns how many ran."""
        if timestamp_ms is None:
            timestamp_ms = self.now()

        due = list(self._callbacks)
        ran = 0
        for handle in due:
            # A callback may cancel another one that is due in this batch
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            callback(timestamp_ms)
            ran += 1
        return ran
