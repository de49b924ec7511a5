"""Frame scheduling for tile animations.

Animation loops never sleep or spawn threads: they ask a scheduler to call
them back on the next frame, the way a browser's ``requestAnimationFrame``
works.  :class:`FrameScheduler` is stepped by hand (tests, headless renders);
:class:`TimerFrameScheduler` steps itself from a matplotlib canvas timer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]

DEFAULT_FRAME_INTERVAL = 1.0 / 60.0


class FrameScheduler:
    """Cooperative single-threaded frame clock.

    Each :meth:`advance` runs the callbacks that were pending when it was
    called.  Callbacks requested while a frame runs wait for the next one, so
    a loop that re-requests itself runs exactly once per frame.
    """

    def __init__(self, frame_interval: float = DEFAULT_FRAME_INTERVAL) -> None:
        self.frame_interval = frame_interval
        self.frame_count = 0
        self.time = 0.0
        self._callbacks: dict[int, FrameCallback] = {}
        self._due: dict[int, FrameCallback] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        return len(self._callbacks)

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule *callback* for the next frame and return its handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Withdraw a pending callback.  Unknown handles are ignored."""
        self._callbacks.pop(handle, None)
        self._due.pop(handle, None)

    def advance(self, dt: float | None = None) -> int:
        """Run one frame.  Returns the number of callbacks executed."""
        self.time += self.frame_interval if dt is None else dt
        self.frame_count += 1
        self._due = self._callbacks
        self._callbacks = {}
        executed = 0
        while self._due:
            handle = next(iter(self._due))
            callback = self._due.pop(handle)
            executed += 1
            try:
                callback(self.time)
            except Exception:
                # Logged; the rest of the frame still runs.
                logger.exception("Frame callback %d failed.", handle)
        return executed

    def run(self, frames: int) -> int:
        """Advance *frames* frames.  Returns the total callbacks executed."""
        executed = 0
        for _ in range(frames):
            executed += self.advance()
        return executed


class TimerFrameScheduler(FrameScheduler):
    """Frame clock driven by a matplotlib canvas timer."""

    def __init__(self, canvas: Any, interval_ms: int = 16) -> None:
        super().__init__(frame_interval=interval_ms / 1000.0)
        self._timer = canvas.new_timer(interval=interval_ms)
        self._timer.add_callback(self._on_timer)
        self.running = False

    def _on_timer(self) -> None:
        # matplotlib drops timer callbacks that return 0.
        self.advance()

    def start(self) -> None:
        if not self.running:
            self._timer.start()
            self.running = True
            logger.debug("Frame timer started (%.0f ms).", self.frame_interval * 1000)

    def stop(self) -> None:
        if self.running:
            self._timer.stop()
            self.running = False
