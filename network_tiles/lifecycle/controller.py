"""Hover and resize wiring for a graph instance."""

from __future__ import annotations

import enum
import logging
from typing import Any

from ..host.page import POINTER_ENTER, POINTER_LEAVE, VIEWPORT_RESIZE
from .instance import GraphInstance

logger = logging.getLogger(__name__)


class LoopState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class LifecycleController:
    """Owns the trigger subscriptions of one instance.

    Pointer enter/leave drive the idle/running state machine.  Viewport
    resizes re-measure and redraw in either state without touching the loop.
    """

    def __init__(self, instance: GraphInstance, region: Any, viewport: Any) -> None:
        self.instance = instance
        self.region = region
        self.viewport = viewport
        self._region_cids: list[int] = []
        self._viewport_cids: list[int] = []

    @property
    def state(self) -> LoopState:
        return LoopState.RUNNING if self.instance.is_running else LoopState.IDLE

    @property
    def attached(self) -> bool:
        return bool(self._region_cids or self._viewport_cids)

    def attach(self) -> None:
        if self.attached:
            return
        self._region_cids = [
            self.region.connect(POINTER_ENTER, self.on_pointer_enter),
            self.region.connect(POINTER_LEAVE, self.on_pointer_leave),
        ]
        if self.viewport is not None:
            self._viewport_cids = [
                self.viewport.connect(VIEWPORT_RESIZE, self.on_viewport_resize),
            ]

    def detach(self) -> None:
        for cid in self._region_cids:
            self.region.disconnect(cid)
        for cid in self._viewport_cids:
            self.viewport.disconnect(cid)
        self._region_cids = []
        self._viewport_cids = []

    def on_pointer_enter(self) -> None:
        if self.state is LoopState.IDLE:
            self.instance.start()

    def on_pointer_leave(self) -> None:
        if self.state is LoopState.RUNNING:
            self.instance.stop()

    def on_viewport_resize(self) -> None:
        self.instance.resize()

    def dispose(self) -> None:
        self.detach()
        self.instance.dispose()
        logger.debug("Disposed controller for %r.", self.region)
