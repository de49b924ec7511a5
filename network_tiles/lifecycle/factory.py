"""Discovery and construction of graph instances for a page."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import numpy as np

from ..core.config import GraphConfig
from ..core.errors import RegionError
from ..host.page import REMOVED, REVEALED, TILE_CLASS
from ..simulation.scheduler import FrameScheduler
from .controller import LifecycleController
from .instance import GraphInstance

logger = logging.getLogger(__name__)


class InstanceFactory:
    """Creates one attached :class:`GraphInstance` per eligible region.

    Parameters
    ----------
    page:
        Host exposing ``select(marker)``, ``device_pixel_ratio`` and the
        ``resize`` / ``revealed`` signals.
    config:
        Base configuration; each region may still override its color.
    rng:
        Random source for initial layouts.  Pass a seeded generator for
        reproducible graphs.
    """

    def __init__(
        self,
        page: Any,
        scheduler: FrameScheduler,
        config: GraphConfig | None = None,
        *,
        marker: str = TILE_CLASS,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.page = page
        self.scheduler = scheduler
        self.config = config if config is not None else GraphConfig()
        self.marker = marker
        self.rng = rng or np.random.default_rng()
        self.controllers: dict[Any, LifecycleController] = {}
        self._reveal_cid: int | None = None
        self._removal_cid: int | None = None
        self.watch_removals()

    @property
    def instances(self) -> dict[Any, GraphInstance]:
        return {region: ctrl.instance for region, ctrl in self.controllers.items()}

    def discover(self) -> Iterator[Any]:
        """Yield the visible regions carrying the eligibility marker."""
        yield from self.page.select(self.marker)

    def initialize_region(self, region: Any) -> GraphInstance | None:
        """Create and attach the instance for *region*.

        Returns the existing instance when the region already has one, and
        ``None`` when the region cannot host a graph.
        """
        existing = self.controllers.get(region)
        if existing is not None:
            return existing.instance
        try:
            instance = GraphInstance.create(
                region,
                self.config,
                scheduler=self.scheduler,
                rng=self.rng,
                pixel_ratio=self.page.device_pixel_ratio,
            )
        except RegionError as exc:
            logger.error("%s", exc)
            return None
        controller = LifecycleController(instance, region, self.page)
        controller.attach()
        self.controllers[region] = controller
        return instance

    def initialize_visible(self) -> list[GraphInstance]:
        """Initialize every discovered region that has no instance yet."""
        created: list[GraphInstance] = []
        for region in self.discover():
            if region in self.controllers:
                continue
            instance = self.initialize_region(region)
            if instance is not None:
                created.append(instance)
        logger.debug("Initialized %d new tile graphs.", len(created))
        return created

    def _on_revealed(self, region: Any) -> None:
        if self.marker in region.classes:
            self.initialize_region(region)

    def watch_reveals(self) -> None:
        """Initialize regions as soon as the page reveals them."""
        if self._reveal_cid is None:
            self._reveal_cid = self.page.connect(REVEALED, self._on_revealed)

    def watch_removals(self) -> None:
        """Destroy a region's instance when the page removes the region."""
        if self._removal_cid is None:
            self._removal_cid = self.page.connect(REMOVED, self.remove)

    def remove(self, region: Any) -> None:
        controller = self.controllers.pop(region, None)
        if controller is not None:
            controller.dispose()

    def dispose(self) -> None:
        for region in list(self.controllers):
            self.remove(region)
        if self._reveal_cid is not None:
            self.page.disconnect(self._reveal_cid)
            self._reveal_cid = None
        if self._removal_cid is not None:
            self.page.disconnect(self._removal_cid)
            self._removal_cid = None
