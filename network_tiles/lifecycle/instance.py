"""One tile's graph: nodes, surface and animation loop."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from ..core.config import GraphConfig
from ..core.errors import ContextUnavailableError, SurfaceUnavailableError
from ..core.node import Bounds, Node
from ..simulation.scheduler import FrameScheduler
from ..simulation.simulator import spawn_nodes, tick
from ..visualization.renderer import GraphRenderer

logger = logging.getLogger(__name__)


class GraphInstance:
    """Simulation state and animation loop of a single region.

    The loop is a chain of one-shot frame callbacks.  ``frame_handle`` holds
    the pending callback while the loop runs and is ``None`` otherwise, so at
    most one loop can be active per instance.
    """

    def __init__(
        self,
        region: Any,
        surface: Any,
        context: Any,
        config: GraphConfig,
        scheduler: FrameScheduler,
        rng: np.random.Generator | None = None,
        pixel_ratio: float = 1.0,
    ) -> None:
        self.region = region
        self.surface = surface
        self.context = context
        self.config = config
        self.scheduler = scheduler
        self.pixel_ratio = pixel_ratio
        self.renderer = GraphRenderer(config)
        self.bounds = Bounds(0.0, 0.0)
        self.frame_handle: int | None = None
        self.frame_count = 0
        self.render_count = 0

        self._measure()
        self.nodes: list[Node] = spawn_nodes(
            config.num_nodes,
            self.bounds,
            config.perspective_depth,
            config.speed_multiplier,
            rng=rng,
            flat=config.flat,
        )

    @classmethod
    def create(
        cls,
        region: Any,
        config: GraphConfig | None = None,
        *,
        scheduler: FrameScheduler,
        rng: np.random.Generator | None = None,
        pixel_ratio: float = 1.0,
    ) -> GraphInstance:
        """Build the instance for *region* and draw its first, static frame.

        Raises
        ------
        SurfaceUnavailableError
            The region has no drawing surface.
        ContextUnavailableError
            The surface cannot produce a 2D context.
        """
        title = region.attributes.get("data-title")
        surface = region.canvas
        if surface is None:
            raise SurfaceUnavailableError(
                region, f"Canvas not found for tile with title '{title}'."
            )
        context = surface.get_context("2d")
        if context is None:
            raise ContextUnavailableError(
                region, f"Unable to get canvas context for tile with title '{title}'."
            )
        instance = cls(
            region,
            surface,
            context,
            GraphConfig.from_region(region, config),
            scheduler,
            rng=rng,
            pixel_ratio=pixel_ratio,
        )
        instance.render()
        return instance

    @property
    def is_running(self) -> bool:
        return self.frame_handle is not None

    def _measure(self) -> None:
        width, height = self.region.bounding_size()
        self.bounds = Bounds(float(width), float(height))
        self.surface.resize(width, height, pixel_ratio=self.pixel_ratio)

    def render(self) -> None:
        self.renderer.render(self.context, self.nodes, self.bounds)
        self.render_count += 1

    def step(self) -> None:
        """Advance the simulation one tick without drawing."""
        tick(self.nodes, self.bounds, self.config.perspective_depth)

    def _on_frame(self, _time: float) -> None:
        # A frame that raises leaves the instance idle.
        self.frame_handle = None
        self.render()
        self.step()
        self.frame_count += 1
        self.frame_handle = self.scheduler.request_frame(self._on_frame)

    def start(self) -> None:
        """Begin animating.  Does nothing while a loop is already active."""
        if self.frame_handle is not None:
            return
        self.frame_handle = self.scheduler.request_frame(self._on_frame)
        logger.debug("Started animation for %r.", self.region)

    def stop(self) -> None:
        """Stop animating and redraw a static frame.  Does nothing when idle."""
        if self.frame_handle is None:
            return
        self.scheduler.cancel_frame(self.frame_handle)
        self.frame_handle = None
        self.render()
        logger.debug("Stopped animation for %r after %d frames.", self.region, self.frame_count)

    def resize(self) -> None:
        """Re-measure the region and redraw.  Nodes keep their positions."""
        self._measure()
        self.render()
        logger.debug("Resized %r to %.0fx%.0f.", self.region, self.bounds.width, self.bounds.height)

    def dispose(self) -> None:
        """Cancel a pending frame without redrawing."""
        if self.frame_handle is not None:
            self.scheduler.cancel_frame(self.frame_handle)
            self.frame_handle = None
