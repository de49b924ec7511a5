"""Tiles laid out as axes of one interactive matplotlib figure."""

from __future__ import annotations

import math
from typing import Any, Sequence

from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..visualization.surface import AxesSurface
from .page import POINTER_ENTER, POINTER_LEAVE, Page, Region


class FigureTile(Region):
    """Region drawn into one axes of a shared figure."""

    def __init__(self, axes: Axes, title: str = "", **kwargs: Any) -> None:
        super().__init__(title, **kwargs)
        self.axes = axes
        self.canvas = AxesSurface(axes)

    @Region.hidden.setter
    def hidden(self, value: bool) -> None:
        Region.hidden.fset(self, value)
        self.axes.set_visible(not value)

    def bounding_size(self) -> tuple[float, float]:
        if self.hidden:
            return (0.0, 0.0)
        bbox = self.axes.get_window_extent()
        ratio = getattr(self.axes.figure.canvas, "device_pixel_ratio", 1.0) or 1.0
        return (bbox.width / ratio, bbox.height / ratio)


class FigurePage(Page):
    """Grid of :class:`FigureTile` regions fed by the figure's mouse events.

    Parameters
    ----------
    titles:
        One title per tile, in reading order.
    colors:
        Optional per-tile ``data-color`` overrides (``None`` keeps the default).
    visible:
        Number of tiles shown initially; the rest start hidden.
    """

    def __init__(
        self,
        figure: Figure,
        titles: Sequence[str],
        *,
        colors: Sequence[str | None] | None = None,
        ncols: int = 3,
        visible: int | None = None,
    ) -> None:
        super().__init__()
        self.figure = figure
        nrows = max(1, math.ceil(len(titles) / ncols))
        grid = figure.add_gridspec(nrows, ncols, wspace=0.04, hspace=0.04,
                                   left=0.02, right=0.98, bottom=0.02, top=0.98)
        self._by_axes: dict[Axes, FigureTile] = {}
        for i, title in enumerate(titles):
            ax = figure.add_subplot(grid[i // ncols, i % ncols])
            color = colors[i] if colors is not None else None
            tile = FigureTile(ax, title, color=color)
            tile.hidden = visible is not None and i >= visible
            self._by_axes[ax] = tile
            self.add(tile)

        canvas = figure.canvas
        self._cids = [
            canvas.mpl_connect("axes_enter_event", self._on_axes_enter),
            canvas.mpl_connect("axes_leave_event", self._on_axes_leave),
            canvas.mpl_connect("resize_event", self._on_resize),
        ]

    def tile_for(self, axes: Axes | None) -> FigureTile | None:
        return self._by_axes.get(axes)

    def _on_axes_enter(self, event: Any) -> None:
        tile = self.tile_for(event.inaxes)
        if tile is not None and not tile.hidden:
            tile.dispatch(POINTER_ENTER)

    def _on_axes_leave(self, event: Any) -> None:
        tile = self.tile_for(event.inaxes)
        if tile is not None:
            tile.dispatch(POINTER_LEAVE)

    def _on_resize(self, _event: Any) -> None:
        self.resize_viewport()

    def close(self) -> None:
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []
