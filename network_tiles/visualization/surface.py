"""Matplotlib drawing surfaces for tile graphs.

A surface is the raster target of one tile.  It hands out a 2D drawing
context whose coordinates are logical pixels with the origin in the top-left
corner and y pointing down, as on an HTML canvas.  Widths passed to the
context are logical pixels too and are converted to points here.  Discs and
lines share one zorder, so they stack in the order they are drawn.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle

BASE_DPI = 100.0
GRADIENT_SAMPLES = 64

RGBA = tuple[float, float, float, float]


class AxesContext:
    """2D drawing context backed by a matplotlib :class:`Axes`."""

    def __init__(
        self,
        axes: Axes,
        on_present: Callable[[], Any] | None = None,
    ) -> None:
        self.axes = axes
        self.on_present = on_present
        self.width = 0.0
        self.height = 0.0

    def _setup(self) -> None:
        ax = self.axes
        ax.set_axis_off()
        ax.set_xlim(0.0, self.width)
        ax.set_ylim(self.height, 0.0)
        ax.set_autoscale_on(False)

    def _points_per_pixel(self) -> float:
        extent = self.axes.get_window_extent()
        x0, x1 = self.axes.get_xlim()
        span = abs(x1 - x0) or 1.0
        return extent.width / span * 72.0 / self.axes.figure.dpi

    def clear(self, width: float, height: float) -> None:
        """Erase every drawn artist and reset the logical size."""
        self.width = float(width)
        self.height = float(height)
        self.axes.cla()
        self._setup()

    def fill_linear_gradient(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        start: RGBA,
        end: RGBA,
    ) -> None:
        """Fill the whole context with a gradient running from (x0, y0) to (x1, y1)."""
        dx, dy = x1 - x0, y1 - y0
        length_sq = dx * dx + dy * dy
        if length_sq == 0 or self.width <= 0 or self.height <= 0:
            return
        xs = np.linspace(0.0, self.width, GRADIENT_SAMPLES)
        ys = np.linspace(0.0, self.height, GRADIENT_SAMPLES)
        grid_x, grid_y = np.meshgrid(xs, ys)
        t = np.clip(((grid_x - x0) * dx + (grid_y - y0) * dy) / length_sq, 0.0, 1.0)
        t = t[..., np.newaxis]
        image = np.asarray(start) * (1.0 - t) + np.asarray(end) * t
        self.axes.imshow(
            image,
            extent=(0.0, self.width, self.height, 0.0),
            origin="upper",
            interpolation="bilinear",
            aspect="auto",
            zorder=0,
        )
        self._setup()

    def circle(
        self,
        x: float,
        y: float,
        radius: float,
        *,
        facecolor: Any,
        alpha: float = 1.0,
        edgecolor: Any = "none",
        linewidth: float = 0.0,
    ) -> Circle:
        if linewidth <= 0:
            edgecolor = "none"
        patch = Circle(
            (x, y),
            radius,
            facecolor=facecolor,
            edgecolor=edgecolor,
            linewidth=linewidth * self._points_per_pixel(),
            alpha=alpha,
            zorder=1,
        )
        self.axes.add_patch(patch)
        return patch

    def line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        *,
        color: Any,
        linewidth: float,
    ) -> Line2D:
        artist = Line2D(
            [x0, x1],
            [y0, y1],
            color=color,
            linewidth=linewidth * self._points_per_pixel(),
            solid_capstyle="butt",
            zorder=1,
        )
        self.axes.add_line(artist)
        return artist

    def present(self) -> None:
        """Mark the frame as complete."""
        if self.on_present is not None:
            self.on_present()


class AggSurface:
    """Offscreen raster surface with its own figure and Agg canvas.

    The figure is sized so that one logical pixel maps to *pixel_ratio*
    device pixels of the raster.
    """

    def __init__(self) -> None:
        self.figure = Figure(figsize=(1, 1), dpi=BASE_DPI)
        self.canvas = FigureCanvasAgg(self.figure)
        self.figure.patch.set_alpha(0.0)
        self.axes = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.width = 0
        self.height = 0
        self.pixel_ratio = 1.0
        self._context: AxesContext | None = None

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        """Size the raster to the logical size times *pixel_ratio*."""
        self.pixel_ratio = pixel_ratio
        self.width = max(1, round(width * pixel_ratio))
        self.height = max(1, round(height * pixel_ratio))
        self.figure.set_dpi(BASE_DPI * pixel_ratio)
        self.figure.set_size_inches(
            self.width / (BASE_DPI * pixel_ratio),
            self.height / (BASE_DPI * pixel_ratio),
        )
        self.axes.set_xlim(0.0, width)
        self.axes.set_ylim(height, 0.0)

    def get_context(self, kind: str = "2d") -> AxesContext | None:
        if kind != "2d":
            return None
        if self._context is None:
            self._context = AxesContext(self.axes)
        return self._context

    def to_rgba(self) -> np.ndarray:
        """Rasterize and return the pixels as a ``(height, width, 4)`` uint8 array."""
        self.canvas.draw()
        return np.asarray(self.canvas.buffer_rgba()).copy()


class AxesSurface:
    """Surface embedded as one axes of an existing, usually interactive, figure."""

    def __init__(self, axes: Axes) -> None:
        self.axes = axes
        self._context: AxesContext | None = None

    def resize(self, width: float, height: float, pixel_ratio: float = 1.0) -> None:
        # The hosting figure owns the raster; only the coordinate system moves.
        self.axes.set_xlim(0.0, width)
        self.axes.set_ylim(height, 0.0)

    def get_context(self, kind: str = "2d") -> AxesContext | None:
        if kind != "2d":
            return None
        if self._context is None:
            self._context = AxesContext(
                self.axes, on_present=self.axes.figure.canvas.draw_idle
            )
        return self._context
