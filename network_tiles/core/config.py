"""Per-instance graph configuration.

A :class:`GraphConfig` is fixed for the lifetime of a graph instance.  The
defaults reproduce the hover tiles of the filter page; :data:`PRESETS` also
carries the flat variant used on the static pages.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any

import matplotlib.colors as mcolors

from .errors import ConfigError

logger = logging.getLogger(__name__)

DSDE_BLUE = "#00356b"
DSDE_PURPLE = "#7634a6"

COLOR_ATTRIBUTE = "data-color"


@dataclass(frozen=True)
class GraphConfig:
    """Numeric and color settings for one tile graph."""

    num_nodes: int = 13
    max_distance: float = 150.0
    base_node_size: float = 10.0
    min_node_size: float = 6.0
    base_edge_width: float = 5.0
    border_width: float = 1.0
    border_color: str = "#F0F0F0"
    speed_multiplier: float = 0.2
    perspective_depth: float = 100.0
    fill_color: str = DSDE_BLUE
    background_color: str | None = DSDE_PURPLE
    # Edge stroke color; None strokes edges in the fill color.
    edge_color: str | None = None
    node_alpha: float = 0.5
    edge_opacity_scale: float = 0.3
    background_alpha: float = 0x60 / 255
    # Pin nodes to the front plane (no depth motion).
    flat: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.num_nodes, bool) or not isinstance(self.num_nodes, numbers.Integral):
            raise ConfigError(f"num_nodes must be an integer, got {self.num_nodes!r}")
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if isinstance(value, float) and not math.isfinite(value):
                raise ConfigError(f"{field.name} must be finite, got {value}")
        if self.num_nodes < 0:
            raise ConfigError(f"num_nodes must be >= 0, got {self.num_nodes}")
        if self.max_distance <= 0:
            raise ConfigError(f"max_distance must be > 0, got {self.max_distance}")
        if self.perspective_depth <= 0:
            raise ConfigError(
                f"perspective_depth must be > 0, got {self.perspective_depth}"
            )
        if self.min_node_size > self.base_node_size:
            raise ConfigError(
                f"min_node_size ({self.min_node_size}) exceeds "
                f"base_node_size ({self.base_node_size})"
            )
        if self.border_width < 0 or self.base_edge_width < 0:
            raise ConfigError("widths must be >= 0")
        for name in ("node_alpha", "edge_opacity_scale", "background_alpha"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must lie in [0, 1], got {value}")
        for name in ("fill_color", "border_color", "background_color", "edge_color"):
            value = getattr(self, name)
            if value is None and name in ("background_color", "edge_color"):
                continue
            if not mcolors.is_color_like(value):
                raise ConfigError(f"{name} is not a color: {value!r}")

    @property
    def fill_rgb(self) -> tuple[float, float, float]:
        return mcolors.to_rgb(self.fill_color)

    @property
    def edge_rgb(self) -> tuple[float, float, float]:
        return mcolors.to_rgb(self.edge_color or self.fill_color)

    def replace(self, **changes: Any) -> GraphConfig:
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_region(cls, region: Any, base: GraphConfig | None = None) -> GraphConfig:
        """Apply the region's color override on top of *base*.

        A ``data-color`` attribute replaces the fill and background colors,
        and the edge color when the base sets one.  An override that is not
        a color is logged and ignored.
        """
        config = base if base is not None else cls()
        color = (region.attributes.get(COLOR_ATTRIBUTE) or "").strip()
        if not color:
            return config
        if not mcolors.is_color_like(color):
            logger.warning(
                "Ignoring invalid %s %r on tile '%s'.",
                COLOR_ATTRIBUTE, color, region.attributes.get("data-title"),
            )
            return config
        changes: dict[str, Any] = {"fill_color": color, "background_color": color}
        if config.edge_color is not None:
            changes["edge_color"] = color
        return config.replace(**changes)


PRESETS: dict[str, GraphConfig] = {
    "tile": GraphConfig(),
    "static_page": GraphConfig(
        num_nodes=20,
        max_distance=100.0,
        base_node_size=3.0,
        min_node_size=3.0,
        base_edge_width=1.0,
        border_width=0.0,
        fill_color=DSDE_BLUE,
        background_color=None,
        edge_color=DSDE_PURPLE,
        node_alpha=1.0,
        edge_opacity_scale=1.0,
        flat=True,
    ),
}


def preset(name: str) -> GraphConfig:
    """Look up a named configuration."""
    try:
        return PRESETS[name]
    except KeyError:
        raise ConfigError(
            f"unknown preset {name!r}; choose one of {sorted(PRESETS)}"
        ) from None
