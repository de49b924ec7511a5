"""Pseudo-3D rendering of a tile graph onto a 2D drawing context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import matplotlib.colors as mcolors
import numpy as np

from ..core.config import GraphConfig
from ..core.node import Bounds, Node


@dataclass(frozen=True)
class Edge:
    """A drawable connection between nodes ``i < j``."""

    i: int
    j: int
    distance: float
    opacity: float
    width: float


class GraphRenderer:
    """Draws background, depth-scaled nodes and distance-faded edges.

    Rendering never touches velocities.  It does write clamped positions
    back into the nodes, so a node that crossed the border (or was left
    outside by a shrinking surface) is drawn on the border.
    """

    def __init__(self, config: GraphConfig) -> None:
        self.config = config

    def node_size(self, z: float) -> float:
        """Disc radius at depth *z*: ``min_node_size`` at 0, ``base_node_size`` at full depth."""
        cfg = self.config
        return cfg.min_node_size + (cfg.base_node_size - cfg.min_node_size) * (
            z / cfg.perspective_depth
        )

    def clamp(self, nodes: list[Node], bounds: Bounds) -> None:
        upper = bounds.upper(self.config.perspective_depth)
        for node in nodes:
            np.clip(node.position, 0.0, upper, out=node.position)

    def edges(self, nodes: list[Node]) -> list[Edge]:
        """All pairs closer than ``max_distance``, each pair once."""
        cfg = self.config
        result: list[Edge] = []
        for i, node in enumerate(nodes):
            for j in range(i + 1, len(nodes)):
                distance = node.distance_to(nodes[j])
                if distance < cfg.max_distance:
                    result.append(Edge(
                        i=i,
                        j=j,
                        distance=distance,
                        opacity=(1.0 - distance / cfg.max_distance) * cfg.edge_opacity_scale,
                        width=cfg.base_edge_width * (node.z / cfg.perspective_depth),
                    ))
        return result

    def edge_color(self, opacity: float) -> tuple[float, float, float, float]:
        r, g, b = self.config.edge_rgb
        return (r, g, b, opacity)

    def draw_background(self, context: Any, bounds: Bounds) -> None:
        cfg = self.config
        if cfg.background_color is None:
            return
        r, g, b = mcolors.to_rgb(cfg.background_color)
        context.fill_linear_gradient(
            0.0, 0.0, bounds.width, bounds.height,
            (r, g, b, cfg.background_alpha),
            (r, g, b, 0.0),
        )

    def render(self, context: Any, nodes: list[Node], bounds: Bounds) -> None:
        """Draw one full frame.

        Each node is drawn followed by its edges to later nodes, so later
        edges overlap earlier nodes.
        """
        cfg = self.config
        context.clear(bounds.width, bounds.height)
        self.draw_background(context, bounds)
        self.clamp(nodes, bounds)

        edges_from: dict[int, list[Edge]] = {}
        for edge in self.edges(nodes):
            edges_from.setdefault(edge.i, []).append(edge)

        for i, node in enumerate(nodes):
            context.circle(
                node.x, node.y, self.node_size(node.z),
                facecolor=cfg.fill_color,
                alpha=cfg.node_alpha,
                edgecolor=cfg.border_color,
                linewidth=cfg.border_width,
            )
            for edge in edges_from.get(i, ()):
                other = nodes[edge.j]
                context.line(
                    node.x, node.y, other.x, other.y,
                    color=self.edge_color(edge.opacity),
                    linewidth=edge.width,
                )
        context.present()

