"""Node motion: random spawning and boundary-reflecting steps."""

from __future__ import annotations

import numpy as np

from ..core.node import Bounds, Node


def spawn_nodes(
    count: int,
    bounds: Bounds,
    perspective_depth: float,
    speed_multiplier: float,
    rng: np.random.Generator | None = None,
    flat: bool = False,
) -> list[Node]:
    """Create *count* nodes uniformly inside *bounds*.

    Each velocity component is drawn from ``[-0.5, 0.5) * speed_multiplier``.
    With *flat* every node sits on the front plane ``z = perspective_depth``
    and never moves in depth.
    """
    rng = rng or np.random.default_rng()
    upper = bounds.upper(perspective_depth)
    nodes: list[Node] = []
    for _ in range(count):
        position = rng.uniform(0.0, 1.0, size=3) * upper
        velocity = (rng.random(3) - 0.5) * speed_multiplier
        if flat:
            position[2] = perspective_depth
            velocity[2] = 0.0
        nodes.append(Node(position=position, velocity=velocity))
    return nodes


def tick(nodes: list[Node], bounds: Bounds, perspective_depth: float) -> None:
    """Advance every node by one step, in place.

    A velocity component is negated when its axis ends the step outside
    ``[0, upper]``.  Positions are left as they are: a node may sit past the
    border for one frame before it comes back.
    """
    upper = bounds.upper(perspective_depth)
    for node in nodes:
        node.position += node.velocity
        outside = (node.position < 0.0) | (node.position > upper)
        node.velocity[outside] *= -1.0
