"""Node and bounds model for the tile graph simulation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Bounds:
    """Logical size of a drawing surface, in CSS-like pixels."""

    width: float
    height: float

    def upper(self, depth: float) -> np.ndarray:
        """Per-axis upper limits ``(width, height, depth)``."""
        return np.array([self.width, self.height, depth], dtype=float)


@dataclass
class Node:
    """A single simulated particle.

    Positions live in logical pixels on x/y and in ``[0, perspective_depth]``
    on z; larger z is closer to the viewer.
    """

    position: np.ndarray  # shape (3,)
    velocity: np.ndarray  # shape (3,)

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float).reshape(3)
        self.velocity = np.asarray(self.velocity, dtype=float).reshape(3)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    def distance_to(self, other: Node) -> float:
        return float(np.linalg.norm(self.position - other.position))
