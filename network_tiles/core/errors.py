"""Exception hierarchy for tile graphs."""

from __future__ import annotations

from typing import Any


class TileGraphError(Exception):
    """Base class for every error raised by ``network_tiles``."""


class ConfigError(TileGraphError, ValueError):
    """A graph configuration value is out of range or malformed."""


class RegionError(TileGraphError):
    """A region cannot host a graph instance."""

    def __init__(self, region: Any, message: str) -> None:
        super().__init__(message)
        self.region = region


class SurfaceUnavailableError(RegionError):
    """The region has no drawing surface."""


class ContextUnavailableError(RegionError):
    """The region's surface did not yield a 2D drawing context."""
