"""In-memory page model hosting tile graphs.

Regions and the page publish their triggers through matplotlib's
:class:`~matplotlib.cbook.CallbackRegistry`, the same mechanism figure
canvases use for ``mpl_connect``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

from matplotlib.cbook import CallbackRegistry

from ..visualization.surface import AggSurface

logger = logging.getLogger(__name__)

POINTER_ENTER = "pointerenter"
POINTER_LEAVE = "pointerleave"
VIEWPORT_RESIZE = "resize"
REVEALED = "revealed"
REMOVED = "removed"

TILE_CLASS = "tile"
HIDDEN_CLASS = "hidden"


class Region:
    """A rectangular area that may host one graph.

    Subclasses provide :attr:`canvas` and :meth:`bounding_size`.
    """

    signals = (POINTER_ENTER, POINTER_LEAVE)

    def __init__(
        self,
        title: str = "",
        *,
        color: str | None = None,
        classes: Iterable[str] = (TILE_CLASS,),
        attributes: dict[str, str] | None = None,
    ) -> None:
        self.attributes: dict[str, str] = dict(attributes or {})
        self.attributes.setdefault("data-title", title)
        if color is not None:
            self.attributes["data-color"] = color
        self.classes: set[str] = set(classes)
        self.canvas: Any = None
        self.callbacks = CallbackRegistry(signals=list(self.signals))

    @property
    def title(self) -> str:
        return self.attributes.get("data-title", "")

    @property
    def hidden(self) -> bool:
        return HIDDEN_CLASS in self.classes

    @hidden.setter
    def hidden(self, value: bool) -> None:
        if value:
            self.classes.add(HIDDEN_CLASS)
        else:
            self.classes.discard(HIDDEN_CLASS)

    def bounding_size(self) -> tuple[float, float]:
        raise NotImplementedError

    def connect(self, signal: str, func: Callable[[], Any]) -> int:
        return self.callbacks.connect(signal, func)

    def disconnect(self, cid: int) -> None:
        self.callbacks.disconnect(cid)

    def dispatch(self, signal: str) -> None:
        self.callbacks.process(signal)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.title!r})"


class Tile(Region):
    """Headless tile rendering into an offscreen Agg surface."""

    def __init__(
        self,
        title: str = "",
        width: float = 300.0,
        height: float = 200.0,
        *,
        with_canvas: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(title, **kwargs)
        self.width = width
        self.height = height
        self.canvas = AggSurface() if with_canvas else None

    def bounding_size(self) -> tuple[float, float]:
        # Hidden tiles are laid out with display: none.
        if self.hidden:
            return (0.0, 0.0)
        return (self.width, self.height)

    def set_size(self, width: float, height: float) -> None:
        """Change the laid-out size.  Hosts follow up with a viewport resize."""
        self.width = width
        self.height = height


class Page:
    """Ordered collection of regions plus page-wide triggers."""

    def __init__(
        self,
        regions: Iterable[Region] = (),
        device_pixel_ratio: float = 1.0,
    ) -> None:
        self.regions: list[Region] = list(regions)
        self.device_pixel_ratio = device_pixel_ratio
        self.callbacks = CallbackRegistry(signals=[VIEWPORT_RESIZE, REVEALED, REMOVED])

    def __iter__(self) -> Iterator[Region]:
        return iter(self.regions)

    def __len__(self) -> int:
        return len(self.regions)

    def add(self, region: Region) -> Region:
        self.regions.append(region)
        return region

    def remove(self, region: Region) -> None:
        self.regions.remove(region)
        self.callbacks.process(REMOVED, region)

    def select(self, marker: str = TILE_CLASS, include_hidden: bool = False) -> Iterator[Region]:
        """Regions carrying *marker*, in page order."""
        for region in self.regions:
            if marker in region.classes and (include_hidden or not region.hidden):
                yield region

    def connect(self, signal: str, func: Callable[..., Any]) -> int:
        return self.callbacks.connect(signal, func)

    def disconnect(self, cid: int) -> None:
        self.callbacks.disconnect(cid)

    def resize_viewport(self) -> None:
        self.callbacks.process(VIEWPORT_RESIZE)

    def reveal(self, region: Region) -> None:
        region.hidden = False
        self.callbacks.process(REVEALED, region)

    def show_more(self, count: int = 3, marker: str = TILE_CLASS) -> list[Region]:
        """Reveal the next *count* hidden regions."""
        hidden = [r for r in self.select(marker, include_hidden=True) if r.hidden]
        revealed = hidden[:count]
        for region in revealed:
            self.reveal(region)
        logger.debug("Revealed %d of %d hidden regions.", len(revealed), len(hidden))
        return revealed
