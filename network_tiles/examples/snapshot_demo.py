"""Headless tile demo.

Builds a page of six tiles, hovers the first one for four seconds of frames,
then leaves it and saves every tile's raster side by side.  Only the hovered
tile moves; the others keep their initial static frame.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from ..core.config import preset
from ..host.page import POINTER_ENTER, POINTER_LEAVE, Page, Tile
from ..lifecycle.factory import InstanceFactory
from ..logging_config import setup_logging
from ..simulation.scheduler import FrameScheduler

TILE_COLORS = ["#00356b", "#7634a6", None, "#286dc0", None, "#bd5319"]


def main() -> None:
    setup_logging()
    page = Page(
        [Tile(f"Tile {i + 1}", 280, 180, color=c) for i, c in enumerate(TILE_COLORS)],
        device_pixel_ratio=2.0,
    )
    # A tile whose canvas is missing is reported and skipped.
    page.add(Tile("No canvas", with_canvas=False))

    scheduler = FrameScheduler()
    factory = InstanceFactory(page, scheduler, preset("tile"), rng=np.random.default_rng(42))
    factory.initialize_visible()

    hovered = page.regions[0]
    hovered.dispatch(POINTER_ENTER)
    scheduler.run(240)
    hovered.dispatch(POINTER_LEAVE)

    instances = factory.instances
    fig, axes = plt.subplots(2, 3, figsize=(12, 6))
    for ax, region in zip(axes.flat, page.regions):
        ax.imshow(instances[region].surface.to_rgba())
        ax.set_title(f"{region.title} ({instances[region].frame_count} frames)")
        ax.set_axis_off()
    plt.tight_layout()
    plt.savefig("snapshot_demo.png", dpi=150)
    plt.show()


if __name__ == "__main__":
    main()
