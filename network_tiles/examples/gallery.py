"""Interactive tile gallery.

Run with:
    python -m network_tiles.examples.gallery

Hover a tile to animate its graph.  Press ``m`` to reveal three more tiles.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from ..core.config import preset
from ..host.figure import FigurePage
from ..lifecycle.factory import InstanceFactory
from ..logging_config import setup_logging
from ..simulation.scheduler import TimerFrameScheduler

TITLES = [f"Project {i + 1}" for i in range(12)]
COLORS = ["#00356b", "#7634a6", None, "#286dc0"] * 3


def main() -> None:
    setup_logging()
    fig = plt.figure(figsize=(10, 8))
    page = FigurePage(fig, TITLES, colors=COLORS, ncols=3, visible=6)

    scheduler = TimerFrameScheduler(fig.canvas, interval_ms=16)
    factory = InstanceFactory(page, scheduler, preset("tile"), rng=np.random.default_rng())
    factory.initialize_visible()
    factory.watch_reveals()

    def on_key(event) -> None:
        if event.key == "m":
            page.show_more(3)

    fig.canvas.mpl_connect("key_press_event", on_key)
    scheduler.start()
    plt.show()
    scheduler.stop()
    factory.dispose()
    page.close()


if __name__ == "__main__":
    main()
