"""Live colony demo.

Opens a 3D view of the particle colony.  Keys 1/2/3 switch between the
balanced, explosive-growth and collapse scenarios; ``0`` resets the
populations.
"""

from __future__ import annotations

import logging

import matplotlib.pyplot as plt
import numpy as np

from ..core.scenarios import Scenario
from ..logging_config import setup_logging
from ..simulation.engine import GLVEngine
from ..visualization.particles import ParticleMapper
from ..visualization.renderer import ColonyRenderer

logger = logging.getLogger(__name__)

_KEYS = {
    "1": Scenario.BALANCED,
    "2": Scenario.EXPLOSIVE_GROWTH,
    "3": Scenario.COLLAPSE,
}


def main() -> None:
    setup_logging()
    engine = GLVEngine()
    mapper = ParticleMapper.random(rng=np.random.default_rng(7))
    renderer = ColonyRenderer(engine, mapper)
    anim = renderer.animate()

    def on_key(event) -> None:
        if event.key in _KEYS:
            engine.apply_scenario(_KEYS[event.key])
        elif event.key == "0":
            engine.reset()

    plt.gcf().canvas.mpl_connect("key_press_event", on_key)
    logger.info("Started: %s", engine.description)
    plt.show()
    renderer.loop.stop()


if __name__ == "__main__":
    main()
