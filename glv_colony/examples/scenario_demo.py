"""Scenario comparison demo.

Runs the engine from the same initial population under each scenario
preset for 200 steps and plots the three trajectories side by side.
"""

from __future__ import annotations

import matplotlib.pyplot as plt

from ..core.scenarios import Scenario
from ..logging_config import setup_logging
from ..simulation.engine import GLVEngine
from ..visualization.renderer import plot_trajectories


def main() -> None:
    setup_logging()
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))

    for ax, scenario in zip(axes, Scenario):
        engine = GLVEngine(scenario=scenario)
        history = engine.run(200)
        plot_trajectories(history, title=scenario.value, ax=ax)

    plt.tight_layout()
    plt.savefig("scenario_demo.png", dpi=150)
    plt.show()


if __name__ == "__main__":
    main()
