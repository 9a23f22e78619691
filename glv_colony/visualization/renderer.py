"""Matplotlib-based 3D visualization of the particle colony."""

from __future__ import annotations

import time
from typing import Any, Callable, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .. import config
from ..simulation.driver import SimulationLoop
from ..simulation.engine import GLVEngine
from .particles import EnsembleTransforms, ParticleMapper


def format_populations(
    populations: Sequence[float],
    labels: Sequence[str] = config.SPECIES_LABELS,
) -> list[str]:
    """HUD lines such as ``"Species A (Predator): 1.00"``."""
    return [f"{label}: {value:.2f}" for label, value in zip(labels, populations)]


# Marker area in points^2 for a particle of scale 1.0
_BASE_MARKER_AREA = 12.0


class ColonyRenderer:
    """Renders snapshots or a live animation of the particle colony.

    The engine is stepped by a :class:`SimulationLoop` on its own sampling
    interval; every animation frame only reads the latest snapshot.
    """

    def __init__(
        self,
        engine: GLVEngine,
        mapper: ParticleMapper,
        loop: SimulationLoop | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.engine = engine
        self.mapper = mapper
        self.loop = loop or SimulationLoop(engine)
        self.clock = clock

    def _title(self) -> str:
        snap = self.engine.snapshot
        hud = "   ".join(format_populations(snap.populations))
        return f"{snap.description}\n{hud}"

    def tick(self, now: float | None = None) -> EnsembleTransforms:
        """Advance the sampling loop to *now* and map the latest snapshot."""
        if now is None:
            now = self.clock()
        if not self.loop.running:
            self.loop.start(now)
        self.loop.tick(now)
        return self.mapper.transforms(self.engine.populations, self.loop.elapsed(now))

    def _setup_axes(self, ax: Any, limit: float) -> None:
        ax.set_facecolor("#050505")
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.set_zlim(-limit, limit)
        ax.set_axis_off()

    def render_frame(self, elapsed_time: float = 0.0, *, ax: Any = None) -> Any:
        """Draw the ensemble for the current snapshot at *elapsed_time*."""
        if ax is None:
            fig = plt.figure(figsize=(8, 8), facecolor="#050505")
            ax = fig.add_subplot(projection="3d")
        tf = self.mapper.transforms(self.engine.populations, elapsed_time)
        pos = tf.positions
        ax.scatter(pos[:, 0], pos[:, 1], pos[:, 2], c=tf.colors,
                   s=np.square(tf.scales) * _BASE_MARKER_AREA, depthshade=True)
        self._setup_axes(ax, config.SHELL_RADIUS[1] * 1.2)
        ax.set_title(self._title(), color="white", fontsize=9, loc="left")
        return ax

    def animate(
        self,
        num_frames: int | None = None,
        *,
        interval_ms: int = config.RENDER_INTERVAL_MS,
    ) -> FuncAnimation:
        """Live animation; the simulation loop is started on the first frame."""
        fig = plt.figure(figsize=(8, 8), facecolor="#050505")
        ax = fig.add_subplot(projection="3d")
        tf = self.mapper.transforms(self.engine.populations, 0.0)
        pos = tf.positions
        sc = ax.scatter(pos[:, 0], pos[:, 1], pos[:, 2], c=tf.colors,
                        s=np.square(tf.scales) * _BASE_MARKER_AREA)
        self._setup_axes(ax, config.SHELL_RADIUS[1] * 1.2)
        title_obj = ax.set_title(self._title(), color="white", fontsize=9, loc="left")

        def update(frame: int) -> Any:
            tf = self.tick()
            p = tf.positions
            sc._offsets3d = (p[:, 0], p[:, 1], p[:, 2])
            sc.set_sizes(np.square(tf.scales) * _BASE_MARKER_AREA)
            title_obj.set_text(self._title())
            return (sc, title_obj)

        anim = FuncAnimation(fig, update, frames=num_frames,
                             interval=interval_ms, blit=False)
        return anim


def plot_trajectories(
    history: Sequence[Any],
    *,
    title: str = "Population trajectories",
    ax: Any = None,
) -> Any:
    """Line plot of population per species over a sequence of snapshots."""
    if ax is None:
        _fig, ax = plt.subplots(1, 1, figsize=(8, 4))
    steps = [snap.step_index for snap in history]
    values = np.array([snap.populations for snap in history], dtype=float).reshape(-1, 3)
    for i, (label, color) in enumerate(zip(config.SPECIES_LABELS, config.SPECIES_COLORS)):
        ax.plot(steps, values[:, i], color=color, label=label)
    ax.axhline(config.POPULATION_FLOOR, color="gray", linestyle="--", linewidth=0.8)
    ax.set_xlabel("step")
    ax.set_ylabel("abundance")
    ax.set_title(title)
    ax.legend(loc="upper right", fontsize=8)
    return ax
