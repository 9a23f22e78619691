"""Fixed-interval sampling loop.

The engine is stepped on a wall-clock interval that is independent of the
render rate.  Callers own the clock: every method takes the current time
(e.g. ``time.monotonic()``) so the loop stays deterministic under test.
"""

from __future__ import annotations

import logging

from .. import config
from .engine import GLVEngine

logger = logging.getLogger(__name__)


class SimulationLoop:
    """Cooperative trigger that advances a :class:`GLVEngine` every
    *sample_interval* seconds.

    Parameters
    ----------
    max_catch_up:
        Upper bound on steps taken by one :meth:`tick` after a stall, so a
        long pause does not replay an unbounded backlog.
    """

    def __init__(
        self,
        engine: GLVEngine,
        sample_interval: float = config.SAMPLE_INTERVAL,
        max_catch_up: int = 5,
    ) -> None:
        if sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive, got {sample_interval}")
        if max_catch_up < 1:
            raise ValueError(f"max_catch_up must be at least 1, got {max_catch_up}")
        self.engine = engine
        self.sample_interval = sample_interval
        self.max_catch_up = max_catch_up
        self.started_at: float | None = None
        self._next_due: float | None = None

    @property
    def running(self) -> bool:
        return self._next_due is not None

    def start(self, now: float) -> None:
        self.started_at = now
        self._next_due = now + self.sample_interval
        logger.info("Simulation loop started (interval %.3fs)", self.sample_interval)

    def stop(self) -> None:
        if self._next_due is not None:
            logger.info(
                "Simulation loop stopped at step %d", self.engine.snapshot.step_index
            )
        self._next_due = None

    def elapsed(self, now: float) -> float:
        """Seconds since :meth:`start`, or ``0.0`` if never started."""
        if self.started_at is None:
            return 0.0
        return now - self.started_at

    def tick(self, now: float) -> int:
        """Advance the engine for every interval that has elapsed by *now*.

        Returns the number of steps taken.
        """
        if self._next_due is None:
            return 0
        steps = 0
        while now >= self._next_due and steps < self.max_catch_up:
            self.engine.advance()
            self._next_due += self.sample_interval
            steps += 1
        if now >= self._next_due:
            skipped = int((now - self._next_due) // self.sample_interval) + 1
            logger.debug("Loop fell behind; dropping %d intervals", skipped)
            self._next_due += skipped * self.sample_interval
        return steps
