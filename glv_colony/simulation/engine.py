"""Simulation engine — advances the three-species GLV model.

The model is ``dN_i/dt = N_i (r_i + sum_j A_ij N_j)``, integrated with
fixed-step forward Euler.  Each component is clamped from below at the
population floor; there is no upper bound, so explosive parameter sets
produce arbitrarily large (or oscillating) trajectories.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Sequence

from .. import config
from ..core.parameters import (
    NUM_SPECIES,
    PopulationVector,
    SimulationParameters,
    as_population,
)
from ..core.scenarios import (
    PRESETS,
    Scenario,
    InvalidScenarioError,
    describe_scenario,
    parse_scenario,
)

logger = logging.getLogger(__name__)


def step_populations(
    current: Sequence[float],
    params: SimulationParameters,
    floor: float = config.POPULATION_FLOOR,
) -> PopulationVector:
    """One explicit Euler step of the GLV equations.

    Pure: *current* is only read and a new vector is returned.
    """
    r = params.growth_rates
    a = params.interaction_matrix
    dt = params.time_step
    nxt = []
    for i in range(NUM_SPECIES):
        interaction = 0.0
        for j in range(NUM_SPECIES):
            interaction += a[i][j] * current[j]
        d_n = current[i] * (r[i] + interaction)
        nxt.append(max(floor, current[i] + d_n * dt))
    return tuple(nxt)  # type: ignore[return-value]


@dataclass(frozen=True)
class Snapshot:
    """Published engine state; replaced as a whole, never edited."""

    populations: PopulationVector
    step_index: int
    scenario: Scenario
    description: str


class GLVEngine:
    """Owns the model parameters and the current population vector.

    :meth:`advance` steps the model and publishes a fresh :class:`Snapshot`.
    Readers on another cadence only ever see :attr:`snapshot`, which is
    swapped in a single assignment.
    """

    def __init__(
        self,
        params: SimulationParameters | None = None,
        initial: Sequence[float] = config.INITIAL_POPULATIONS,
        scenario: Scenario | str = Scenario.BALANCED,
        floor: float = config.POPULATION_FLOOR,
        history_size: int = config.HISTORY_SIZE,
    ) -> None:
        self.floor = floor
        self._scenario = parse_scenario(scenario)
        rates = PRESETS[self._scenario].growth_rates
        if params is None:
            params = SimulationParameters(rates)
        else:
            # The scenario owns r; a custom A and dt are kept.
            params = params.with_growth_rates(rates)
        self.params = params
        self.initial = self._checked(initial)
        # Bounded window of recent snapshots for plotting / analysis
        self.history: deque[Snapshot] = deque(maxlen=history_size)
        self._snapshot = self._make_snapshot(self.initial, 0)

    def _checked(self, populations: Sequence[float]) -> PopulationVector:
        """Normalise *populations*, rejecting any component below the floor."""
        vec = as_population(populations)
        if any(v < self.floor for v in vec):
            raise ValueError(
                f"populations must be >= {self.floor}, got {vec}"
            )
        return vec

    def _make_snapshot(self, populations: PopulationVector, step_index: int) -> Snapshot:
        return Snapshot(
            populations=populations,
            step_index=step_index,
            scenario=self._scenario,
            description=PRESETS[self._scenario].description,
        )

    # ── State access ─────────────────────────────────────────────────

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def populations(self) -> PopulationVector:
        return self._snapshot.populations

    @property
    def scenario(self) -> Scenario:
        return self._scenario

    @property
    def description(self) -> str:
        return PRESETS[self._scenario].description

    # ── Integration ──────────────────────────────────────────────────

    def step(self, current: Sequence[float] | None = None) -> PopulationVector:
        """Return the population one Euler step after *current*.

        Defaults to the published population.  Nothing is published.
        """
        if current is None:
            current = self._snapshot.populations
        return step_populations(current, self.params, self.floor)

    def publish(self, populations: Sequence[float]) -> Snapshot:
        """Replace the shared snapshot with *populations*.

        Raises :class:`ValueError` if a component is below the floor.
        """
        snap = self._make_snapshot(
            self._checked(populations), self._snapshot.step_index + 1
        )
        self._snapshot = snap
        self.history.append(snap)
        return snap

    def advance(self) -> Snapshot:
        """Step the published population and publish the result."""
        snap = self.publish(self.step())
        logger.debug("step %d: %s", snap.step_index, snap.populations)
        return snap

    def run(self, num_steps: int) -> list[Snapshot]:
        """Advance *num_steps* times. Returns the snapshots produced."""
        return [self.advance() for _ in range(num_steps)]

    def reset(self, populations: Sequence[float] | None = None) -> Snapshot:
        """Restart from *populations* (default: the initial vector).

        Parameters and the active scenario are kept.
        """
        start = self.initial if populations is None else self._checked(populations)
        self.history.clear()
        self._snapshot = self._make_snapshot(start, 0)
        logger.info("Population reset to %s", start)
        return self._snapshot

    # ── Scenarios ────────────────────────────────────────────────────

    def apply_scenario(self, tag: Scenario | str) -> None:
        """Install the growth rates of scenario *tag*.

        Raises :class:`InvalidScenarioError` for unknown tags, leaving the
        parameters untouched.  Populations are not reset.
        """
        try:
            scenario = parse_scenario(tag)
        except InvalidScenarioError:
            logger.warning("Rejected scenario selection %r", tag)
            raise
        self.params = self.params.with_growth_rates(PRESETS[scenario].growth_rates)
        self._scenario = scenario
        # Readers pick up the new description with the current populations.
        self._snapshot = self._make_snapshot(
            self._snapshot.populations, self._snapshot.step_index
        )
        logger.info("Scenario set to %s: r=%s", scenario.value, self.params.growth_rates)

    def describe_scenario(self, tag: Scenario | str | None = None) -> str:
        """Description of *tag*, or of the active scenario when omitted."""
        if tag is None:
            return self.description
        return describe_scenario(tag)
