"""Model parameters and population state for the three-species GLV system."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from .. import config

NUM_SPECIES = 3

PopulationVector = tuple[float, float, float]


def as_population(values: Sequence[float]) -> PopulationVector:
    """Normalise *values* to an immutable population vector."""
    if len(values) != NUM_SPECIES:
        raise ValueError(
            f"expected {NUM_SPECIES} population values, got {len(values)}"
        )
    return tuple(float(v) for v in values)  # type: ignore[return-value]


def _as_rates(values: Sequence[float]) -> tuple[float, float, float]:
    if len(values) != NUM_SPECIES:
        raise ValueError(
            f"expected {NUM_SPECIES} growth rates, got {len(values)}"
        )
    return tuple(float(v) for v in values)  # type: ignore[return-value]


def _as_matrix(rows: Sequence[Sequence[float]]) -> tuple[tuple[float, ...], ...]:
    if len(rows) != NUM_SPECIES or any(len(row) != NUM_SPECIES for row in rows):
        raise ValueError(
            f"interaction matrix must be {NUM_SPECIES}x{NUM_SPECIES}"
        )
    return tuple(tuple(float(v) for v in row) for row in rows)


@dataclass(frozen=True)
class SimulationParameters:
    """Growth rates ``r``, interaction matrix ``A`` and Euler step ``dt``.

    ``A[i][j]`` is the per-unit effect of species *j* on the growth of
    species *i*.  Diagonal entries model self-limitation.
    """

    growth_rates: tuple[float, float, float]
    interaction_matrix: tuple[tuple[float, ...], ...] = config.INTERACTION_MATRIX
    time_step: float = config.TIME_STEP

    def __post_init__(self) -> None:
        object.__setattr__(self, "growth_rates", _as_rates(self.growth_rates))
        object.__setattr__(
            self, "interaction_matrix", _as_matrix(self.interaction_matrix)
        )
        time_step = float(self.time_step)
        if not time_step > 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        object.__setattr__(self, "time_step", time_step)

    def with_growth_rates(self, rates: Sequence[float]) -> SimulationParameters:
        """Return a copy with *rates* installed; ``A`` and ``dt`` are kept."""
        return replace(self, growth_rates=_as_rates(rates))
