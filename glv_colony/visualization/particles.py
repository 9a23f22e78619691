"""Particle state mapper.

Each particle is bound to one species.  Every render tick its size tracks
that species' abundance, its color identifies the species, and its
position floats around a fixed base point as a function of elapsed time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .. import config
from ..core.parameters import NUM_SPECIES


@dataclass(frozen=True)
class Particle:
    """Static particle data, sampled once.

    ``x, y, z`` are the Cartesian base coordinates derived from the
    spherical ``(theta, phi, radius)``.
    """

    theta: float
    phi: float
    radius: float
    species: int
    x: float = field(init=False)
    y: float = field(init=False)
    z: float = field(init=False)

    def __post_init__(self) -> None:
        if not 0 <= self.species < NUM_SPECIES:
            raise ValueError(f"species must be in 0..{NUM_SPECIES - 1}, got {self.species}")
        sin_phi = math.sin(self.phi)
        object.__setattr__(self, "x", self.radius * sin_phi * math.cos(self.theta))
        object.__setattr__(self, "y", self.radius * sin_phi * math.sin(self.theta))
        object.__setattr__(self, "z", self.radius * math.cos(self.phi))


@dataclass(frozen=True)
class ParticleTransform:
    position: tuple[float, float, float]
    scale: float
    color: str


def generate_ensemble(
    count: int = config.PARTICLE_COUNT,
    rng: np.random.Generator | None = None,
    shell: tuple[float, float] = config.SHELL_RADIUS,
) -> tuple[Particle, ...]:
    """Sample *count* particles uniformly over a spherical shell.

    ``phi = acos(2u - 1)`` gives uniform surface density rather than
    uniform angles.  Species are assigned round-robin (``index % 3``).
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = rng or np.random.default_rng()
    theta = rng.uniform(0.0, 2.0 * math.pi, count)
    phi = np.arccos(2.0 * rng.uniform(0.0, 1.0, count) - 1.0)
    radius = rng.uniform(shell[0], shell[1], count)
    return tuple(
        Particle(
            theta=float(theta[i]),
            phi=float(phi[i]),
            radius=float(radius[i]),
            species=i % NUM_SPECIES,
        )
        for i in range(count)
    )


def compute_transform(
    particle: Particle,
    populations: Sequence[float],
    elapsed_time: float,
    scale_factor: float = config.SCALE_FACTOR,
    amplitude: float = config.HOVER_AMPLITUDE,
    colors: Sequence[str] = config.SPECIES_COLORS,
) -> ParticleTransform:
    """Position, scale and color of *particle* at *elapsed_time*.

    Scale is a linear readout of abundance with no upper clamp.
    """
    x, y, z = particle.x, particle.y, particle.z
    return ParticleTransform(
        position=(
            x + math.sin(elapsed_time + x) * amplitude,
            y + math.cos(elapsed_time + y) * amplitude,
            z,
        ),
        scale=populations[particle.species] * scale_factor,
        color=colors[particle.species],
    )


@dataclass(frozen=True)
class EnsembleTransforms:
    positions: np.ndarray  # shape (N, 3)
    scales: np.ndarray  # shape (N,)
    colors: list[str]


class ParticleMapper:
    """Vectorised :func:`compute_transform` over a fixed ensemble."""

    def __init__(
        self,
        particles: Sequence[Particle],
        scale_factor: float = config.SCALE_FACTOR,
        amplitude: float = config.HOVER_AMPLITUDE,
        colors: Sequence[str] = config.SPECIES_COLORS,
    ) -> None:
        self.particles = tuple(particles)
        self.scale_factor = scale_factor
        self.amplitude = amplitude
        self._base = np.array(
            [(p.x, p.y, p.z) for p in self.particles], dtype=float
        ).reshape(-1, 3)
        self._base.setflags(write=False)
        self.species = np.array([p.species for p in self.particles], dtype=int)
        self.species.setflags(write=False)
        self.color_table = tuple(colors)
        self.colors = [self.color_table[s] for s in self.species]

    @classmethod
    def random(
        cls,
        count: int = config.PARTICLE_COUNT,
        rng: np.random.Generator | None = None,
        **kwargs,
    ) -> ParticleMapper:
        return cls(generate_ensemble(count, rng), **kwargs)

    def __len__(self) -> int:
        return len(self.particles)

    def species_counts(self) -> list[int]:
        return np.bincount(self.species, minlength=NUM_SPECIES).tolist()

    def transform(self, index: int, populations: Sequence[float], elapsed_time: float) -> ParticleTransform:
        return compute_transform(
            self.particles[index], populations, elapsed_time,
            self.scale_factor, self.amplitude, self.color_table,
        )

    def transforms(self, populations: Sequence[float], elapsed_time: float) -> EnsembleTransforms:
        """Compute every particle's transform for one render tick."""
        base = self._base
        positions = base.copy()
        positions[:, 0] += np.sin(elapsed_time + base[:, 0]) * self.amplitude
        positions[:, 1] += np.cos(elapsed_time + base[:, 1]) * self.amplitude
        pops = np.asarray(populations, dtype=float)
        scales = pops[self.species] * self.scale_factor
        return EnsembleTransforms(positions=positions, scales=scales, colors=list(self.colors))
