"""Simulation constants.

Central registry of the values the engine, the sampling loop and the
particle mapper fall back to when a caller does not override them.
"""

from __future__ import annotations

# ── Population dynamics ──────────────────────────────────────────────

POPULATION_FLOOR: float = 0.1
TIME_STEP: float = 0.05
INITIAL_POPULATIONS: tuple[float, float, float] = (1.0, 1.0, 1.0)

# Row i holds the per-unit effect of each species on species i.
INTERACTION_MATRIX: tuple[tuple[float, float, float], ...] = (
    (-0.1, 0.5, -0.2),
    (-0.5, -0.1, 0.0),
    (-0.1, -0.2, -0.1),
)

# Recent snapshots kept by the engine (one minute at the default cadence).
HISTORY_SIZE: int = 600

# ── Cadences ─────────────────────────────────────────────────────────

SAMPLE_INTERVAL: float = 0.1  # seconds between engine steps
RENDER_INTERVAL_MS: int = 16  # ~60 Hz

# ── Particle ensemble ────────────────────────────────────────────────

PARTICLE_COUNT: int = 3000
SHELL_RADIUS: tuple[float, float] = (10.0, 20.0)
SCALE_FACTOR: float = 0.5
HOVER_AMPLITUDE: float = 0.5

SPECIES_LABELS: tuple[str, str, str] = (
    "Species A (Predator)",
    "Species B (Prey)",
    "Species C (Comp)",
)
SPECIES_COLORS: tuple[str, str, str] = ("#ff0055", "#00cc88", "#22ccff")
