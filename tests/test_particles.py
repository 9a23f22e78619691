"""Tests for the particle state mapper."""

from __future__ import annotations

import math

import numpy as np
import pytest

from glv_colony import config
from glv_colony.visualization.particles import (
    Particle,
    ParticleMapper,
    compute_transform,
    generate_ensemble,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _ensemble(n: int = 300, seed: int = 0) -> tuple[Particle, ...]:
    return generate_ensemble(n, rng=np.random.default_rng(seed))


# ── Ensemble generation ──────────────────────────────────────────────

class TestGenerateEnsemble:
    def test_count(self):
        assert len(_ensemble(50)) == 50

    def test_balanced_species(self):
        particles = _ensemble(3000)
        counts = [sum(1 for p in particles if p.species == s) for s in range(3)]
        assert counts == [1000, 1000, 1000]

    def test_round_robin_assignment(self):
        particles = _ensemble(7)
        assert [p.species for p in particles] == [0, 1, 2, 0, 1, 2, 0]

    def test_radius_in_shell(self):
        for p in _ensemble(500):
            assert 10.0 <= p.radius <= 20.0
            norm = math.sqrt(p.x ** 2 + p.y ** 2 + p.z ** 2)
            assert abs(norm - p.radius) < 1e-9

    def test_angles_in_range(self):
        for p in _ensemble(500):
            assert 0.0 <= p.theta <= 2 * math.pi
            assert 0.0 <= p.phi <= math.pi

    def test_uniform_surface_density(self):
        """cos(phi) is uniform on [-1, 1], so its mean is near zero."""
        particles = _ensemble(3000, seed=3)
        cos_phi = np.array([math.cos(p.phi) for p in particles])
        assert abs(cos_phi.mean()) < 0.05
        # Upper and lower hemispheres roughly equally populated
        assert abs((cos_phi > 0).mean() - 0.5) < 0.05

    def test_seeded_is_reproducible(self):
        assert _ensemble(30, seed=9) == _ensemble(30, seed=9)

    def test_empty(self):
        assert generate_ensemble(0) == ()

    def test_negative_count(self):
        with pytest.raises(ValueError):
            generate_ensemble(-1)


class TestParticle:
    def test_base_coordinates(self):
        p = Particle(theta=0.0, phi=math.pi / 2, radius=10.0, species=1)
        assert abs(p.x - 10.0) < 1e-12
        assert abs(p.y) < 1e-12
        assert abs(p.z) < 1e-9

    def test_invalid_species(self):
        with pytest.raises(ValueError):
            Particle(theta=0.0, phi=0.0, radius=10.0, species=3)


# ── Transforms ───────────────────────────────────────────────────────

class TestComputeTransform:
    def test_scale_is_linear_in_abundance(self):
        p = Particle(theta=1.0, phi=1.0, radius=12.0, species=2)
        tf = compute_transform(p, (1.0, 2.0, 3.0), 0.7)
        assert tf.scale == 3.0 * config.SCALE_FACTOR

    def test_scale_ignores_time_and_other_species(self):
        p = Particle(theta=1.0, phi=1.0, radius=12.0, species=0)
        a = compute_transform(p, (2.0, 1.0, 1.0), 0.0)
        b = compute_transform(p, (2.0, 50.0, 0.1), 99.0)
        assert a.scale == b.scale

    def test_scale_unbounded(self):
        p = Particle(theta=1.0, phi=1.0, radius=12.0, species=0)
        assert compute_transform(p, (1e6, 1.0, 1.0), 0.0).scale == 1e6 * config.SCALE_FACTOR

    def test_position_formula(self):
        p = Particle(theta=0.3, phi=1.2, radius=15.0, species=1)
        t = 2.5
        tf = compute_transform(p, (1.0, 1.0, 1.0), t, amplitude=0.5)
        assert tf.position == (
            p.x + math.sin(t + p.x) * 0.5,
            p.y + math.cos(t + p.y) * 0.5,
            p.z,
        )

    def test_position_independent_of_population(self):
        p = Particle(theta=0.3, phi=1.2, radius=15.0, species=1)
        a = compute_transform(p, (1.0, 1.0, 1.0), 4.0)
        b = compute_transform(p, (9.0, 0.1, 3.0), 4.0)
        assert a.position == b.position

    def test_color_by_species(self):
        for s, color in enumerate(("#ff0055", "#00cc88", "#22ccff")):
            p = Particle(theta=0.0, phi=0.5, radius=10.0, species=s)
            assert compute_transform(p, (1.0, 1.0, 1.0), 0.0).color == color
            assert compute_transform(p, (80.0, 80.0, 80.0), 3.0).color == color

    def test_idempotent(self):
        p = _ensemble(3)[1]
        a = compute_transform(p, (1.2, 0.4, 3.3), 1.75)
        b = compute_transform(p, (1.2, 0.4, 3.3), 1.75)
        assert a == b


class TestParticleMapper:
    def test_matches_scalar_transform(self):
        particles = _ensemble(60)
        mapper = ParticleMapper(particles)
        pops = (1.5, 0.2, 4.0)
        tf = mapper.transforms(pops, 3.25)
        for i, p in enumerate(particles):
            single = compute_transform(p, pops, 3.25)
            assert np.allclose(tf.positions[i], single.position, atol=1e-12)
            assert tf.scales[i] == single.scale
            assert tf.colors[i] == single.color
            assert mapper.transform(i, pops, 3.25) == single

    def test_shapes(self):
        mapper = ParticleMapper(_ensemble(30))
        tf = mapper.transforms((1.0, 1.0, 1.0), 0.0)
        assert tf.positions.shape == (30, 3)
        assert tf.scales.shape == (30,)
        assert len(tf.colors) == 30

    def test_repeatable(self):
        mapper = ParticleMapper(_ensemble(30))
        a = mapper.transforms((1.0, 2.0, 3.0), 1.0)
        b = mapper.transforms((1.0, 2.0, 3.0), 1.0)
        assert np.array_equal(a.positions, b.positions)
        assert np.array_equal(a.scales, b.scales)

    def test_base_positions_not_modified(self):
        mapper = ParticleMapper(_ensemble(30))
        first = mapper.transforms((1.0, 1.0, 1.0), 0.0).positions.copy()
        mapper.transforms((1.0, 1.0, 1.0), 5.0)
        again = mapper.transforms((1.0, 1.0, 1.0), 0.0).positions
        assert np.array_equal(first, again)

    def test_species_counts(self):
        mapper = ParticleMapper.random(count=300, rng=np.random.default_rng(1))
        assert len(mapper) == 300
        assert mapper.species_counts() == [100, 100, 100]

    def test_custom_scale_and_colors(self):
        mapper = ParticleMapper(_ensemble(3), scale_factor=0.4, colors=("r", "g", "b"))
        tf = mapper.transforms((1.0, 2.0, 3.0), 0.0)
        assert np.allclose(tf.scales, [0.4, 0.8, 1.2])
        assert tf.colors == ["r", "g", "b"]
        assert mapper.transform(2, (1.0, 2.0, 3.0), 0.0).color == "b"
