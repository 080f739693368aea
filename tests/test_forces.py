"""Tests for coauthorship.forces: the particle solver.

Checks each force in isolation on tiny systems, plus the purity of step().
"""

import math

import numpy as np
import pytest

from coauthorship.config import ForceParameters
from coauthorship.forces import (
    ALPHA_DECAY,
    ALPHA_MIN,
    ParticleState,
    ParticleSystem,
    apply_center,
    apply_collide,
    apply_links,
    apply_many_body,
    cool,
    initial_state,
    step,
)


def _rng():
    return np.random.default_rng(0)


class TestInitialState:

    def test_shape_and_rest(self):
        s = initial_state(5)
        assert s.positions.shape == (5, 2)
        assert np.all(s.velocities == 0)

    def test_phyllotaxis_first_point(self):
        s = initial_state(1)
        assert s.positions[0, 0] == pytest.approx(10 * math.sqrt(0.5))
        assert s.positions[0, 1] == pytest.approx(0.0)

    def test_distinct_positions(self):
        s = initial_state(50)
        assert len({tuple(p) for p in np.round(s.positions, 6)}) == 50

    def test_empty(self):
        assert len(initial_state(0)) == 0


class TestCooling:

    def test_reaches_floor_in_about_300_ticks(self):
        alpha, ticks = 1.0, 0
        while alpha >= ALPHA_MIN:
            alpha = cool(alpha)
            ticks += 1
        assert 295 <= ticks <= 305

    def test_decay_constant(self):
        assert cool(1.0) == pytest.approx(1 - ALPHA_DECAY)


class TestForces:

    def test_center_pulls_toward_origin(self):
        pos = np.array([[10.0, -20.0]])
        vel = np.zeros((1, 2))
        apply_center(pos, vel, 0.1, 1.0)
        assert vel[0] == pytest.approx([-1.0, 2.0])

    def test_negative_charge_repels(self):
        pos = np.array([[0.0, 0.0], [10.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_many_body(pos, vel, -50.0, 1.0, _rng())
        assert vel[0, 0] < 0
        assert vel[1, 0] > 0
        assert vel[0, 0] == pytest.approx(-50 * 10 / 100)

    def test_positive_charge_attracts(self):
        pos = np.array([[0.0, 0.0], [10.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_many_body(pos, vel, 50.0, 1.0, _rng())
        assert vel[0, 0] > 0

    def test_coincident_points_separate(self):
        pos = np.zeros((2, 2))
        vel = np.zeros((2, 2))
        apply_many_body(pos, vel, -50.0, 1.0, _rng())
        assert np.all(np.isfinite(vel))
        assert np.any(vel != 0)

    def test_collide_pushes_overlapping_apart(self):
        pos = np.array([[0.0, 0.0], [4.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_collide(pos, vel, np.array([5.0, 5.0]), _rng())
        assert vel[0, 0] < 0 < vel[1, 0]
        # equal radii split the 6-unit overlap evenly
        assert vel[1, 0] == pytest.approx(3.0)

    def test_collide_ignores_separated(self):
        pos = np.array([[0.0, 0.0], [40.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_collide(pos, vel, np.array([5.0, 5.0]), _rng())
        assert np.all(vel == 0)

    def test_link_pulls_toward_rest_length(self):
        system = ParticleSystem.build([3, 3], [0], [1])
        pos = np.array([[0.0, 0.0], [300.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_links(pos, vel, system, 150.0, 0.5, 1.0, _rng())
        assert vel[0, 0] > 0 > vel[1, 0]

    def test_link_pushes_when_too_short(self):
        system = ParticleSystem.build([3, 3], [0], [1])
        pos = np.array([[0.0, 0.0], [50.0, 0.0]])
        vel = np.zeros((2, 2))
        apply_links(pos, vel, system, 150.0, 0.5, 1.0, _rng())
        assert vel[0, 0] < 0 < vel[1, 0]

    def test_link_bias_by_degree(self):
        # node 0 has two links, node 1 and 2 one each
        system = ParticleSystem.build([3, 3, 3], [0, 0], [1, 2])
        assert system.bias == pytest.approx([2 / 3, 2 / 3])


class TestStep:

    def _system(self):
        return ParticleSystem.build([3.0, 7.5, 12.0], [0, 1], [1, 2])

    def test_does_not_mutate_input(self):
        state = initial_state(3)
        before = state.positions.copy()
        step(state, self._system(), ForceParameters(), 1.0, _rng())
        assert np.array_equal(state.positions, before)
        assert np.all(state.velocities == 0)

    def test_moves_particles(self):
        state = initial_state(3)
        new = step(state, self._system(), ForceParameters(), 1.0, _rng())
        assert isinstance(new, ParticleState)
        assert not np.allclose(new.positions, state.positions)

    def test_deterministic_with_seed(self):
        state = initial_state(3)
        a = step(state, self._system(), ForceParameters(), 1.0, _rng())
        b = step(state, self._system(), ForceParameters(), 1.0, _rng())
        assert np.array_equal(a.positions, b.positions)

    def test_settles_near_rest_length(self):
        system = ParticleSystem.build([3.0, 3.0], [0], [1])
        params = ForceParameters(charge_strength=0.0, center_strength=0.0)
        state, alpha, rng = initial_state(2), 1.0, _rng()
        while alpha >= ALPHA_MIN:
            alpha = cool(alpha)
            state = step(state, system, params, alpha, rng)
        d = np.linalg.norm(state.positions[1] - state.positions[0])
        assert d == pytest.approx(150.0, rel=0.05)
