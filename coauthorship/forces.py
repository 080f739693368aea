"""Force-directed particle solver.

A velocity-Verlet style simulation in the manner of the usual web force
layouts: each step adds force contributions to particle velocities, then
decays the velocities and moves the particles. Forces, in the order they
are applied:

1. Collide: overlapping circles (radius x collide factor) push apart,
   the smaller circle moving more. Candidate pairs come from a k-d tree.
2. Center: a per-axis pull toward the origin.
3. Many-body: inverse-square-distance interaction between every pair;
   negative strength repels.
4. Link: a spring along every edge toward the rest length, split between
   the endpoints in inverse proportion to their degree.

``step`` is pure: it returns a new ``ParticleState`` and never touches
its input. The caller owns the cooling schedule (``alpha``).

Usage::

    system = ParticleSystem.build(radii, sources, targets)
    state = initial_state(len(radii))
    rng = np.random.default_rng(0)
    state = step(state, system, ForceParameters(), alpha=1.0, rng=rng)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from scipy.spatial import cKDTree

from coauthorship.config import ForceParameters

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - ALPHA_MIN ** (1 / 300)
VELOCITY_DECAY = 0.4

COLLIDE_STRENGTH = 1.0
DISTANCE_MIN2 = 1.0
JIGGLE_SCALE = 1e-6

# Row block size for the many-body pass; bounds the pairwise buffer
_BLOCK = 512


@dataclass(frozen=True)
class ParticleState:
    """Positions and velocities, both shaped ``(n, 2)``."""

    positions: np.ndarray
    velocities: np.ndarray

    def __len__(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class ParticleSystem:
    """Fixed topology of a simulation: radii and link endpoints by index."""

    radii: np.ndarray
    sources: np.ndarray
    targets: np.ndarray
    bias: np.ndarray

    @classmethod
    def build(cls, radii, sources, targets) -> ParticleSystem:
        radii = np.asarray(radii, dtype=float)
        sources = np.asarray(sources, dtype=int)
        targets = np.asarray(targets, dtype=int)
        count = np.bincount(np.concatenate([sources, targets]), minlength=len(radii))
        if len(sources):
            bias = count[sources] / (count[sources] + count[targets])
        else:
            bias = np.zeros(0)
        return cls(radii=radii, sources=sources, targets=targets, bias=bias)

    def __len__(self) -> int:
        return len(self.radii)


def initial_state(n: int) -> ParticleState:
    """Place *n* particles on a phyllotaxis spiral around the origin, at rest."""
    i = np.arange(n, dtype=float)
    r = INITIAL_RADIUS * np.sqrt(0.5 + i)
    angle = i * INITIAL_ANGLE
    positions = np.column_stack([r * np.cos(angle), r * np.sin(angle)]) if n else np.zeros((0, 2))
    return ParticleState(positions=positions, velocities=np.zeros((n, 2)))


def _jiggle(rng: np.random.Generator, shape) -> np.ndarray:
    return (rng.random(shape) - 0.5) * JIGGLE_SCALE


# ── Forces (each mutates the velocity buffer it is given) ─────────────────


def apply_center(pos: np.ndarray, vel: np.ndarray, strength: float, alpha: float):
    vel -= pos * (strength * alpha)


def apply_many_body(pos: np.ndarray, vel: np.ndarray, strength: float, alpha: float, rng):
    n = len(pos)
    if n < 2 or strength == 0:
        return
    for start in range(0, n, _BLOCK):
        stop = min(start + _BLOCK, n)
        # delta[i, j] points from particle i toward particle j
        delta = pos[None, :, :] - pos[start:stop, None, :]
        rows = np.arange(stop - start)
        cols = np.arange(start, stop)
        coincident = np.all(delta == 0, axis=2)
        coincident[rows, cols] = False
        if coincident.any():
            delta[coincident] = _jiggle(rng, (int(coincident.sum()), 2))
        l2 = np.einsum("ijk,ijk->ij", delta, delta)
        l2 = np.where(l2 < DISTANCE_MIN2, np.sqrt(DISTANCE_MIN2 * l2), l2)
        l2[rows, cols] = np.inf
        vel[start:stop] += np.sum(delta * (strength * alpha / l2)[:, :, None], axis=1)


def apply_collide(pos: np.ndarray, vel: np.ndarray, radii: np.ndarray, rng):
    if len(pos) < 2 or not np.any(radii > 0):
        return
    predicted = pos + vel
    tree = cKDTree(predicted)
    pairs = tree.query_pairs(2 * float(radii.max()), output_type="ndarray")
    if len(pairs) == 0:
        return
    i, j = pairs[:, 0], pairs[:, 1]
    r = radii[i] + radii[j]
    delta = predicted[i] - predicted[j]
    l2 = np.einsum("ij,ij->i", delta, delta)
    overlap = l2 < r * r
    if not overlap.any():
        return
    i, j, r, delta, l2 = i[overlap], j[overlap], r[overlap], delta[overlap], l2[overlap]

    zero = l2 == 0
    if zero.any():
        delta[zero] = _jiggle(rng, (int(zero.sum()), 2))
        l2[zero] = np.einsum("ij,ij->i", delta[zero], delta[zero])
    length = np.sqrt(l2)
    push = delta * (((r - length) / length) * COLLIDE_STRENGTH)[:, None]

    ri2 = radii[i] ** 2
    rj2 = radii[j] ** 2
    share = rj2 / (ri2 + rj2)
    np.add.at(vel, i, push * share[:, None])
    np.add.at(vel, j, -push * (1 - share)[:, None])


def apply_links(pos, vel, system: ParticleSystem, distance: float, strength: float, alpha: float, rng):
    if len(system.sources) == 0:
        return
    s, t = system.sources, system.targets
    delta = (pos[t] + vel[t]) - (pos[s] + vel[s])
    zero = delta == 0
    if zero.any():
        delta[zero] = _jiggle(rng, int(zero.sum()))
    length = np.sqrt(np.einsum("ij,ij->i", delta, delta))
    pull = delta * (((length - distance) / length) * alpha * strength)[:, None]
    b = system.bias[:, None]
    np.add.at(vel, t, -pull * b)
    np.add.at(vel, s, pull * (1 - b))


# ── Step ──────────────────────────────────────────────────────────────────


def step(
    state: ParticleState,
    system: ParticleSystem,
    params: ForceParameters,
    alpha: float,
    rng: np.random.Generator,
) -> ParticleState:
    """Advance the simulation by one tick at cooling level *alpha*.

    Args:
        state: Current positions and velocities.
        system: Radii and link topology.
        params: Force coefficients.
        alpha: Current cooling level; scales every force except collide.
        rng: Source for the tiny offsets that separate coincident points.

    Returns:
        A new ``ParticleState``.
    """
    pos = state.positions.copy()
    vel = state.velocities.copy()

    apply_collide(pos, vel, system.radii * params.collide_factor, rng)
    apply_center(pos, vel, params.center_strength, alpha)
    apply_many_body(pos, vel, params.charge_strength, alpha, rng)
    apply_links(pos, vel, system, params.link_distance, params.link_strength, alpha, rng)

    vel *= 1 - VELOCITY_DECAY
    pos += vel
    return ParticleState(positions=pos, velocities=vel)


def cool(alpha: float, target: float = 0.0) -> float:
    """One step of the exponential cooling schedule."""
    return alpha + (target - alpha) * ALPHA_DECAY
