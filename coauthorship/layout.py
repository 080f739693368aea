"""Layout engine: runs the force simulation over the filtered graph.

The engine owns the particle state, the live ``ForceParameters`` and the
cooling level ``alpha``. It is ``CONVERGING`` while alpha is above the
floor and ``IDLE`` once the layout has cooled. Each tick publishes a
``LayoutFrame`` (positions by author name and edge segments) to the
``on_tick`` callback; drawing happens there, outside the pure step.

Changing a force coefficient goes through ``reconfigure``, which rebinds
the coefficient and restarts cooling from alpha = 1. Node and edge sets
are fixed for the engine's lifetime.

Usage::

    engine = LayoutEngine(graph, encoding, on_tick=lambda f: draw(f))
    engine.run(max_ticks=300)
    engine.reconfigure("link_strength", 1.0)   # re-settles on next ticks
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from coauthorship.config import ForceParameters
from coauthorship.encoding import VisualEncoding
from coauthorship.forces import (
    ALPHA_MIN,
    ParticleState,
    ParticleSystem,
    cool,
    initial_state,
    step,
)
from coauthorship.graph import CoauthorGraph

logger = logging.getLogger(__name__)

RECONFIGURABLE = ("charge_strength", "collide_factor", "link_strength")

Point = tuple[float, float]


class LayoutState(enum.Enum):
    IDLE = "idle"
    CONVERGING = "converging"


@dataclass(frozen=True)
class EdgeSegment:
    """An edge resolved to the current positions of its endpoints."""

    source: str
    target: str
    start: Point
    end: Point


@dataclass(frozen=True)
class LayoutFrame:
    """Snapshot published after every tick."""

    tick: int
    alpha: float
    nodes: dict[str, Point]
    edges: tuple[EdgeSegment, ...]


class LayoutEngine:
    """Force layout over a filtered ``CoauthorGraph``.

    Args:
        graph: Filtered graph; every edge endpoint must be a node.
        encoding: Visual encoding supplying node radii.
        params: Initial force coefficients (defaults if None). The
            engine keeps and mutates this object.
        on_tick: Called with a ``LayoutFrame`` after each tick.
        seed: Seed for separating coincident particles.
    """

    def __init__(
        self,
        graph: CoauthorGraph,
        encoding: VisualEncoding,
        params: ForceParameters | None = None,
        on_tick: Callable[[LayoutFrame], None] | None = None,
        seed: int = 0,
    ):
        self.graph = graph
        self.params = params if params is not None else ForceParameters()
        self.on_tick = on_tick

        self._names = [n.name for n in graph.nodes]
        index = {name: i for i, name in enumerate(self._names)}
        self.system = ParticleSystem.build(
            radii=[encoding.radius_of(name) for name in self._names],
            sources=[index[e.source] for e in graph.edges],
            targets=[index[e.target] for e in graph.edges],
        )
        self.state: ParticleState = initial_state(len(self._names))
        self.alpha = 1.0
        self.ticks = 0
        self.status = LayoutState.CONVERGING if self._names else LayoutState.IDLE
        self._rng = np.random.default_rng(seed)

    @property
    def converging(self) -> bool:
        return self.status is LayoutState.CONVERGING

    # ── Simulation ────────────────────────────────────────────────────────

    def tick(self) -> LayoutFrame | None:
        """Advance one tick if converging and publish the new frame.

        Returns:
            The published frame, or None if the engine is idle.
        """
        if not self.converging:
            return None
        self.alpha = cool(self.alpha)
        self.state = step(self.state, self.system, self.params, self.alpha, self._rng)
        self.ticks += 1
        if self.alpha < ALPHA_MIN:
            self.status = LayoutState.IDLE
            logger.debug("Layout converged after %d ticks", self.ticks)
        frame = self.frame()
        if self.on_tick is not None:
            self.on_tick(frame)
        return frame

    def run(self, max_ticks: int | None = None) -> int:
        """Tick until idle or until *max_ticks* ticks. Returns ticks run."""
        n = 0
        while self.converging and (max_ticks is None or n < max_ticks):
            self.tick()
            n += 1
        return n

    def restart(self):
        """Reset alpha to 1 so the layout re-settles."""
        self.alpha = 1.0
        if self._names:
            self.status = LayoutState.CONVERGING

    def reconfigure(self, name: str, value: float):
        """Rebind one force coefficient and restart convergence.

        Args:
            name: One of ``charge_strength``, ``collide_factor``,
                ``link_strength``.
            value: New coefficient.

        Raises:
            ValueError: If *name* is not a live-tunable parameter.
        """
        if name not in RECONFIGURABLE:
            raise ValueError(
                f"Unknown force parameter {name!r}; expected one of {', '.join(RECONFIGURABLE)}"
            )
        setattr(self.params, name, float(value))
        logger.debug("Set %s = %s, restarting layout", name, value)
        self.restart()

    # ── Read-out ──────────────────────────────────────────────────────────

    def positions(self) -> dict[str, Point]:
        return {
            name: (float(x), float(y))
            for name, (x, y) in zip(self._names, self.state.positions)
        }

    def frame(self) -> LayoutFrame:
        nodes = self.positions()
        edges = tuple(
            EdgeSegment(e.source, e.target, nodes[e.source], nodes[e.target])
            for e in self.graph.edges
        )
        return LayoutFrame(tick=self.ticks, alpha=self.alpha, nodes=nodes, edges=edges)
