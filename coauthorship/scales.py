"""Continuous scales for visual encoding.

Maps data domains onto output ranges: linear, square-root, and
piecewise-linear with RGB colour interpolation. A domain that collapses
to a single value (or is empty) maps every input to the midpoint of the
output range rather than dividing by zero.

Usage::

    from coauthorship.scales import LinearScale, SqrtScale, extent

    radius = SqrtScale(extent([1, 2, 9]), (3, 12))
    radius(9)                                   # 12.0
    LinearScale((4, 4), (1, 5))(4)              # 3.0 (collapsed domain)
"""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

Domain = tuple[float, float] | None


def extent(values: Iterable[float]) -> Domain:
    """Return ``(min, max)`` of *values*, or None if empty."""
    arr = np.fromiter(values, dtype=float)
    if arr.size == 0:
        return None
    return float(arr.min()), float(arr.max())


def _normalize(x: float, a: float, b: float) -> float:
    span = b - a
    if span == 0:
        return 0.5
    return (x - a) / span


@dataclass(frozen=True)
class LinearScale:
    """Linear map from *domain* onto *output*."""

    domain: Domain
    output: tuple[float, float]

    def __call__(self, x: float) -> float:
        lo, hi = self.output
        if self.domain is None:
            return lo + 0.5 * (hi - lo)
        t = _normalize(float(x), *self.domain)
        return lo + t * (hi - lo)


@dataclass(frozen=True)
class SqrtScale:
    """Square-root map: output area grows linearly with the input."""

    domain: Domain
    output: tuple[float, float]

    def __call__(self, x: float) -> float:
        lo, hi = self.output
        if self.domain is None:
            return lo + 0.5 * (hi - lo)
        a, b = (_signed_sqrt(v) for v in self.domain)
        t = _normalize(_signed_sqrt(float(x)), a, b)
        return lo + t * (hi - lo)


def _signed_sqrt(x: float) -> float:
    return math.copysign(math.sqrt(abs(x)), x)


# ── Colour ────────────────────────────────────────────────────────────────


def parse_hex(color: str) -> tuple[int, int, int]:
    """Parse ``#rgb`` or ``#rrggbb`` into an RGB triple."""
    h = color.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f"Not a hex colour: {color!r}")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def to_hex(rgb: Sequence[float]) -> str:
    """Format an RGB triple as ``#rrggbb``, rounding halves up."""
    channels = [min(255, max(0, math.floor(c + 0.5))) for c in rgb]
    return "#{:02x}{:02x}{:02x}".format(*channels)


def interpolate_rgb(a: str, b: str, t: float) -> str:
    """Blend two hex colours channel-wise at fraction *t*."""
    ca = np.array(parse_hex(a), dtype=float)
    cb = np.array(parse_hex(b), dtype=float)
    return to_hex(ca + (cb - ca) * t)


@dataclass(frozen=True)
class PiecewiseScale:
    """Piecewise-linear colour scale over ascending *domain* stops.

    Values between two stops are blended between the matching colours;
    values outside the domain extrapolate along the first or last segment.
    A segment whose two stops coincide evaluates at its midpoint.
    """

    domain: tuple[float, ...]
    colors: tuple[str, ...]

    def __call__(self, x: float) -> str:
        n = min(len(self.domain), len(self.colors)) - 1
        if n < 1:
            return self.colors[0]
        i = bisect_right(self.domain, x, 1, n) - 1
        t = _normalize(x, self.domain[i], self.domain[i + 1])
        return interpolate_rgb(self.colors[i], self.colors[i + 1], t)
