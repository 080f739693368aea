"""Pointer and control handling for the network view.

The controller sits between an external event loop and the layout
engine. Pointer events toggle tooltip and highlight state on the render
surface; zoom and pan only change the outer group transform; slider
changes rebind a force coefficient on the engine and restart convergence.

Hovering a node highlights every author first observed in the same record
(same ``group``), not its graph neighbours. The inactive set is recomputed
from ``group`` on every hover change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from coauthorship.config import ForceParameters, NetworkConfig
from coauthorship.graph import CoauthorGraph, Edge
from coauthorship.layout import LayoutEngine, Point
from coauthorship.render import RenderSurface, Tooltip

logger = logging.getLogger(__name__)

SCALE_EXTENT = (1.0, 8.0)
TOOLTIP_OFFSET = (10.0, -10.0)


# ── Viewport ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ZoomTransform:
    """Screen = world * k + (x, y)."""

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return point[0] * self.k + self.x, point[1] * self.k + self.y

    def invert(self, point: Point) -> Point:
        return (point[0] - self.x) / self.k, (point[1] - self.y) / self.k

    def to_svg(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"


class Viewport:
    """Pan/zoom state over a fixed extent with a clamped scale factor.

    Args:
        extent: ``((x0, y0), (x1, y1))`` of the viewport; programmatic
            zooms without an anchor keep its centre fixed.
        scale_extent: ``(min_k, max_k)``.
    """

    def __init__(
        self,
        extent: tuple[Point, Point],
        scale_extent: tuple[float, float] = SCALE_EXTENT,
    ):
        self.extent = extent
        self.scale_extent = scale_extent
        self.transform = ZoomTransform()

    @property
    def center(self) -> Point:
        (x0, y0), (x1, y1) = self.extent
        return (x0 + x1) / 2, (y0 + y1) / 2

    def clamp_scale(self, k: float) -> float:
        lo, hi = self.scale_extent
        return max(lo, min(hi, k))

    def zoom_to(self, k: float, anchor: Point | None = None) -> ZoomTransform:
        """Set the scale to *k* (clamped), keeping *anchor* fixed on screen."""
        anchor = anchor or self.center
        world = self.transform.invert(anchor)
        k = self.clamp_scale(k)
        self.transform = ZoomTransform(k, anchor[0] - world[0] * k, anchor[1] - world[1] * k)
        return self.transform

    def zoom_by(self, factor: float, anchor: Point | None = None) -> ZoomTransform:
        return self.zoom_to(self.transform.k * factor, anchor)

    def pan_by(self, dx: float, dy: float) -> ZoomTransform:
        t = self.transform
        self.transform = ZoomTransform(t.k, t.x + dx, t.y + dy)
        return self.transform


# ── Sliders ───────────────────────────────────────────────────────────────


@dataclass
class Slider:
    """A range control reporting a numeric value on change."""

    name: str
    label: str
    minimum: float
    maximum: float
    default: float
    step: float
    on_change: Callable[[str, float], None] | None = None
    value: float | None = None

    def __post_init__(self):
        if self.value is None:
            self.value = self.default

    def set_value(self, value: float) -> float:
        """Clamp *value* into range, snap it to ``step`` and report it."""
        value = max(self.minimum, min(self.maximum, float(value)))
        steps = round((value - self.minimum) / self.step)
        value = min(self.maximum, round(self.minimum + steps * self.step, 10))
        self.value = value
        if self.on_change is not None:
            self.on_change(self.name, value)
        return value


def default_sliders(
    params: ForceParameters,
    on_change: Callable[[str, float], None] | None = None,
) -> dict[str, Slider]:
    """The three physics controls, initialised from *params*."""
    sliders = [
        Slider("charge_strength", "Charge Strength", -100, 100, params.charge_strength, 1),
        Slider("collide_factor", "Force Collide", 1, 5, params.collide_factor, 0.1),
        Slider("link_strength", "Link Strength", 0.01, 1, params.link_strength, 0.01),
    ]
    for s in sliders:
        s.on_change = on_change
    return {s.name: s for s in sliders}


# ── Highlight & tooltips ──────────────────────────────────────────────────


def inactive_nodes(graph: CoauthorGraph, hovered: str | None) -> frozenset[str]:
    """Names dimmed while *hovered* is under the pointer.

    Everything outside the hovered author's first-observed record group.
    Empty when nothing is hovered.
    """
    if hovered is None or hovered not in graph:
        return frozenset()
    group = graph.node(hovered).group
    return frozenset(n.name for n in graph.nodes if n.group != group)


def edge_tooltip_lines(edge: Edge) -> tuple[str, ...]:
    return (f"Shared publications: {', '.join(edge.publishers)}",)


def node_tooltip_lines(graph: CoauthorGraph, name: str) -> tuple[str, ...]:
    node = graph.node(name)
    return (f"Author: {node.name}", f"Authors with affiliations: {node.affiliation}")


def _offset(pointer: Point) -> Point:
    return pointer[0] + TOOLTIP_OFFSET[0], pointer[1] + TOOLTIP_OFFSET[1]


class InteractionController:
    """Routes pointer, zoom and slider events.

    Args:
        engine: Layout engine whose coefficients the sliders drive.
        surface: Render surface receiving tooltip/highlight/transform updates.
        config: Canvas size and initial transform offset.
    """

    def __init__(
        self,
        engine: LayoutEngine,
        surface: RenderSurface,
        config: NetworkConfig | None = None,
    ):
        self.engine = engine
        self.graph = engine.graph
        self.surface = surface
        self.config = config or NetworkConfig()
        self.viewport = Viewport(extent=((0, 0), (self.config.width, self.config.height)))
        self.sliders = default_sliders(engine.params, on_change=self._on_slider)
        self.hovered: str | None = None
        self._tooltip: Tooltip | None = None
        self._following = False
        surface.set_transform(f"translate(0,{self.config.offset_y})")

    # ── Pan/zoom ──────────────────────────────────────────────────────────

    def zoom(self, factor: float, anchor: Point | None = None) -> ZoomTransform:
        t = self.viewport.zoom_by(factor, anchor)
        self.surface.set_transform(t.to_svg())
        return t

    def pan(self, dx: float, dy: float) -> ZoomTransform:
        t = self.viewport.pan_by(dx, dy)
        self.surface.set_transform(t.to_svg())
        return t

    # ── Edges ─────────────────────────────────────────────────────────────

    def edge_enter(self, edge: Edge, pointer: Point):
        self._show(Tooltip(edge_tooltip_lines(edge), _offset(pointer)))
        self._following = True

    def pointer_move(self, pointer: Point):
        """Keep an edge tooltip next to the pointer; click tooltips stay put."""
        if self._following and self._tooltip is not None:
            self._show(Tooltip(self._tooltip.lines, _offset(pointer)))

    def edge_leave(self):
        self._tooltip = None
        self._following = False
        self.surface.hide_tooltip()

    # ── Nodes ─────────────────────────────────────────────────────────────

    def node_enter(self, name: str):
        self.hovered = name
        self.surface.set_inactive(inactive_nodes(self.graph, name))

    def node_leave(self):
        self.hovered = None
        self.surface.set_inactive(frozenset())

    def node_click(self, name: str, pointer: Point):
        self._show(Tooltip(node_tooltip_lines(self.graph, name), _offset(pointer)))
        self._following = False

    # ── Controls ──────────────────────────────────────────────────────────

    def slide(self, name: str, value: float) -> float:
        """Move slider *name* to *value*. Raises KeyError for unknown sliders."""
        return self.sliders[name].set_value(value)

    def _on_slider(self, name: str, value: float):
        logger.debug("Slider %s -> %s", name, value)
        self.engine.reconfigure(name, value)

    def _show(self, tooltip: Tooltip):
        self._tooltip = tooltip
        self.surface.show_tooltip(tooltip)
