"""Render boundary between the layout and a drawing surface.

``RenderSurface`` is the protocol a drawing backend implements: lines for
edges, circle-and-label groups for nodes, an outer group transform for
pan/zoom, a render-state set of inactive nodes, a tooltip and a legend.

``Scene`` is an in-memory surface that keeps the latest state of
everything drawn; the SVG writer and the tests read from it.
``draw_frame`` projects one ``LayoutFrame`` onto any surface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from coauthorship.config import NetworkConfig
from coauthorship.countries import CountryRanking
from coauthorship.encoding import VisualEncoding
from coauthorship.graph import CoauthorGraph, EdgeKey, edge_key
from coauthorship.layout import LayoutFrame, Point


@dataclass(frozen=True)
class LineGlyph:
    key: EdgeKey
    start: Point
    end: Point
    width: float
    color: str
    opacity: float


@dataclass(frozen=True)
class NodeGlyph:
    name: str
    center: Point
    radius: float
    fill: str
    label: str
    css_class: str


@dataclass(frozen=True)
class Tooltip:
    lines: tuple[str, ...]
    position: Point


class RenderSurface(Protocol):
    def draw_line(self, glyph: LineGlyph) -> None: ...

    def draw_node(self, glyph: NodeGlyph) -> None: ...

    def set_transform(self, transform: str) -> None: ...

    def set_inactive(self, names: frozenset[str]) -> None: ...

    def show_tooltip(self, tooltip: Tooltip) -> None: ...

    def hide_tooltip(self) -> None: ...

    def set_legend(self, entries: list[tuple[str, str]]) -> None: ...


@dataclass
class Scene:
    """In-memory surface holding the latest drawn state."""

    lines: dict[EdgeKey, LineGlyph] = field(default_factory=dict)
    nodes: dict[str, NodeGlyph] = field(default_factory=dict)
    transform: str = ""
    inactive: frozenset[str] = frozenset()
    tooltip: Tooltip | None = None
    legend: list[tuple[str, str]] = field(default_factory=list)

    def draw_line(self, glyph: LineGlyph) -> None:
        self.lines[glyph.key] = glyph

    def draw_node(self, glyph: NodeGlyph) -> None:
        self.nodes[glyph.name] = glyph

    def set_transform(self, transform: str) -> None:
        self.transform = transform

    def set_inactive(self, names: frozenset[str]) -> None:
        self.inactive = frozenset(names)

    def show_tooltip(self, tooltip: Tooltip) -> None:
        self.tooltip = tooltip

    def hide_tooltip(self) -> None:
        self.tooltip = None

    def set_legend(self, entries: list[tuple[str, str]]) -> None:
        self.legend = list(entries)


def draw_frame(
    surface: RenderSurface,
    frame: LayoutFrame,
    graph: CoauthorGraph,
    encoding: VisualEncoding,
    config: NetworkConfig | None = None,
):
    """Redraw every edge and node of *graph* at the positions in *frame*."""
    config = config or NetworkConfig()
    for seg in frame.edges:
        key = edge_key(seg.source, seg.target)
        surface.draw_line(LineGlyph(
            key=key,
            start=seg.start,
            end=seg.end,
            width=encoding.stroke_width[key],
            color=config.link_color,
            opacity=config.link_opacity,
        ))
    for node in graph.nodes:
        surface.draw_node(NodeGlyph(
            name=node.name,
            center=frame.nodes[node.name],
            radius=encoding.radius_of(node.name),
            fill=encoding.fill[node.name],
            label=node.name,
            css_class=node.css_class,
        ))


def draw_legend(surface: RenderSurface, ranking: CountryRanking):
    """Publish the ranked countries as ``(label, colour)`` legend entries."""
    surface.set_legend([(e.label, e.color) for e in ranking.entries])
