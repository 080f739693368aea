"""Visual encoding of the filtered co-authorship graph.

Node radius follows a square-root scale of degree (so circle area tracks
the number of co-authors), edge stroke width a linear scale of weight, and
node fill the country colour from the ranking.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from coauthorship.config import NetworkConfig
from coauthorship.countries import CountryRanking
from coauthorship.graph import CoauthorGraph, EdgeKey
from coauthorship.scales import LinearScale, SqrtScale, extent


def node_degrees(graph: CoauthorGraph) -> dict[str, int]:
    """Number of edges touching each node.

    Every edge adds one to each endpoint, so a self-pair adds two.
    """
    degree = {n.name: 0 for n in graph.nodes}
    for e in graph.edges:
        degree[e.source] = degree.get(e.source, 0) + 1
        degree[e.target] = degree.get(e.target, 0) + 1
    return degree


@dataclass(frozen=True)
class VisualEncoding:
    """Per-node and per-edge visual attributes."""

    degree: dict[str, int] = field(default_factory=dict)
    radius: dict[str, float] = field(default_factory=dict)
    stroke_width: dict[EdgeKey, float] = field(default_factory=dict)
    fill: dict[str, str] = field(default_factory=dict)

    def radius_of(self, name: str) -> float:
        return self.radius[name]

    def collide_radius(self, name: str, factor: float) -> float:
        return self.radius[name] * factor


def encode(
    graph: CoauthorGraph,
    ranking: CountryRanking,
    config: NetworkConfig | None = None,
) -> VisualEncoding:
    """Compute radius, stroke width and fill for a filtered graph."""
    config = config or NetworkConfig()
    degree = node_degrees(graph)

    radius_scale = SqrtScale(extent(degree[n.name] for n in graph.nodes), config.radius_range)
    stroke_scale = LinearScale(extent(e.weight for e in graph.edges), config.stroke_range)

    return VisualEncoding(
        degree=degree,
        radius={n.name: radius_scale(degree[n.name]) for n in graph.nodes},
        stroke_width={e.key: stroke_scale(e.weight) for e in graph.edges},
        fill={n.name: ranking.color_for(n.country, config.fallback_color) for n in graph.nodes},
    )
