"""End-to-end assembly: records to an interactive network view.

``build_network`` runs parsing, graph construction, country ranking and
visual encoding. ``NetworkView`` wires the result to a layout engine, an
interaction controller and a render surface, redrawing on every tick.

Usage::

    from coauthorship.network import build_network, NetworkView
    from coauthorship.render import Scene

    network = build_network(rows)
    view = NetworkView(network, Scene())
    view.engine.run(max_ticks=300)
    view.controller.slide("link_strength", 1.0)
    view.engine.run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping

from coauthorship.config import NetworkConfig
from coauthorship.countries import CountryRanking, rank_countries, tally_countries
from coauthorship.encoding import VisualEncoding, encode
from coauthorship.graph import CoauthorGraph, build_graph
from coauthorship.interaction import InteractionController
from coauthorship.layout import LayoutEngine, LayoutFrame
from coauthorship.records import Record, parse_record
from coauthorship.render import RenderSurface, draw_frame, draw_legend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Network:
    """Everything derived from one record sequence before layout."""

    records: tuple[Record, ...]
    graph: CoauthorGraph
    shown: CoauthorGraph
    country_counts: dict[str, int]
    ranking: CountryRanking
    encoding: VisualEncoding
    config: NetworkConfig = field(default_factory=NetworkConfig)

    @property
    def isolated(self) -> int:
        """Authors dropped from the view for having no co-authors."""
        return len(self.graph.nodes) - len(self.shown.nodes)


def build_network(
    rows: Iterable[Mapping | Record],
    config: NetworkConfig | None = None,
) -> Network:
    """Parse *rows* (raw mappings or ``Record``s) and derive the network."""
    config = config or NetworkConfig()
    records = tuple(r if isinstance(r, Record) else parse_record(r) for r in rows)
    graph = build_graph(records)
    shown = graph.filtered()
    counts = tally_countries(records)
    ranking = rank_countries(counts, top_n=config.top_countries, palette=config.palette)
    encoding = encode(shown, ranking, config)
    logger.info(
        "Network: %d records, %d authors shown (%d isolated), %d co-author pairs, %d countries",
        len(records), len(shown.nodes), len(graph.nodes) - len(shown.nodes),
        len(shown.edges), len(counts),
    )
    return Network(
        records=records,
        graph=graph,
        shown=shown,
        country_counts=counts,
        ranking=ranking,
        encoding=encoding,
        config=config,
    )


class NetworkView:
    """A network bound to a surface: layout ticks redraw, events route to the controller."""

    def __init__(self, network: Network, surface: RenderSurface):
        self.network = network
        self.surface = surface
        self.engine = LayoutEngine(
            network.shown,
            network.encoding,
            params=replace(network.config.forces),
            on_tick=self._redraw,
            seed=network.config.seed,
        )
        self.controller = InteractionController(self.engine, surface, network.config)
        draw_legend(surface, network.ranking)
        self._redraw(self.engine.frame())

    def _redraw(self, frame: LayoutFrame):
        draw_frame(self.surface, frame, self.network.shown, self.network.encoding, self.network.config)
