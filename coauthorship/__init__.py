"""Co-authorship network toolkit.

Builds a deduplicated author graph from bibliographic records, ranks and
colours countries, encodes degree and collaboration weight visually, and
lays the network out with a live-tunable force simulation.

Example:
    >>> from coauthorship import build_network, NetworkView, Scene
    >>> network = build_network([
    ...     {"Authors": "A, B", "Publisher": "P1", "Country": "US"},
    ...     {"Authors": "B, C", "Publisher": "P2", "Country": "US"},
    ... ])
    >>> view = NetworkView(network, Scene())
    >>> view.engine.run(max_ticks=50)
    50
"""

from coauthorship.config import ForceParameters, NetworkConfig, load_config
from coauthorship.graph import CoauthorGraph, Edge, Node, build_graph
from coauthorship.records import Record, parse_record
from coauthorship.countries import CountryRanking, rank_countries, tally_countries
from coauthorship.encoding import VisualEncoding, encode
from coauthorship.layout import LayoutEngine, LayoutFrame, LayoutState
from coauthorship.interaction import InteractionController
from coauthorship.render import Scene
from coauthorship.network import Network, NetworkView, build_network

__version__ = "0.1.0"

__all__ = [
    # Config
    "ForceParameters",
    "NetworkConfig",
    "load_config",
    # Records & graph
    "Record",
    "parse_record",
    "Node",
    "Edge",
    "CoauthorGraph",
    "build_graph",
    # Countries & encoding
    "CountryRanking",
    "tally_countries",
    "rank_countries",
    "VisualEncoding",
    "encode",
    # Layout & interaction
    "LayoutEngine",
    "LayoutFrame",
    "LayoutState",
    "InteractionController",
    "Scene",
    # Assembly
    "Network",
    "NetworkView",
    "build_network",
]
