"""Tests for coauthorship.graph: node deduplication and edge aggregation.

Contract:
- One node per author name; attributes come from the first record the
  author appears in and are never overwritten.
- One edge per unordered pair; weight equals the number of co-occurrences
  and publishers are appended in record order.
- filtered() drops authors without co-authors and keeps every edge.
"""

import pytest

from coauthorship.graph import CoauthorGraph, Edge, Node, build_graph, edge_key
from coauthorship.records import UNKNOWN_AFFILIATION, parse_record


def _graph(rows):
    return build_graph(parse_record(r) for r in rows)


class TestScenarios:
    """Worked examples."""

    def test_two_papers_chain(self, two_paper_rows):
        g = _graph(two_paper_rows)
        assert [n.name for n in g.nodes] == ["A", "B", "C"]
        assert len(g.edges) == 2
        ab, bc = g.edge("A", "B"), g.edge("B", "C")
        assert (ab.weight, ab.publishers) == (1, ("P1",))
        assert (bc.weight, bc.publishers) == (1, ("P2",))

    def test_repeated_pair_aggregates(self):
        g = _graph([
            {"Authors": "A, B", "Publisher": "P1"},
            {"Authors": "A, B", "Publisher": "P2"},
        ])
        assert len(g.edges) == 1
        assert g.edges[0].weight == 2
        assert g.edges[0].publishers == ("P1", "P2")

    def test_solo_author_created_then_filtered(self):
        g = _graph([{"Authors": "SoloAuthor", "Publisher": "P"}])
        assert "SoloAuthor" in g
        assert g.edges == ()
        assert g.filtered().nodes == ()


class TestNodes:
    """First-occurrence attributes."""

    def test_first_record_wins(self, mixed_rows):
        g = _graph(mixed_rows)
        lee = g.node("Lee")
        assert lee.group == 0
        assert lee.country == "USA"

    def test_group_is_record_index(self, mixed_rows):
        g = _graph(mixed_rows)
        assert g.node("Solo").group == 2
        assert g.node("Park").group == 3
        assert g.node("Cho").group == 4

    def test_affiliation_resolved_from_first_record(self):
        g = _graph([
            {"Authors": "Smith J, Lee K", "Authors with affiliations": "Smith, J, MIT"},
            {"Authors": "Smith J, Lee K", "Authors with affiliations": "Smith, J, ETH; Lee, K, UCL"},
        ])
        assert g.node("Smith J").affiliation == "J, MIT"
        assert g.node("Lee K").affiliation == UNKNOWN_AFFILIATION

    def test_absent_country_is_none(self, mixed_rows):
        g = _graph(mixed_rows)
        assert g.node("Cho").country == "Korea"
        g2 = _graph([{"Authors": "X, Y"}])
        assert g2.node("X").country is None

    def test_names_unique(self, mixed_rows):
        names = [n.name for n in _graph(mixed_rows).nodes]
        assert len(names) == len(set(names))

    def test_css_class_from_group(self):
        assert Node(name="A", group=7).css_class == "gr_7"


class TestEdges:
    """Unordered pair aggregation."""

    def test_pair_order_ignored(self, mixed_rows):
        g = _graph(mixed_rows)
        e = g.edge("Smith", "Lee")
        assert e is g.edge("Lee", "Smith")
        assert e.weight == 2
        assert e.publishers == ("Elsevier", "Springer")

    def test_orientation_from_first_cooccurrence(self, mixed_rows):
        e = _graph(mixed_rows).edge("Lee", "Smith")
        assert (e.source, e.target) == ("Smith", "Lee")

    def test_all_pairs_of_record(self):
        g = _graph([{"Authors": "A, B, C, D", "Publisher": "P"}])
        assert len(g.edges) == 6

    def test_weight_equals_publisher_count(self, mixed_rows):
        for e in _graph(mixed_rows).edges:
            assert e.weight == len(e.publishers)

    def test_duplicate_author_makes_self_pair(self):
        g = _graph([{"Authors": "A, A", "Publisher": "P"}])
        assert len(g.nodes) == 1
        assert g.edge("A", "A").weight == 1

    def test_missing_edge_is_none(self, two_paper_rows):
        assert _graph(two_paper_rows).edge("A", "C") is None

    def test_empty_publisher_still_counted(self):
        g = _graph([{"Authors": "A, B"}, {"Authors": "B, A"}])
        assert g.edge("A", "B").publishers == ("", "")

    def test_edge_key_canonical(self):
        assert edge_key("b", "a") == edge_key("a", "b") == ("a", "b")
        assert Edge("Z", "M").key == ("M", "Z")


class TestFiltered:
    """Isolated authors removed, edges kept."""

    def test_isolated_removed(self, mixed_rows):
        shown = _graph(mixed_rows).filtered()
        assert "Solo" not in shown
        assert {n.name for n in shown.nodes} == {"Smith", "Lee", "Kim", "Park", "Cho"}

    def test_every_shown_node_has_an_edge(self, mixed_rows):
        shown = _graph(mixed_rows).filtered()
        touched = shown.connected_names()
        assert all(n.name in touched for n in shown.nodes)

    def test_edges_unchanged(self, mixed_rows):
        g = _graph(mixed_rows)
        assert g.filtered().edges == g.edges

    def test_node_order_preserved(self, mixed_rows):
        shown = _graph(mixed_rows).filtered()
        assert [n.name for n in shown.nodes] == ["Smith", "Lee", "Kim", "Park", "Cho"]


class TestIdempotence:
    """Rebuilding from the same input gives the same graph."""

    def test_rebuild_equal(self, mixed_rows):
        assert _graph(mixed_rows) == _graph(mixed_rows)

    def test_empty_input(self):
        g = build_graph([])
        assert g == CoauthorGraph()
        assert g.filtered().nodes == ()

    def test_unknown_node_raises(self, two_paper_rows):
        with pytest.raises(KeyError):
            _graph(two_paper_rows).node("Nobody")
