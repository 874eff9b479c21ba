from __future__ import annotations

from bookgraph.graph.adjacency import BookGraph, RelationshipType


def _edge_to(graph: BookGraph, source: str, target: str):
    matches = [e for e in graph.get_neighbors(source) if e.target_id == target]
    assert len(matches) <= 1
    return matches[0] if matches else None


class TestNodes:
    def test_add_node_is_idempotent(self):
        g = BookGraph()
        g.add_node("a")
        g.add_edge("a", "b", 3, [RelationshipType.same_genre])
        g.add_node("a")
        assert g.get_node_count() == 2
        assert len(g.get_neighbors("a")) == 1

    def test_unknown_node_has_no_neighbors(self):
        g = BookGraph()
        assert g.get_neighbors("missing") == []
        assert g.has_node("missing") is False
        assert g.get_edge("missing", "other") is None

    def test_remove_unknown_node_is_noop(self):
        g = BookGraph()
        g.add_edge("a", "b", 1)
        g.remove_node("zzz")
        assert g.get_node_count() == 2
        assert g.get_edge_count() == 1

    def test_get_all_nodes(self):
        g = BookGraph()
        g.add_node("a")
        g.add_edge("b", "c", 2)
        assert sorted(g.get_all_nodes()) == ["a", "b", "c"]


class TestEdges:
    def test_edge_is_symmetric(self):
        g = BookGraph()
        g.add_edge("a", "b", 4, [RelationshipType.same_author, RelationshipType.same_genre])

        forward = _edge_to(g, "a", "b")
        backward = _edge_to(g, "b", "a")
        assert forward.weight == backward.weight == 4
        assert set(forward.relationship_types) == {
            RelationshipType.same_author,
            RelationshipType.same_genre,
        }
        assert set(backward.relationship_types) == set(forward.relationship_types)

    def test_add_edge_creates_missing_endpoints(self):
        g = BookGraph()
        g.add_edge("x", "y", 1)
        assert g.has_node("x")
        assert g.has_node("y")

    def test_repeated_edge_merges_weight_and_types(self):
        g = BookGraph()
        g.add_edge("a", "b", 3, [RelationshipType.same_genre])
        g.add_edge("a", "b", 5, [RelationshipType.same_author])

        assert g.get_edge_count() == 1
        for source, target in (("a", "b"), ("b", "a")):
            edge = _edge_to(g, source, target)
            assert edge.weight == 8
            assert set(edge.relationship_types) == {
                RelationshipType.same_genre,
                RelationshipType.same_author,
            }

    def test_merge_collapses_duplicate_types(self):
        g = BookGraph()
        g.add_edge("a", "b", 1, [RelationshipType.similar_keywords])
        g.add_edge("b", "a", 1, [RelationshipType.similar_keywords])
        edge = _edge_to(g, "a", "b")
        assert edge.weight == 2
        assert edge.relationship_types == (RelationshipType.similar_keywords,)

    def test_negative_weight_is_accepted(self):
        g = BookGraph()
        g.add_edge("a", "b", 3)
        g.add_edge("a", "b", -1)
        assert _edge_to(g, "a", "b").weight == 2

    def test_self_edge_is_ignored(self):
        g = BookGraph()
        g.add_edge("a", "a", 5, [RelationshipType.same_genre])
        assert g.get_neighbors("a") == []
        assert g.get_edge_count() == 0

    def test_string_types_are_coerced(self):
        g = BookGraph()
        g.add_edge("a", "b", 1, ["same_genre"])
        assert _edge_to(g, "a", "b").relationship_types == (RelationshipType.same_genre,)

    def test_remove_edge(self):
        g = BookGraph()
        g.add_edge("a", "b", 1)
        g.add_edge("a", "c", 1)
        assert g.remove_edge("b", "a") is True
        assert _edge_to(g, "a", "b") is None
        assert _edge_to(g, "b", "a") is None
        assert g.get_edge_count() == 1
        assert g.remove_edge("a", "b") is False

    def test_neighbors_are_a_copy(self):
        g = BookGraph()
        g.add_edge("a", "b", 1)
        g.get_neighbors("a").clear()
        assert len(g.get_neighbors("a")) == 1


def test_remove_node_cascades_edges():
    g = BookGraph()
    g.add_edge("a", "b", 1)
    g.add_edge("a", "c", 2)
    g.add_edge("b", "c", 3)
    g.add_edge("c", "d", 4)
    before = g.get_edge_count()
    degree = len(g.get_neighbors("c"))

    g.remove_node("c")

    assert not g.has_node("c")
    assert g.get_edge_count() == before - degree
    for node in g.get_all_nodes():
        assert all(e.target_id != "c" for e in g.get_neighbors(node))


def test_edge_count_counts_undirected_edges_once():
    g = BookGraph()
    g.add_edge("a", "b", 1)
    g.add_edge("b", "c", 1)
    g.add_edge("c", "a", 1)
    assert g.get_edge_count() == 3


def test_describe_lists_every_node():
    g = BookGraph()
    g.add_edge("a", "b", 2.5)
    text = g.describe()
    assert "a -> [b(w:2.5)]" in text
    assert "Nodes: 2, Edges: 1" in text
