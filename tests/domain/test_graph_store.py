import math

import pytest

from geo_route.app.protocols import GraphView
from geo_route.domain.entities.geography import Arc, Direction
from geo_route.domain.graph_store import GraphStore
from geo_route.errors import InvalidReference

# ---------- Fixtures


@pytest.fixture
def triangle() -> GraphStore:
    g = GraphStore()
    g.upsert_vertex("A", 0.0, 0.0)
    g.upsert_vertex("B", 3.0, 0.0)
    g.upsert_vertex("C", 3.0, 4.0)
    g.add_arc("A", "B", True)
    g.add_arc("B", "C", True)
    g.add_arc("A", "C", False)
    return g


def _arc_set(g: GraphStore):
    return {(a.source, a.target, a.direction) for a in g.arcs()}


# ---------- Vertices


def test_upsert_creates_then_repositions():
    g = GraphStore()
    v = g.upsert_vertex(1, 0, 0)
    assert len(g) == 1 and 1 in g
    g.upsert_vertex(1, 5, 6)
    assert len(g) == 1
    assert (g.vertex(1).x, g.vertex(1).y) == (5.0, 6.0)
    assert g.vertex(1) is v


def test_upsert_same_args_is_idempotent(triangle: GraphStore):
    before = (len(triangle), _arc_set(triangle))
    triangle.upsert_vertex("B", 3.0, 0.0)
    triangle.upsert_vertex("B", 3.0, 0.0)
    assert (len(triangle), _arc_set(triangle)) == before


def test_remove_vertex_purges_incoming_and_outgoing(triangle: GraphStore):
    triangle.remove_vertex("B")
    assert "B" not in triangle
    assert all("B" not in (a.source, a.target) for a in triangle.arcs())
    assert _arc_set(triangle) == {("A", "C", Direction.DIRECTED)}


def test_remove_missing_vertex_is_noop(triangle: GraphStore):
    before = _arc_set(triangle)
    triangle.remove_vertex("nope")
    assert len(triangle) == 3 and _arc_set(triangle) == before


# ---------- Arcs


def test_bidirectional_arc_is_two_arcs(triangle: GraphStore):
    assert triangle.arc("A", "B") == Arc("A", "B", Direction.BIDIRECTIONAL)
    assert triangle.arc("B", "A") == Arc("B", "A", Direction.BIDIRECTIONAL)
    assert triangle.arc("C", "A") is None
    assert triangle.arc_count == 5


def test_add_arc_overwrites_instead_of_duplicating(triangle: GraphStore):
    triangle.add_arc("A", "C", False)
    triangle.add_arc("A", "C", Direction.DIRECTED)
    assert sorted(triangle.neighbors("A")) == ["B", "C"]
    assert triangle.arc_count == 5


def test_add_arc_missing_endpoint_raises_and_does_not_mutate(triangle: GraphStore):
    before = _arc_set(triangle)
    with pytest.raises(InvalidReference) as ei:
        triangle.add_arc("A", "Z", True)
    assert ei.value.missing == ("Z",)
    assert ei.value.from_id == "A" and ei.value.to_id == "Z"
    assert "Z" in str(ei.value)
    assert _arc_set(triangle) == before


def test_remove_bidirectional_arc_removes_both(triangle: GraphStore):
    triangle.remove_arc("B", "A")
    assert triangle.arc("A", "B") is None and triangle.arc("B", "A") is None


def _pair_b_before_a() -> GraphStore:
    g = GraphStore()
    g.upsert_vertex("B", 1.0, 0.0)
    g.upsert_vertex("A", 0.0, 0.0)
    g.add_arc("A", "B", True)
    g.add_arc("B", "A", False)
    return g


def test_directed_overwrite_breaks_up_bidirectional_pair():
    g = _pair_b_before_a()
    assert g.arc("B", "A") == Arc("B", "A", Direction.DIRECTED)
    assert g.arc("A", "B") == Arc("A", "B", Direction.DIRECTED)
    for a in g.arcs():
        if a.bidirectional:
            assert g.arc(a.target, a.source).bidirectional


def test_remove_after_directed_overwrite_keeps_reverse():
    g = _pair_b_before_a()
    g.remove_arc("A", "B")
    assert g.arc("A", "B") is None
    assert g.arc("B", "A") == Arc("B", "A", Direction.DIRECTED)


def test_round_trip_after_directed_overwrite():
    g = _pair_b_before_a()
    data = g.export_to_json()
    g2 = GraphStore()
    g2.load_from_json(data["nodes"], data["edges"])
    assert _arc_set(g2) == _arc_set(g)


def test_direction_flag_must_be_bool(triangle: GraphStore):
    with pytest.raises(TypeError):
        triangle.add_arc("C", "A", "false")
    with pytest.raises(TypeError):
        Direction.of(1)
    assert triangle.arc("C", "A") is None


def test_remove_directed_arc_leaves_reverse_alone():
    g = GraphStore()
    g.upsert_vertex(0, 0, 0)
    g.upsert_vertex(1, 1, 0)
    g.add_arc(0, 1)
    g.add_arc(1, 0)
    g.remove_arc(0, 1)
    assert g.arc(1, 0) == Arc(1, 0, Direction.DIRECTED)
    g.remove_arc(5, 6)  # unknown: nothing happens


# ---------- Weights


def test_edge_weight_three_way(triangle: GraphStore):
    assert triangle.edge_weight("A", "missing") is None
    assert triangle.edge_weight("missing", "A") is None
    assert triangle.edge_weight("C", "A") == math.inf
    assert triangle.edge_weight("A", "C") == pytest.approx(5.0)


def test_bidirectional_weight_is_symmetric(triangle: GraphStore):
    for a in triangle.arcs():
        if a.bidirectional:
            assert triangle.edge_weight(a.source, a.target) == triangle.edge_weight(
                a.target, a.source
            )


def test_weight_follows_vertex_moves(triangle: GraphStore):
    triangle.upsert_vertex("C", 3.0, 10.0)
    assert triangle.edge_weight("B", "C") == pytest.approx(10.0)


def test_coincident_vertices_have_zero_weight():
    g = GraphStore()
    g.upsert_vertex("p", 2.0, 2.0)
    g.upsert_vertex("q", 2.0, 2.0)
    g.add_arc("p", "q")
    assert g.edge_weight("p", "q") == 0.0


# ---------- Bulk exchange


def test_load_from_json_resets_and_skips_bad_edges(triangle: GraphStore, caplog):
    nodes = [{"id": 0, "x": 0, "y": 0}, {"id": 1, "x": 1, "y": 1}]
    edges = [
        {"from": 0, "to": 1, "bidirectional": False},
        {"from": 1, "to": 9, "bidirectional": True},
        {"from": 1, "to": 0},  # defaults to bidirectional
    ]
    with caplog.at_level("WARNING", logger="geo_route.domain.graph_store"):
        skipped = triangle.load_from_json(nodes, edges)
    assert "A" not in triangle and len(triangle) == 2
    assert [e.missing for e in skipped] == [(9,)]
    assert "skipping edge" in caplog.text
    # the later bidirectional edge overwrote 0->1
    assert triangle.arc(0, 1).bidirectional and triangle.arc(1, 0).bidirectional


def test_export_then_load_round_trip(triangle: GraphStore):
    data = triangle.export_to_json()
    bidi = [e for e in data["edges"] if e["bidirectional"]]
    assert len(bidi) == 2  # each pair emitted once
    g2 = GraphStore()
    assert g2.load_from_json(data["nodes"], data["edges"]) == []
    assert {(v.id, v.x, v.y) for v in g2.vertices()} == {
        (v.id, v.x, v.y) for v in triangle.vertices()
    }
    assert _arc_set(g2) == _arc_set(triangle)


# ---------- Editor helpers


def test_nearest_vertex_with_tolerance(triangle: GraphStore):
    assert triangle.nearest_vertex(2.9, 3.8).id == "C"
    assert triangle.nearest_vertex(10, 10, tolerance=1.0) is None
    assert GraphStore().nearest_vertex(0, 0) is None


def test_next_vertex_id_uses_numeric_parts():
    g = GraphStore()
    assert g.next_vertex_id() == 0
    g.upsert_vertex("v3", 0, 0)
    g.upsert_vertex(11, 0, 0)
    g.upsert_vertex("label", 0, 0)
    assert g.next_vertex_id() == 12


def test_bounds_and_protocol(triangle: GraphStore):
    assert triangle.bounds() == (0.0, 0.0, 3.0, 4.0)
    assert GraphStore().bounds() is None
    assert isinstance(triangle, GraphView)
