# geo_route/domain/graph_store.py
import logging
import math
import re
from collections.abc import Iterable, Iterator, Mapping

from geo_route.domain.entities.geography import Arc, Direction, Vertex, VertexId
from geo_route.errors import InvalidReference

log = logging.getLogger(__name__)

_DIGITS = re.compile(r"\D+")


class GraphStore:
    """
    Vertices plus a directed adjacency relation.

    No weights are stored: the cost of an arc is the Euclidean distance between
    its endpoints' *current* coordinates, so repositioning a vertex can never
    desynchronise a weight from geometry.
    """

    def __init__(self):
        self._vertices: dict[VertexId, Vertex] = {}
        self._adj: dict[VertexId, dict[VertexId, Direction]] = {}

    # ---------------- vertices ----------------

    def upsert_vertex(self, vid: VertexId, x: float, y: float) -> Vertex:
        v = self._vertices.get(vid)
        if v is None:
            v = self._vertices[vid] = Vertex(vid, float(x), float(y))
            self._adj[vid] = {}
        else:
            v.x, v.y = float(x), float(y)
        return v

    def remove_vertex(self, vid: VertexId) -> None:
        if vid not in self._vertices:
            return
        del self._vertices[vid]
        del self._adj[vid]
        for out in self._adj.values():
            out.pop(vid, None)

    def vertex(self, vid: VertexId) -> Vertex | None:
        return self._vertices.get(vid)

    def vertices(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def __contains__(self, vid) -> bool:
        return vid in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    # ---------------- arcs ----------------

    def add_arc(
        self, from_id: VertexId, to_id: VertexId, bidirectional: bool | Direction = False
    ) -> None:
        missing = tuple(v for v in (from_id, to_id) if v not in self._vertices)
        if missing:
            raise InvalidReference(from_id, to_id, missing)
        direction = Direction.of(bidirectional)
        self._adj[from_id][to_id] = direction
        reverse = self._adj[to_id]
        if direction.bidirectional:
            reverse[from_id] = direction
        elif reverse.get(from_id) is Direction.BIDIRECTIONAL:
            # the pair is broken up; the old partner keeps only its own direction
            reverse[from_id] = Direction.DIRECTED

    def remove_arc(self, from_id: VertexId, to_id: VertexId) -> None:
        out = self._adj.get(from_id)
        if out is None:
            return
        direction = out.pop(to_id, None)
        if direction is not None and direction.bidirectional and to_id in self._adj:
            self._adj[to_id].pop(from_id, None)

    def arc(self, from_id: VertexId, to_id: VertexId) -> Arc | None:
        direction = self._adj.get(from_id, {}).get(to_id)
        return None if direction is None else Arc(from_id, to_id, direction)

    def neighbors(self, vid: VertexId) -> Iterator[VertexId]:
        """Targets of the outgoing arcs of `vid`; the source of truth for arc existence."""
        return iter(self._adj.get(vid, ()))

    def arcs(self) -> Iterator[Arc]:
        for u, out in self._adj.items():
            for v, direction in out.items():
                yield Arc(u, v, direction)

    @property
    def arc_count(self) -> int:
        return sum(len(out) for out in self._adj.values())

    def edge_weight(self, from_id: VertexId, to_id: VertexId) -> float | None:
        """None: a vertex is missing. inf: both exist, no arc. Otherwise the distance."""
        a, b = self._vertices.get(from_id), self._vertices.get(to_id)
        if a is None or b is None:
            return None
        if to_id not in self._adj[from_id]:
            return math.inf
        return a.distance_to(b)

    # ---------------- bulk exchange ----------------

    def clear(self) -> None:
        self._vertices, self._adj = {}, {}

    def load_from_json(
        self, nodes: Iterable[Mapping], edges: Iterable[Mapping]
    ) -> list[InvalidReference]:
        """
        Replace the contents with `nodes`/`edges`. Bad edges are skipped and returned.

        Records are expected to be validated already (see `io.graph_json`):
        `bidirectional` must be a real bool when present.
        """
        self.clear()
        for n in nodes:
            self.upsert_vertex(n["id"], n["x"], n["y"])
        skipped: list[InvalidReference] = []
        for e in edges:
            try:
                self.add_arc(e["from"], e["to"], e.get("bidirectional", True))
            except InvalidReference as exc:
                log.warning("skipping edge: %s", exc)
                skipped.append(exc)
        return skipped

    def export_to_json(self) -> dict[str, list[dict]]:
        nodes = [{"id": v.id, "x": v.x, "y": v.y} for v in self._vertices.values()]
        edges, seen = [], set()
        for a in self.arcs():
            if a.bidirectional:
                if (a.target, a.source) in seen:
                    continue
                seen.add((a.source, a.target))
            edges.append({"from": a.source, "to": a.target, "bidirectional": a.bidirectional})
        return {"nodes": nodes, "edges": edges}

    # ---------------- editor helpers ----------------

    def nearest_vertex(self, x: float, y: float, tolerance: float | None = None) -> Vertex | None:
        best, best_d = None, math.inf
        for v in self._vertices.values():
            d = math.hypot(v.x - x, v.y - y)
            if d < best_d:
                best, best_d = v, d
        if best is None or (tolerance is not None and best_d > tolerance):
            return None
        return best

    def next_vertex_id(self) -> int:
        """One past the largest number embedded in an existing id ("v12" -> 12)."""
        nums = [int(s) for s in (_DIGITS.sub("", str(vid)) for vid in self._vertices) if s]
        return max(nums) + 1 if nums else 0

    def bounds(self) -> tuple[float, float, float, float] | None:
        if not self._vertices:
            return None
        xs = [v.x for v in self._vertices.values()]
        ys = [v.y for v in self._vertices.values()]
        return min(xs), min(ys), max(xs), max(ys)
