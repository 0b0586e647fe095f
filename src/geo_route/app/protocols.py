from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from geo_route.domain.entities.geography import Arc, PathResult, Vertex, VertexId


@runtime_checkable
class GraphView(Protocol):
    """
    What a rendering/editing front end reads and mutates.
    Units: whatever the vertices were loaded in (meters for OSM imports).
    """

    def vertices(self) -> Iterator[Vertex]: ...
    def arcs(self) -> Iterator[Arc]: ...
    def edge_weight(self, from_id: VertexId, to_id: VertexId) -> float | None: ...
    def upsert_vertex(self, vid: VertexId, x: float, y: float) -> Vertex: ...
    def remove_vertex(self, vid: VertexId) -> None: ...
    def add_arc(self, from_id: VertexId, to_id: VertexId, bidirectional: bool = False) -> None: ...
    def remove_arc(self, from_id: VertexId, to_id: VertexId) -> None: ...


@runtime_checkable
class PathFinder(Protocol):
    """
    Responsibilities:
      • Least-cost path between two vertex ids of one store.
      • Unreachable targets are a normal result (empty path, infinite cost).
    """

    def route(self, source: VertexId, target: VertexId) -> PathResult: ...
    def cost(self, source: VertexId, target: VertexId) -> float: ...
