# geo_route/domain/entities/geography.py
from __future__ import annotations

import math
from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum

VertexId = Hashable


# Core geometry types used by the graph store and path engine
@dataclass
class Vertex:
    id: VertexId
    x: float  # meters in projected CRS (or canvas units for hand-drawn graphs)
    y: float

    def distance_to(self, other: Vertex) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


class Direction(Enum):
    """Tag carried by every arc. A BIDIRECTIONAL logical edge is two arcs."""

    DIRECTED = "directed"
    BIDIRECTIONAL = "bidirectional"

    @classmethod
    def of(cls, value: bool | Direction) -> Direction:
        if isinstance(value, Direction):
            return value
        if not isinstance(value, bool):
            raise TypeError(f"direction flag must be bool or Direction, got {value!r}")
        return cls.BIDIRECTIONAL if value else cls.DIRECTED

    @property
    def bidirectional(self) -> bool:
        return self is Direction.BIDIRECTIONAL


@dataclass(frozen=True)
class Arc:
    source: VertexId
    target: VertexId
    direction: Direction = Direction.DIRECTED

    @property
    def bidirectional(self) -> bool:
        return self.direction.bidirectional


@dataclass(frozen=True)
class UTMCoord:
    x: float  # easting, meters
    y: float  # northing, meters
    zone: int


@dataclass(frozen=True)
class PathLeg:
    vertex: VertexId
    distance: float | None  # None on the last row
    next_vertex: VertexId | None


@dataclass
class PathResult:
    path: list[VertexId] = field(default_factory=list)
    cost: float = math.inf
    explored: int = 0

    @property
    def found(self) -> bool:
        return bool(self.path) and math.isfinite(self.cost)

    def legs(self, store) -> list[PathLeg]:
        """One row per path vertex: distance to the next vertex on the path."""
        rows = []
        for i, v in enumerate(self.path):
            nxt = self.path[i + 1] if i + 1 < len(self.path) else None
            dist = store.edge_weight(v, nxt) if nxt is not None else None
            rows.append(PathLeg(v, dist, nxt))
        return rows

    def to_dict(self) -> dict:
        return {"path": list(self.path), "cost": self.cost, "explored": self.explored}
