# geo_route/domain/routing/dijkstra.py
import math
import time

from geo_route.domain.entities.geography import PathResult, VertexId
from geo_route.domain.graph_store import GraphStore
from geo_route.domain.routing.heap import IndexedMinHeap
from geo_route.domain.routing.hooks import NoopHooks, QueryHooks


def shortest_path(
    store: GraphStore,
    source: VertexId,
    target: VertexId,
    *,
    hooks: QueryHooks | None = None,
) -> PathResult:
    """
    Single-source, single-target Dijkstra with early exit at `target`.

    `explored` counts heap pops that were neither stale nor the target.
    An unknown source or target yields an empty, infinite-cost result.
    """
    hooks = hooks or NoopHooks()
    t0 = time.perf_counter()
    hooks.query_start(source=source, target=target, vertices=len(store))

    if source not in store or target not in store:
        result = PathResult()
        hooks.query_end(result, wall_ms=(time.perf_counter() - t0) * 1000)
        return result

    dist: dict[VertexId, float] = {source: 0.0}
    prev: dict[VertexId, VertexId] = {}
    explored = 0
    heap = IndexedMinHeap()
    heap.insert(source, 0.0)

    while heap:
        u, p = heap.extract_min()
        if p > dist[u]:
            continue  # superseded entry
        if u == target:
            break
        explored += 1
        for v in store.neighbors(u):
            w = store.edge_weight(u, v)
            if w is None or math.isinf(w):
                continue
            alt = dist[u] + w
            if alt < dist.get(v, math.inf):
                dist[v] = alt
                prev[v] = u
                if v in heap:
                    heap.decrease_key(v, alt)
                else:
                    heap.insert(v, alt)

    cost = dist.get(target, math.inf)
    if math.isinf(cost):
        result = PathResult([], math.inf, explored)
    else:
        path = [target]
        while path[-1] != source:
            path.append(prev[path[-1]])
        path.reverse()
        result = PathResult(path, cost, explored)

    hooks.query_end(result, wall_ms=(time.perf_counter() - t0) * 1000)
    return result


class DijkstraRouter:
    """PathFinder bound to one store, for callers that route repeatedly."""

    def __init__(self, store: GraphStore, hooks: QueryHooks | None = None):
        self.store, self.hooks = store, hooks

    def route(self, source: VertexId, target: VertexId) -> PathResult:
        return shortest_path(self.store, source, target, hooks=self.hooks)

    def cost(self, source: VertexId, target: VertexId) -> float:
        return self.route(source, target).cost
