# geo_route/app/session.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from geo_route.config.models import SessionModel
from geo_route.domain.entities.geography import PathResult, VertexId
from geo_route.domain.graph_store import GraphStore
from geo_route.domain.routing.dijkstra import DijkstraRouter
from geo_route.domain.routing.hooks import NoopHooks, QueryHooks
from geo_route.errors import InvalidReference
from geo_route.io.graph_json import validate_graph, write_graph_json
from geo_route.io.loader import load_graph_file, normalize_nodes
from geo_route.io.osm import parse_osm


@dataclass
class GraphSession:
    """One editor's graph: the store, its config, and where query logs go."""

    config: SessionModel = field(default_factory=SessionModel)
    hooks: QueryHooks = field(default_factory=NoopHooks)
    store: GraphStore = field(default_factory=GraphStore)

    @property
    def router(self) -> DijkstraRouter:
        return DijkstraRouter(self.store, hooks=self.hooks)

    # --------------- import / export -----------------

    def load(self, data: Mapping) -> list[InvalidReference]:
        """
        Replace the graph with a bulk {nodes, edges} document.

        The document is validated in full before the store is touched, so a
        MalformedInput leaves the previous graph intact.
        """
        staged = validate_graph(data)
        if self.config.ingest.normalize:
            staged["nodes"] = normalize_nodes(staged["nodes"])
        skipped = self.store.load_from_json(staged["nodes"], staged["edges"])
        for exc in skipped:
            self.hooks.invalid_reference(exc)
        self.hooks.load_end(nodes=len(self.store), arcs=self.store.arc_count, skipped=len(skipped))
        return skipped

    def load_file(self, path: str | Path) -> list[InvalidReference]:
        ingest = self.config.ingest
        data = load_graph_file(
            path, oneway_forward=ingest.oneway_forward, oneway_reverse=ingest.oneway_reverse
        )
        return self.load(data)

    def import_osm(self, xml_text: str | bytes) -> list[InvalidReference]:
        ingest = self.config.ingest
        data = parse_osm(
            xml_text, oneway_forward=ingest.oneway_forward, oneway_reverse=ingest.oneway_reverse
        )
        return self.load(data)

    def export(self) -> dict[str, list[dict]]:
        return self.store.export_to_json()

    def save(self, path: str | Path) -> None:
        write_graph_json(self.export(), path)

    def clear(self) -> None:
        self.store.clear()

    # --------------- queries -----------------

    def route(self, source: VertexId, target: VertexId) -> PathResult:
        return self.router.route(source, target)
