# geo_route/domain/routing/hooks.py
from typing import Protocol


class QueryHooks(Protocol):
    def query_start(self, *, source, target, vertices): ...
    def query_end(self, result, *, wall_ms): ...
    def load_end(self, *, nodes, arcs, skipped): ...
    def invalid_reference(self, exc): ...


class NoopHooks:
    def query_start(self, **_):
        pass

    def query_end(self, *_, **__):
        pass

    def load_end(self, **_):
        pass

    def invalid_reference(self, *_, **__):
        pass
