# geo_route/errors.py
from collections.abc import Hashable


class GeoRouteError(Exception):
    pass


class InvalidReference(GeoRouteError, KeyError):
    """An arc operation names a vertex that is not in the store."""

    def __init__(self, from_id: Hashable, to_id: Hashable, missing: tuple[Hashable, ...]):
        self.from_id, self.to_id, self.missing = from_id, to_id, missing
        names = ", ".join(map(repr, missing))
        super().__init__(f"arc {from_id!r}->{to_id!r}: unknown vertex {names}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class MalformedInput(GeoRouteError, ValueError):
    """Input document failed to parse or validate; nothing was loaded."""
