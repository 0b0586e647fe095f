# geo_route/io/loader.py
from pathlib import Path

from geo_route.errors import MalformedInput
from geo_route.io.graph_json import read_graph_json
from geo_route.io.osm import ONEWAY_FORWARD, ONEWAY_REVERSE, parse_osm


def normalize_nodes(nodes: list[dict]) -> list[dict]:
    """Shift coordinates so the smallest x and y become 0 (UTM values are huge)."""
    if not nodes:
        return []
    min_x = min(n["x"] for n in nodes)
    min_y = min(n["y"] for n in nodes)
    return [{**n, "x": n["x"] - min_x, "y": n["y"] - min_y} for n in nodes]


def load_graph_file(
    path: str | Path,
    *,
    normalize: bool = False,
    oneway_forward=ONEWAY_FORWARD,
    oneway_reverse=ONEWAY_REVERSE,
) -> dict[str, list[dict]]:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".osm":
        data = parse_osm(
            path.read_bytes(), oneway_forward=oneway_forward, oneway_reverse=oneway_reverse
        )
    elif suffix == ".json":
        data = read_graph_json(path)
    else:
        raise MalformedInput(f"unsupported graph file {path.name!r}: use .osm or .json")
    if normalize:
        data = {**data, "nodes": normalize_nodes(data["nodes"])}
    return data
