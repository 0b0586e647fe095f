# geo_route/io/osm.py
import logging
import xml.etree.ElementTree as ET
from collections.abc import Collection

from geo_route.errors import MalformedInput
from geo_route.geo.projection import project_many

log = logging.getLogger(__name__)

ONEWAY_FORWARD = ("yes", "1", "true")
ONEWAY_REVERSE = ("-1",)


def _oneway(way: ET.Element) -> str | None:
    for tag in way.iter("tag"):
        if tag.get("k") == "oneway":
            return tag.get("v")
    return None


def parse_osm(
    xml_text: str | bytes,
    *,
    oneway_forward: Collection[str] = ONEWAY_FORWARD,
    oneway_reverse: Collection[str] = ONEWAY_REVERSE,
) -> dict[str, list[dict]]:
    """
    OSM XML -> {"nodes": [{id, x, y}], "edges": [{id, from, to, bidirectional}]}.

    Node ids are re-assigned densely (0, 1, ...) in document order and x/y are
    UTM easting/northing. Way segments that reference an unknown node are dropped.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise MalformedInput(f"not valid OSM XML: {exc}") from exc

    index: dict[str, int] = {}
    lats, lons = [], []
    for el in root.iter("node"):
        osm_id = el.get("id")
        try:
            lat, lon = float(el.get("lat")), float(el.get("lon"))
        except (TypeError, ValueError) as exc:
            raise MalformedInput(f"node {osm_id!r} has no usable lat/lon") from exc
        index[osm_id] = len(lats)
        lats.append(lat)
        lons.append(lon)

    xs, ys, _ = project_many(lats, lons)
    nodes = [{"id": i, "x": float(x), "y": float(y)} for i, (x, y) in enumerate(zip(xs, ys))]

    edges: list[dict] = []
    dangling = 0
    for way in root.iter("way"):
        tag = _oneway(way)
        reverse = tag in oneway_reverse
        bidirectional = not (tag in oneway_forward or reverse)
        refs = [nd.get("ref") for nd in way.iter("nd")]
        for a, b in zip(refs, refs[1:]):
            u, v = index.get(a), index.get(b)
            if u is None or v is None:
                dangling += 1
                continue
            if reverse:
                u, v = v, u
            edges.append({"id": len(edges), "from": u, "to": v, "bidirectional": bidirectional})

    if dangling:
        log.debug("dropped %d way segments with unknown node refs", dangling)
    return {"nodes": nodes, "edges": edges}
