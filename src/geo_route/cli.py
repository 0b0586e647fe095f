# geo_route/cli.py
import argparse
import json
import math
import sys

from geo_route.app.build import build
from geo_route.config.models import SessionModel, load_config
from geo_route.errors import MalformedInput
from geo_route.io.graph_json import write_graph_json
from geo_route.io.osm import parse_osm

EXIT_OK, EXIT_NO_PATH, EXIT_BAD_INPUT = 0, 1, 2


def _coerce_id(raw: str, store):
    if raw in store:
        return raw
    try:
        as_int = int(raw)
    except ValueError:
        return raw
    return as_int if as_int in store else raw


def _cmd_convert(args, session) -> int:
    ingest = session.config.ingest
    with open(args.input, "rb") as f:
        data = parse_osm(
            f.read(), oneway_forward=ingest.oneway_forward, oneway_reverse=ingest.oneway_reverse
        )
    write_graph_json(data, args.output)
    print(f"{len(data['nodes'])} nodes, {len(data['edges'])} edges -> {args.output}")
    return EXIT_OK


def _cmd_route(args, session) -> int:
    session.load_file(args.input)
    store = session.store
    result = session.route(_coerce_id(args.source, store), _coerce_id(args.target, store))
    out = result.to_dict()
    out["cost"] = result.cost if math.isfinite(result.cost) else None
    out["legs"] = [
        {"vertex": leg.vertex, "distance": leg.distance, "next": leg.next_vertex}
        for leg in result.legs(store)
    ]
    print(json.dumps(out, indent=2))
    return EXIT_OK if result.found else EXIT_NO_PATH


def make_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="geo-route", description="OSM ingestion and Dijkstra routing")
    p.add_argument("--config", help="session config (JSON)")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="command", required=True)

    conv = sub.add_parser("convert", help="convert an .osm file to the graph JSON format")
    conv.add_argument("input")
    conv.add_argument("output")
    conv.set_defaults(func=_cmd_convert)

    route = sub.add_parser("route", help="shortest path between two vertex ids")
    route.add_argument("input", help=".osm or .json graph")
    route.add_argument("source")
    route.add_argument("target")
    route.set_defaults(func=_cmd_route)
    return p


def main(argv=None) -> int:
    args = make_parser().parse_args(argv)
    cfg = load_config(args.config) if args.config else SessionModel()
    if args.log_level:
        cfg = cfg.model_copy(update={"log": cfg.log.model_copy(update={"level": args.log_level})})
    session = build(cfg)
    try:
        return args.func(args, session)
    except (MalformedInput, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
