# geo_route/io/graph_json.py
import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from geo_route.errors import MalformedInput

VertexKey = int | str


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: VertexKey
    x: float
    y: float


class EdgeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    id: int | None = None
    from_: VertexKey = Field(alias="from")
    to: VertexKey
    bidirectional: bool = True  # omitted flag means a two-way street


class GraphDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")
    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)

    def to_bulk(self) -> dict[str, list[dict]]:
        return {
            "nodes": [n.model_dump() for n in self.nodes],
            "edges": [e.model_dump(by_alias=True, exclude_none=True) for e in self.edges],
        }


def validate_graph(data) -> dict[str, list[dict]]:
    """Check a bulk mapping against the exchange schema; return a normalised copy."""
    try:
        return GraphDocument.model_validate(data).to_bulk()
    except ValidationError as exc:
        raise MalformedInput(f"invalid graph document: {exc}") from exc


def parse_graph_json(text: str | bytes) -> dict[str, list[dict]]:
    try:
        return GraphDocument.model_validate_json(text).to_bulk()
    except ValidationError as exc:
        raise MalformedInput(f"invalid graph document: {exc}") from exc


def read_graph_json(path: str | Path) -> dict[str, list[dict]]:
    return parse_graph_json(Path(path).read_bytes())


def dump_graph_json(data: dict, indent: int | None = 2) -> str:
    return json.dumps(data, indent=indent)


def write_graph_json(data: dict, path: str | Path) -> None:
    Path(path).write_text(dump_graph_json(data) + "\n", encoding="utf-8")
