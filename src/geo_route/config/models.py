# geo_route/config/models.py
import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    json_format: bool = Field(default=True, alias="json")


class IngestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    normalize: bool = False  # shift loaded coordinates so min x/y == 0
    oneway_forward: tuple[str, ...] = ("yes", "1", "true")
    oneway_reverse: tuple[str, ...] = ("-1",)

    @model_validator(mode="after")
    def _disjoint_oneway(self):
        both = set(self.oneway_forward) & set(self.oneway_reverse)
        if both:
            raise ValueError(f"oneway values cannot be both forward and reverse: {sorted(both)}")
        return self


class SessionModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    log: LogModel = LogModel()
    ingest: IngestModel = IngestModel()


def load_config(path: str | Path) -> SessionModel:
    return SessionModel.model_validate(json.loads(Path(path).read_text(encoding="utf-8")))
