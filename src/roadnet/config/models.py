import json
import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- GRAPH SOURCE ---------------------


class GraphByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    fmt: Literal["csv"] = "csv"

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


# ----------------- TRANSPORT ---------------------


class TransportFifoModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["fifo"] = "fifo"
    inpipe: str = "inpipe"
    outpipe: str = "outpipe"
    mode: int = 0o666

    @model_validator(mode="after")
    def _distinct(self):
        if os.path.abspath(self.inpipe) == os.path.abspath(self.outpipe):
            raise ValueError("inpipe and outpipe must be different paths")
        return self


class TransportStdioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["stdio"] = "stdio"


TransportUnion = Annotated[
    TransportFifoModel | TransportStdioModel,
    Field(discriminator="kind"),
]

# ----------------- PROTOCOL ---------------------


class ProtocolModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_message_bytes: int = Field(default=1024, ge=64)
    read_chunk_bytes: int = Field(default=1024, ge=1)

    @model_validator(mode="after")
    def _chunk_within_bound(self):
        if self.read_chunk_bytes > self.max_message_bytes:
            raise ValueError(
                f"read_chunk_bytes ({self.read_chunk_bytes}) must be <= "
                f"max_message_bytes ({self.max_message_bytes})"
            )
        return self


# ------------------------------------------------------------------


class ServerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "roadnet"
    graph: GraphByPath
    transport: TransportUnion = Field(default_factory=TransportFifoModel)
    protocol: ProtocolModel = ProtocolModel()
    log: LogModel = LogModel()


def load_config(path: str) -> ServerModel:
    with open(path, encoding="utf-8") as f:
        return ServerModel.model_validate(json.load(f))
