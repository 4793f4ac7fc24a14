import re
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

_HEX = re.compile(r"^#[0-9A-Fa-f]{6}$")


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class CanonicalModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # None => full float precision (exact matching only)
    precision: Annotated[int, Field(ge=0, le=12)] | None = 4


# ----------------- STYLES ---------------------


class LineStyleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    color: str = "#FF0000"
    width: float = 4.0

    @field_validator("color")
    @classmethod
    def _hex(cls, v: str) -> str:
        if not _HEX.match(v):
            raise ValueError(f"color must look like #RRGGBB, got {v!r}")
        return v.upper()

    @field_validator("width")
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


class StyleModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    route: LineStyleModel = Field(default_factory=LineStyleModel)
    path: LineStyleModel = Field(
        default_factory=lambda: LineStyleModel(color="#00FFFF", width=6.0)
    )


class RenderModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sink: Literal["memory", "jsonl"] = "memory"


# ------------------------------------------------------------------


class PlannerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "session"
    log: LogModel = LogModel()
    canonical: CanonicalModel = Field(default_factory=CanonicalModel)
    style: StyleModel = Field(default_factory=StyleModel)
    render: RenderModel = Field(default_factory=RenderModel)
