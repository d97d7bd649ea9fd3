import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from street_quiz.io.overpass import DEFAULT_AREA, OVERPASS_URL


def _expand(v: str) -> str:
    return os.path.expandvars(os.path.expanduser(v))


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class DataModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    names_file: str = "public/streetNames2.json"
    geometries_file: str = "public/streetGeometries.json"

    @field_validator("names_file", "geometries_file")
    @classmethod
    def _expand_paths(cls, v: str) -> str:
        return _expand(v)


# ----------------- GEOMETRY TIERS ---------------------


class PrecomputedTierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["precomputed"] = "precomputed"
    file: str | None = None  # None => data.geometries_file

    @field_validator("file")
    @classmethod
    def _expand_file(cls, v: str | None) -> str | None:
        return None if v is None else _expand(v)


class MemoryTierModel(BaseModel):
    """Keeps geometries resolved by later tiers for the life of the process."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"


class OverpassTierModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["overpass"] = "overpass"
    url: str = OVERPASS_URL
    area_name: str = DEFAULT_AREA
    timeout_s: float = 30.0

    @field_validator("timeout_s")
    @classmethod
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v


TierUnion = Annotated[
    PrecomputedTierModel | MemoryTierModel | OverpassTierModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class QuizModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "buenos_aires"
    run_id: str = "local"
    seed: int = 0
    rounds: int = 5
    data: DataModel = DataModel()
    log: LogModel = LogModel()
    tiers: list[TierUnion] = Field(
        default_factory=lambda: [PrecomputedTierModel(), OverpassTierModel()]
    )

    @field_validator("rounds")
    @classmethod
    def _at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("rounds must be >= 1")
        return v

    @field_validator("tiers")
    @classmethod
    def _non_empty(cls, v: list) -> list:
        if not v:
            raise ValueError("at least one geometry tier is required")
        return v
