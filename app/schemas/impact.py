"""Request/response schemas for impacts and SDGs."""

from datetime import datetime

from pydantic import Field, field_validator

from app.models.enums import RelationType, SectionType, SustainabilityDimension
from app.schemas.base import CamelModel

SCORE_MIN = 1
SCORE_MAX = 10


class ImpactWrite(CamelModel):
    """Body for creating or replacing an impact. sdg_ids replaces the full SDG set."""

    project_id: int
    type: SectionType
    score: int = Field(..., ge=SCORE_MIN, le=SCORE_MAX, description="Impact score 1-10")
    dimension: SustainabilityDimension
    relation: RelationType
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    sdg_ids: list[int] = Field(default_factory=list)

    @field_validator("sdg_ids")
    @classmethod
    def dedupe_sdg_ids(cls, v: list[int]) -> list[int]:
        return sorted(set(v))


class ImpactRead(CamelModel):
    id: int
    project_id: int
    type: str
    score: int
    dimension: str
    relation: str
    title: str
    description: str
    sdg_ids: list[int] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SdgRead(CamelModel):
    id: int
    title: str
