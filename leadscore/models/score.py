"""Scoring result models."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .company import CompanyRecord
from .criteria import DIMENSIONS


class MatchingSummary(BaseModel):
    """Per-criterion match flags and the weight each matched criterion contributed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    keyword: bool = False
    keyword_score: float = 0.0
    industrial: bool = False
    industrial_score: float = 0.0
    province: bool = False
    province_score: float = 0.0
    company_size: bool = False
    company_size_score: float = 0.0
    contact_status: bool = False
    contact_status_score: float = 0.0

    def matched(self) -> list[str]:
        """Names of the criteria that matched, in scoring order."""
        return [name for name in DIMENSIONS if getattr(self, name)]


class WeightedLeadScore(BaseModel):
    """Weighted lead score for one company."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_id: str
    score: float = Field(default=0.0, ge=0.0, description="Sum of weights of matched criteria")
    max_possible_score: float = Field(
        default=0.0,
        ge=0.0,
        description="Sum of weights of all active criteria",
    )
    normalized_score: int = Field(default=0, ge=0, le=100, description="Score as a 0-100 percentage")
    matching_summary: MatchingSummary = Field(default_factory=MatchingSummary)


class RankedCompany(BaseModel):
    """A company record paired with its score and position in a ranking."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rank: Optional[int] = None
    record: CompanyRecord
    score: WeightedLeadScore


class BasicMatchingSummary(BaseModel):
    """Match flags for the fixed-point lead score."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    industrial: bool = False
    province: bool = False
    company_size: bool = False
    contact_status: bool = False


class BasicLeadScore(BaseModel):
    """Fixed-point lead score with a data completeness bonus."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    company_id: str
    score: int = 0
    matching_summary: BasicMatchingSummary = Field(default_factory=BasicMatchingSummary)
