"""Data models for Lead Scoring."""

from .company import (
    CompanyRecord,
    ContactPerson,
)
from .criteria import (
    DIMENSIONS,
    ScoringCriteria,
    WeightedCriterion,
)
from .score import (
    BasicLeadScore,
    BasicMatchingSummary,
    MatchingSummary,
    RankedCompany,
    WeightedLeadScore,
)

__all__ = [
    "CompanyRecord",
    "ContactPerson",
    "DIMENSIONS",
    "ScoringCriteria",
    "WeightedCriterion",
    "BasicLeadScore",
    "BasicMatchingSummary",
    "MatchingSummary",
    "RankedCompany",
    "WeightedLeadScore",
]
