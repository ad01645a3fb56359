"""Match predicates for weighted criteria."""

import logging
from dataclasses import dataclass
from typing import Optional

from leadscore.models import CompanyRecord, WeightedCriterion

logger = logging.getLogger(__name__)

# Record field compared by each exact-match dimension
EXACT_MATCH_FIELDS = {
    "industrial": "industrial_name",
    "province": "province",
    "company_size": "company_size",
    "contact_status": "verification_status",
}


@dataclass
class CriterionResult:
    """Outcome of evaluating one active criterion against a record."""

    dimension: str
    matched: bool
    weight: float

    @property
    def awarded(self) -> float:
        return self.weight if self.matched else 0.0


def keyword_matches(record: CompanyRecord, keyword: str) -> bool:
    """Case-insensitive substring match on name, registration number or industry.

    Any one field is enough; a record without a registration number simply
    does not match on that field.
    """
    keyword_lower = keyword.lower()
    fields = [
        record.company_name_en,
        record.registered_no,
        record.industrial_name,
    ]
    return any(field and keyword_lower in field.lower() for field in fields)


def exact_matches(record_value: Optional[str], value: str) -> bool:
    """Strict, case-sensitive equality."""
    return record_value is not None and record_value == value


def evaluate(
    dimension: str,
    record: CompanyRecord,
    criterion: WeightedCriterion,
) -> CriterionResult:
    """Evaluate one active criterion against a record."""
    if dimension == "keyword":
        matched = keyword_matches(record, criterion.value)
    elif dimension in EXACT_MATCH_FIELDS:
        matched = exact_matches(getattr(record, EXACT_MATCH_FIELDS[dimension]), criterion.value)
    else:
        raise ValueError(f"Unknown scoring dimension: {dimension}")

    return CriterionResult(dimension=dimension, matched=matched, weight=criterion.weight)
