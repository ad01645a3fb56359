"""Weighted scoring engine for ranking company leads."""

import logging
import math
from collections.abc import Iterable, Mapping

from leadscore.models import (
    CompanyRecord,
    MatchingSummary,
    RankedCompany,
    ScoringCriteria,
    WeightedLeadScore,
)
from .matchers import evaluate

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


class WeightedScorer:
    """Score and rank company records against weighted criteria."""

    def score(
        self,
        record: CompanyRecord,
        criteria: ScoringCriteria,
    ) -> WeightedLeadScore:
        """Score one record against the active criteria."""
        total_score = 0.0
        max_possible_score = 0.0
        summary: dict[str, object] = {}

        for dimension, criterion in criteria.active_criteria():
            result = evaluate(dimension, record, criterion)
            max_possible_score += result.weight
            total_score += result.awarded
            summary[dimension] = result.matched
            summary[f"{dimension}_score"] = result.awarded

        normalized_score = (
            round_half_up(total_score / max_possible_score * 100)
            if max_possible_score > 0
            else 0
        )

        return WeightedLeadScore(
            company_id=record.id,
            score=total_score,
            max_possible_score=max_possible_score,
            normalized_score=normalized_score,
            matching_summary=MatchingSummary(**summary),
        )

    def score_and_rank(
        self,
        records: Iterable[CompanyRecord],
        criteria: ScoringCriteria,
    ) -> list[RankedCompany]:
        """Score all records, drop those below the minimum score and rank the rest."""
        if records is None or isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
            logger.debug(f"Nothing to rank, got {type(records).__name__}")
            return []

        scored = [
            RankedCompany(record=record, score=self.score(record, criteria))
            for record in records
        ]

        ranked = [r for r in scored if r.score.normalized_score >= criteria.minimum_score]

        # Stable, so ties keep their input order
        ranked.sort(key=lambda r: r.score.normalized_score, reverse=True)

        for i, result in enumerate(ranked):
            result.rank = i + 1

        logger.debug(
            f"Ranked {len(ranked)} of {len(scored)} records "
            f"(minimum score {criteria.minimum_score:g})"
        )
        return ranked


def score_one(record: CompanyRecord, criteria: ScoringCriteria) -> WeightedLeadScore:
    """Score a single record."""
    return WeightedScorer().score(record, criteria)


def score_and_rank(
    records: Iterable[CompanyRecord],
    criteria: ScoringCriteria,
) -> list[RankedCompany]:
    """Score, filter and rank a collection of records."""
    return WeightedScorer().score_and_rank(records, criteria)
