"""API routes for Lead Scoring."""

import json
import logging
import uuid
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from leadscore.config import settings
from leadscore.enrich import RecordNormalizer
from leadscore.export import render_csv
from leadscore.models import (
    BasicLeadScore,
    CompanyRecord,
    MatchingSummary,
    RankedCompany,
    ScoringCriteria,
    WeightedLeadScore,
)
from leadscore.models.database import DBScoringRun, DBScoredCompany, get_session
from leadscore.score import (
    ScoringPreset,
    DEFAULT_PRESETS,
    WeightedScorer,
    basic_lead_score,
    get_preset,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScoreRequest(_CamelModel):
    """Request body for scoring a single company."""
    company: CompanyRecord
    criteria: ScoringCriteria = Field(default_factory=ScoringCriteria)


class RankRequest(_CamelModel):
    """Request body for ranking a batch of companies.

    Either ``criteria`` or ``preset`` (with ``values`` to match) is used; a
    preset wins when both are given. An explicit ``minimumScore`` overrides the
    threshold inside ``criteria``.
    """
    companies: list[CompanyRecord]
    criteria: Optional[ScoringCriteria] = None
    preset: Optional[str] = None
    values: dict[str, str] = Field(default_factory=dict)
    minimum_score: float = Field(default=0.0, ge=0.0, le=100.0)
    save: bool = True


class RankResponse(_CamelModel):
    """Response for a ranking run."""
    run_id: Optional[str] = None
    status: str
    total_scored: int
    total_results: int
    results: list[RankedCompany]


class BasicScoreRequest(_CamelModel):
    """Request body for the fixed-point lead score."""
    company: CompanyRecord
    industrial: Optional[str] = None
    province: Optional[str] = None
    company_size: Optional[str] = None
    contact_status: Optional[str] = None


@router.post("/score", response_model=WeightedLeadScore)
async def score_company(request: ScoreRequest):
    """Score one company against weighted criteria."""
    scorer = WeightedScorer()
    return scorer.score(request.company, request.criteria)


@router.post("/basic-score", response_model=BasicLeadScore)
async def score_company_basic(request: BasicScoreRequest):
    """Score one company with fixed points per matched criterion."""
    company = RecordNormalizer.ensure_completeness(request.company)
    return basic_lead_score(
        company,
        industrial=request.industrial,
        province=request.province,
        company_size=request.company_size,
        contact_status=request.contact_status,
    )


@router.post("/rank", response_model=RankResponse)
async def rank_companies(request: RankRequest):
    """Score, filter and rank a batch of companies."""
    if len(request.companies) > settings.max_companies_per_request:
        raise HTTPException(
            status_code=413,
            detail=f"At most {settings.max_companies_per_request} companies per request",
        )

    criteria = _resolve_criteria(request)
    companies = [RecordNormalizer.ensure_completeness(c) for c in request.companies]

    scorer = WeightedScorer()
    ranked = scorer.score_and_rank(companies, criteria)

    run_id = None
    if request.save:
        run_id = str(uuid.uuid4())
        _save_run_to_db(run_id, criteria, request.preset, len(companies), ranked)
        logger.info(f"[{run_id}] Ranked {len(ranked)} of {len(companies)} companies")

    return RankResponse(
        run_id=run_id,
        status="completed",
        total_scored=len(companies),
        total_results=len(ranked),
        results=ranked,
    )


@router.get("/results/{run_id}", response_model=RankResponse)
async def get_results(run_id: str):
    """Get the ranked results of a saved run."""
    session = get_session()
    try:
        scoring_run = session.query(DBScoringRun).filter_by(run_id=run_id).first()
        if not scoring_run:
            raise HTTPException(status_code=404, detail="Scoring run not found")

        results = [_format_db_result(row) for row in scoring_run.results]

        return RankResponse(
            run_id=run_id,
            status=scoring_run.status,
            total_scored=scoring_run.total_scored,
            total_results=len(results),
            results=results,
        )
    finally:
        session.close()


@router.get("/export/{run_id}")
async def export_results(run_id: str):
    """Export a saved run as CSV."""
    results_response = await get_results(run_id)

    if not results_response.results:
        raise HTTPException(status_code=404, detail="No results to export")

    return StreamingResponse(
        iter([render_csv(results_response.results)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=ranked_{run_id[:8]}.csv"},
    )


@router.get("/presets", response_model=list[ScoringPreset])
async def list_presets():
    """List the available scoring presets."""
    return DEFAULT_PRESETS


def _resolve_criteria(request: RankRequest) -> ScoringCriteria:
    """Pick the criteria for a rank request."""
    if request.preset:
        try:
            preset = get_preset(request.preset)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Preset not found: {request.preset}")
        return preset.build_criteria(request.values, minimum_score=request.minimum_score)

    if request.criteria is not None:
        if "minimum_score" in request.model_fields_set:
            return request.criteria.model_copy(update={"minimum_score": request.minimum_score})
        return request.criteria

    return ScoringCriteria(minimum_score=request.minimum_score)


def _format_db_result(row: DBScoredCompany) -> RankedCompany:
    """Rebuild a ranked company from its stored row."""
    return RankedCompany(
        rank=row.rank,
        record=CompanyRecord.model_validate(row.get_record()),
        score=WeightedLeadScore(
            company_id=row.company_id,
            score=row.score,
            max_possible_score=row.max_possible_score,
            normalized_score=row.normalized_score,
            matching_summary=MatchingSummary.model_validate(row.get_matching_summary()),
        ),
    )


def _save_run_to_db(
    run_id: str,
    criteria: ScoringCriteria,
    preset: Optional[str],
    total_scored: int,
    results: list[RankedCompany],
):
    """Save a ranking run and its results to the database."""
    session = get_session()

    try:
        scoring_run = DBScoringRun(
            run_id=run_id,
            criteria=criteria.model_dump_json(by_alias=True),
            preset=preset,
            status="completed",
            started_at=datetime.utcnow(),
            completed_at=datetime.utcnow(),
            total_scored=total_scored,
            total_results=len(results),
        )
        session.add(scoring_run)
        session.flush()

        for result in results:
            session.add(DBScoredCompany(
                scoring_run_id=scoring_run.id,
                company_id=result.record.id,
                company_name=result.record.company_name_en,
                rank=result.rank,
                score=result.score.score,
                max_possible_score=result.score.max_possible_score,
                normalized_score=result.score.normalized_score,
                matching_summary=json.dumps(result.score.matching_summary.model_dump(by_alias=True)),
                record=result.record.model_dump_json(by_alias=True),
            ))

        session.commit()
    finally:
        session.close()
