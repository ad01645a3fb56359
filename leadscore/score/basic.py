"""Fixed-point lead score with a data completeness bonus."""

from typing import Optional

from leadscore.models import BasicLeadScore, BasicMatchingSummary, CompanyRecord

# Points awarded per matched criterion
FIXED_POINTS = {
    "industrial": 20,
    "province": 15,
    "company_size": 10,
    "contact_status": 10,
}


def basic_lead_score(
    record: CompanyRecord,
    industrial: Optional[str] = None,
    province: Optional[str] = None,
    company_size: Optional[str] = None,
    contact_status: Optional[str] = None,
) -> BasicLeadScore:
    """Score a record with fixed points per exact match.

    Every tenth of data completeness adds one more point, so a fully matched,
    fully complete record scores 65.
    """
    checks = {
        "industrial": (industrial, record.industrial_name),
        "province": (province, record.province),
        "company_size": (company_size, record.company_size),
        "contact_status": (contact_status, record.verification_status),
    }

    score = 0
    matched = {}
    for name, (wanted, actual) in checks.items():
        matched[name] = bool(wanted) and actual == wanted
        if matched[name]:
            score += FIXED_POINTS[name]

    score += (record.data_completeness or 0) // 10

    return BasicLeadScore(
        company_id=record.id,
        score=score,
        matching_summary=BasicMatchingSummary(**matched),
    )
