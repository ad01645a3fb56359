"""CSV export of ranked companies."""

import csv
import io
from pathlib import Path
from typing import TextIO

from leadscore.models import RankedCompany

HEADER = [
    "Rank",
    "Company ID",
    "Company Name",
    "Registered No",
    "Industry",
    "Province",
    "Company Size",
    "Verification Status",
    "Data Completeness",
    "Score",
    "Max Possible Score",
    "Normalized Score",
    "Matched Criteria",
]


def _write_rows(results: list[RankedCompany], f: TextIO):
    writer = csv.writer(f)
    writer.writerow(HEADER)

    for r in results:
        record = r.record
        writer.writerow([
            r.rank or "",
            record.id,
            record.company_name_en,
            record.registered_no or "",
            record.industrial_name,
            record.province,
            record.company_size or "",
            record.verification_status or "",
            "" if record.data_completeness is None else record.data_completeness,
            f"{r.score.score:g}",
            f"{r.score.max_possible_score:g}",
            r.score.normalized_score,
            "; ".join(r.score.matching_summary.matched()),
        ])


def render_csv(results: list[RankedCompany]) -> str:
    """Render ranked companies as CSV text."""
    output = io.StringIO()
    _write_rows(results, output)
    return output.getvalue()


def export_to_csv(results: list[RankedCompany], output_path: Path):
    """Export ranked companies to a CSV file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", newline="", encoding="utf-8") as f:
        _write_rows(results, f)
