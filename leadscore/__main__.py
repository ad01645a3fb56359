"""CLI entry point for Lead Scoring."""

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from leadscore.config import settings
from leadscore.enrich import RecordNormalizer
from leadscore.export import export_to_csv
from leadscore.models import CompanyRecord, RankedCompany, ScoringCriteria
from leadscore.score import WeightedScorer, get_preset

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def run_scoring(
    companies: list[CompanyRecord],
    criteria: ScoringCriteria,
    output_path: Path,
) -> list[RankedCompany]:
    """Score, rank, export and summarize."""
    active = [name for name, _ in criteria.active_criteria()]
    logger.info(f"Scoring {len(companies)} companies on {len(active)} criteria: {', '.join(active) or 'none'}")

    scorer = WeightedScorer()
    ranked = scorer.score_and_rank(companies, criteria)
    logger.info(f"{len(ranked)} companies at or above minimum score {criteria.minimum_score:g}")

    logger.info(f"Exporting results to {output_path}...")
    export_to_csv(ranked, output_path)

    print_summary(ranked, total=len(companies))

    return ranked


def load_companies(companies_path: Path) -> list[CompanyRecord]:
    """Load company records from a JSON or CSV file."""
    if companies_path.suffix.lower() == ".csv":
        with open(companies_path, "r", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
    else:
        with open(companies_path, "r", encoding="utf-8") as f:
            rows = json.load(f)
        if isinstance(rows, dict):
            rows = rows.get("companies", [])

    normalizer = RecordNormalizer()
    return normalizer.normalize_many(rows)


def load_criteria(
    criteria_path: Optional[Path],
    preset_name: Optional[str] = None,
    minimum_score: Optional[float] = None,
) -> ScoringCriteria:
    """Load criteria from a JSON file, optionally weighted by a preset."""
    data = {}
    if criteria_path is not None:
        with open(criteria_path, "r", encoding="utf-8") as f:
            data = json.load(f)

    if preset_name:
        preset = get_preset(preset_name)
        threshold = minimum_score if minimum_score is not None else data.get("minimumScore") or 0.0
        return preset.build_criteria(data, minimum_score=threshold)

    if minimum_score is not None:
        data["minimumScore"] = minimum_score
    return ScoringCriteria.model_validate(data)


def print_summary(results: list[RankedCompany], total: int):
    """Print a summary of results to console."""
    print("\n" + "=" * 60)
    print("LEAD SCORING - RESULTS SUMMARY")
    print("=" * 60)

    print(f"\nTotal companies scored: {total}")
    print(f"Above minimum score: {len(results)}")

    if results:
        print("\n" + "-" * 60)
        print("TOP 10 LEADS")
        print("-" * 60)

        for r in results[:10]:
            print(f"\n#{r.rank} {r.record.company_name_en or r.record.id}")
            print(
                f"   Score: {r.score.normalized_score}% "
                f"({r.score.score:g} of {r.score.max_possible_score:g})"
            )
            if r.record.industrial_name:
                print(f"   Industry: {r.record.industrial_name}")
            if r.record.province:
                print(f"   Province: {r.record.province}")
            matched = r.score.matching_summary.matched()
            if matched:
                print(f"   Matched: {', '.join(matched)}")

    print("\n" + "=" * 60)


def main(argv: Optional[list[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Lead Scoring - Score and rank companies against weighted criteria"
    )
    parser.add_argument(
        "--companies", "-i",
        type=Path,
        default=Path("companies.json"),
        help="Path to companies JSON or CSV file (default: companies.json)",
    )
    parser.add_argument(
        "--criteria", "-c",
        type=Path,
        default=None,
        help="Path to criteria JSON file",
    )
    parser.add_argument(
        "--preset", "-p",
        default=None,
        help="Scoring preset name or id; criteria file then supplies only the values",
    )
    parser.add_argument(
        "--minimum-score", "-m",
        type=float,
        default=None,
        help="Drop companies scoring below this percentage (0-100)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=settings.data_dir / settings.default_output_name,
        help=f"Output CSV path (default: data/{settings.default_output_name})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not args.companies.exists():
        logger.error(f"Companies file not found: {args.companies}")
        sys.exit(1)

    if args.criteria is not None and not args.criteria.exists():
        logger.error(f"Criteria file not found: {args.criteria}")
        sys.exit(1)

    try:
        criteria = load_criteria(args.criteria, args.preset, args.minimum_score)
        if args.criteria:
            logger.info(f"Loaded criteria from {args.criteria}")
    except Exception as e:
        logger.error(f"Failed to load criteria: {e}")
        sys.exit(1)

    try:
        companies = load_companies(args.companies)
        logger.info(f"Loaded {len(companies)} companies from {args.companies}")
    except Exception as e:
        logger.error(f"Failed to load companies: {e}")
        sys.exit(1)

    run_scoring(companies, criteria, args.output)


if __name__ == "__main__":
    main()
