"""Tests for the command line entry point and CSV export."""

import csv
import json

import pytest

from leadscore.__main__ import load_companies, load_criteria, main
from leadscore.export import HEADER, render_csv
from leadscore.models import CompanyRecord, ScoringCriteria
from leadscore.score import score_and_rank

COMPANIES = [
    {
        "id": "1",
        "companyNameEn": "Bangkok Express Logistics",
        "registeredNo": "0105550000001",
        "industrialName": "Logistics",
        "province": "Bangkok",
        "companySize": "M",
        "verificationStatus": "Active",
        "dataCompleteness": 90,
    },
    {
        "id": "2",
        "companyNameEn": "Northern Foods",
        "industrialName": "Food Processing",
        "province": "Chiang Mai",
        "companySize": "S",
        "verificationStatus": "Invalid",
    },
]


@pytest.fixture
def companies_json(tmp_path):
    path = tmp_path / "companies.json"
    path.write_text(json.dumps(COMPANIES), encoding="utf-8")
    return path


@pytest.fixture
def companies_csv(tmp_path):
    path = tmp_path / "companies.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=["id", "companyNameEn", "industrialName", "province", "contactPhone"])
        writer.writeheader()
        writer.writerow({"id": "1", "companyNameEn": "Acme", "industrialName": "Retail", "province": "Bangkok", "contactPhone": "02-111-1111"})
        writer.writerow({"id": "", "companyNameEn": "Missing Id", "industrialName": "", "province": "", "contactPhone": ""})
    return path


@pytest.fixture
def criteria_json(tmp_path):
    path = tmp_path / "criteria.json"
    path.write_text(json.dumps({
        "industrial": "Logistics", "industrialWeight": 20,
        "province": "Bangkok", "provinceWeight": 15,
    }), encoding="utf-8")
    return path


class TestLoading:

    def test_load_json(self, companies_json):
        companies = load_companies(companies_json)
        assert [c.id for c in companies] == ["1", "2"]
        assert companies[1].data_completeness is not None

    def test_load_json_wrapped(self, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"companies": COMPANIES}), encoding="utf-8")
        assert len(load_companies(path)) == 2

    def test_load_csv_skips_invalid_rows(self, companies_csv):
        companies = load_companies(companies_csv)
        assert len(companies) == 1
        assert companies[0].contact_persons[0].phone == "02-111-1111"

    def test_load_criteria(self, criteria_json):
        criteria = load_criteria(criteria_json)
        assert criteria.industrial.weight == 20

    def test_load_criteria_minimum_override(self, criteria_json):
        criteria = load_criteria(criteria_json, minimum_score=75)
        assert criteria.minimum_score == 75

    def test_load_criteria_with_preset(self, criteria_json):
        criteria = load_criteria(criteria_json, preset_name="Logistics Focus")
        assert criteria.industrial.weight == 35
        assert criteria.province.weight == 25

    def test_load_no_criteria(self):
        assert load_criteria(None) == ScoringCriteria()


class TestExport:

    def test_render_csv(self):
        records = [CompanyRecord.model_validate(c) for c in COMPANIES]
        criteria = ScoringCriteria.model_validate({"province": "Bangkok", "provinceWeight": 10})
        text = render_csv(score_and_rank(records, criteria))
        rows = list(csv.reader(text.splitlines()))
        assert rows[0] == HEADER
        assert rows[1][0] == "1"
        assert rows[1][2] == "Bangkok Express Logistics"
        assert rows[1][11] == "100"
        assert rows[1][12] == "province"
        assert rows[2][12] == ""

    def test_render_empty(self):
        assert render_csv([]).strip() == ",".join(HEADER)


class TestMain:

    def test_main_writes_csv(self, companies_json, criteria_json, tmp_path, capsys):
        output = tmp_path / "out" / "ranked.csv"
        main([
            "--companies", str(companies_json),
            "--criteria", str(criteria_json),
            "--output", str(output),
        ])
        rows = list(csv.reader(output.read_text(encoding="utf-8").splitlines()))
        assert len(rows) == 3
        assert rows[1][1] == "1"
        assert "LEAD SCORING - RESULTS SUMMARY" in capsys.readouterr().out

    def test_main_minimum_score(self, companies_json, criteria_json, tmp_path):
        output = tmp_path / "ranked.csv"
        main([
            "-i", str(companies_json),
            "-c", str(criteria_json),
            "-m", "50",
            "-o", str(output),
        ])
        rows = list(csv.reader(output.read_text(encoding="utf-8").splitlines()))
        assert len(rows) == 2

    def test_main_missing_companies_file(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--companies", str(tmp_path / "nope.json")])
        assert exc.value.code == 1

    def test_main_invalid_criteria(self, companies_json, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"province": "Bangkok", "provinceWeight": -1}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["--companies", str(companies_json), "--criteria", str(bad)])
        assert exc.value.code == 1

    def test_main_infinite_weight(self, companies_json, tmp_path):
        bad = tmp_path / "inf.json"
        bad.write_text(json.dumps({"province": "Bangkok", "provinceWeight": float("inf")}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["--companies", str(companies_json), "--criteria", str(bad)])
        assert exc.value.code == 1

    def test_main_unknown_preset(self, companies_json, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--companies", str(companies_json), "--preset", "Nope"])
        assert exc.value.code == 1
