"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from leadscore.api.main import app


@pytest.fixture
def client():
    return TestClient(app)


def make_company(**kwargs) -> dict:
    """Create a raw company payload with defaults."""
    defaults = {
        "id": "c1",
        "companyNameEn": "ABC Manufacturing Co., Ltd.",
        "industrialName": "Manufacturing",
        "province": "Bangkok",
        "companySize": "L",
        "verificationStatus": "Active",
        "dataCompleteness": 80,
    }
    defaults.update(kwargs)
    return defaults


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestScoreEndpoint:

    def test_score(self, client):
        response = client.post("/api/score", json={
            "company": make_company(),
            "criteria": {
                "industrial": "Logistics", "industrialWeight": 20,
                "province": "Bangkok", "provinceWeight": 15,
            },
        })
        assert response.status_code == 200
        data = response.json()
        assert data["companyId"] == "c1"
        assert data["score"] == 15
        assert data["maxPossibleScore"] == 35
        assert data["normalizedScore"] == 43
        assert data["matchingSummary"]["province"] is True

    def test_score_without_criteria(self, client):
        response = client.post("/api/score", json={"company": make_company()})
        assert response.status_code == 200
        assert response.json()["normalizedScore"] == 0

    def test_negative_weight_rejected(self, client):
        response = client.post("/api/score", json={
            "company": make_company(),
            "criteria": {"province": "Bangkok", "provinceWeight": -15},
        })
        assert response.status_code == 422


class TestBasicScoreEndpoint:

    def test_basic_score(self, client):
        response = client.post("/api/basic-score", json={
            "company": make_company(),
            "industrial": "Manufacturing",
            "province": "Bangkok",
        })
        assert response.status_code == 200
        assert response.json()["score"] == 43


class TestRankEndpoint:

    def _companies(self):
        return [
            make_company(id="a", province="Phuket"),
            make_company(id="b"),
            make_company(id="c", industrialName="Retail", province="Phuket"),
        ]

    def test_rank_and_filter(self, client):
        response = client.post("/api/rank", json={
            "companies": self._companies(),
            "criteria": {
                "industrial": "Manufacturing", "industrialWeight": 20,
                "province": "Bangkok", "provinceWeight": 20,
                "minimumScore": 50,
            },
            "save": False,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["runId"] is None
        assert data["totalScored"] == 3
        assert data["totalResults"] == 2
        assert [r["record"]["id"] for r in data["results"]] == ["b", "a"]
        assert [r["rank"] for r in data["results"]] == [1, 2]
        assert [r["score"]["normalizedScore"] for r in data["results"]] == [100, 50]

    def test_minimum_score_overrides_criteria(self, client):
        response = client.post("/api/rank", json={
            "companies": [make_company(id="a"), make_company(id="b", industrialName="Retail")],
            "criteria": {"industrial": "Manufacturing", "industrialWeight": 10},
            "minimumScore": 50,
            "save": False,
        })
        assert response.status_code == 200
        data = response.json()
        assert data["totalResults"] == 1
        assert data["results"][0]["record"]["id"] == "a"

    def test_criteria_threshold_kept_without_minimum_score(self, client):
        response = client.post("/api/rank", json={
            "companies": [make_company(id="a"), make_company(id="b", industrialName="Retail")],
            "criteria": {"industrial": "Manufacturing", "industrialWeight": 10, "minimumScore": 50},
            "save": False,
        })
        assert response.json()["totalResults"] == 1

    def test_infinite_weight_rejected(self, client):
        body = (
            '{"companies": [{"id": "a"}], "save": false,'
            ' "criteria": {"industrial": "Manufacturing", "industrialWeight": Infinity}}'
        )
        response = client.post(
            "/api/rank",
            content=body,
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 422

    def test_rank_with_preset(self, client):
        response = client.post("/api/rank", json={
            "companies": self._companies(),
            "preset": "Manufacturing B2B",
            "values": {"industrial": "Manufacturing", "companySize": "L"},
            "save": False,
        })
        assert response.status_code == 200
        results = response.json()["results"]
        assert results[0]["score"]["maxPossibleScore"] == 55
        assert results[0]["score"]["normalizedScore"] == 100
        assert results[-1]["record"]["id"] == "c"

    def test_unknown_preset(self, client):
        response = client.post("/api/rank", json={
            "companies": self._companies(),
            "preset": "Nope",
        })
        assert response.status_code == 404

    def test_fills_completeness(self, client):
        response = client.post("/api/rank", json={
            "companies": [{"id": "x", "companyNameEn": "Acme"}],
            "save": False,
        })
        assert response.json()["results"][0]["record"]["dataCompleteness"] == 13

    def test_saved_run_results_and_export(self, client):
        response = client.post("/api/rank", json={
            "companies": self._companies(),
            "criteria": {"province": "Bangkok", "provinceWeight": 10},
        })
        run_id = response.json()["runId"]
        assert run_id

        results = client.get(f"/api/results/{run_id}")
        assert results.status_code == 200
        data = results.json()
        assert data["status"] == "completed"
        assert data["totalResults"] == 3
        assert data["results"][0]["record"]["id"] == "b"
        assert data["results"][0]["score"]["matchingSummary"]["province"] is True

        export = client.get(f"/api/export/{run_id}")
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        lines = export.text.strip().splitlines()
        assert lines[0].startswith("Rank,Company ID")
        assert len(lines) == 4

    def test_results_not_found(self, client):
        assert client.get("/api/results/missing").status_code == 404

    def test_export_not_found(self, client):
        assert client.get("/api/export/missing").status_code == 404


class TestPresetsEndpoint:

    def test_list_presets(self, client):
        response = client.get("/api/presets")
        assert response.status_code == 200
        names = [p["name"] for p in response.json()]
        assert "Logistics Focus" in names
