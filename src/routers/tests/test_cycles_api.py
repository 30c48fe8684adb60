"""Tests for the cycle log HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from src.dependencies import get_tracker
from src.main import create_app
from src.tracker.config_loader import load_tracker_config
from src.tracker.cycle_tracker import CycleTracker
from src.tracker.tests.conftest import scripted


@pytest.fixture
def tracker() -> CycleTracker:
    return CycleTracker(config=load_tracker_config(), rng_factory=scripted(28, 30))


@pytest.fixture
def client(tracker: CycleTracker) -> Iterator[TestClient]:
    app = create_app()
    app.dependency_overrides[get_tracker] = lambda: tracker
    with TestClient(app) as test_client:
        yield test_client


def post_cycle(client: TestClient, start: str, end: str, symptoms: list[str] | None = None):
    return client.post(
        "/api/v1/cycles",
        json={"start_date": start, "end_date": end, "symptoms": symptoms or []},
    )


class TestCreateCycle:
    def test_records_cycle_and_returns_advisories(self, client: TestClient) -> None:
        response = post_cycle(client, "01-01-2024", "31-01-2024", ["cramps", "unknown"])
        assert response.status_code == 201
        body = response.json()
        assert body["cycle"] == {
            "start_date": "01-01-2024",
            "end_date": "31-01-2024",
            "symptoms": ["cramps", "unknown"],
            "length_days": 30,
        }
        assert [a["symptom"] for a in body["advisories"]] == ["cramps"]
        assert body["average_cycle_length"] == 29

    def test_malformed_date_rejected(self, client: TestClient, tracker: CycleTracker) -> None:
        response = post_cycle(client, "2024-01-01", "31-01-2024")
        assert response.status_code == 422
        assert tracker.cycle_count == 0

    def test_start_after_end_rejected(self, client: TestClient, tracker: CycleTracker) -> None:
        response = post_cycle(client, "10-01-2024", "01-01-2024")
        assert response.status_code == 422
        assert tracker.cycle_count == 0
        assert tracker.average_cycle_length == 28

    def test_missing_end_date_rejected(self, client: TestClient) -> None:
        response = client.post("/api/v1/cycles", json={"start_date": "01-01-2024"})
        assert response.status_code == 422


class TestListCycles:
    def test_empty_log(self, client: TestClient) -> None:
        response = client.get("/api/v1/cycles")
        assert response.status_code == 200
        assert response.json() == {"cycles": [], "average_cycle_length": 28}

    def test_entry_order_preserved(self, client: TestClient) -> None:
        post_cycle(client, "01-03-2024", "05-03-2024")
        post_cycle(client, "01-01-2024", "05-01-2024")
        starts = [c["start_date"] for c in client.get("/api/v1/cycles").json()["cycles"]]
        assert starts == ["01-03-2024", "01-01-2024"]

    def test_latest_cycle_404_when_empty(self, client: TestClient) -> None:
        response = client.get("/api/v1/cycles/latest")
        assert response.status_code == 404
        assert response.json()["detail"] == "No cycles have been recorded"

    def test_latest_cycle(self, client: TestClient) -> None:
        post_cycle(client, "01-03-2024", "05-03-2024", ["nausea"])
        response = client.get("/api/v1/cycles/latest")
        assert response.status_code == 200
        assert response.json()["symptoms"] == ["nausea"]


class TestPredictions:
    def test_no_data_is_not_an_error(self, client: TestClient) -> None:
        response = client.get("/api/v1/cycles/predictions")
        assert response.status_code == 200
        body = response.json()
        assert body["no_data"] is True
        assert body["predictions"] == []
        assert body["message"] == "No period data available to predict future periods."

    def test_two_predictions(self, client: TestClient) -> None:
        post_cycle(client, "01-01-2024", "05-01-2024")
        body = client.get("/api/v1/cycles/predictions").json()
        assert body["no_data"] is False
        assert body["anchor_date"] == "05-01-2024"
        assert [p["predicted_start"] for p in body["predictions"]] == [
            "02-02-2024",
            "03-03-2024",
        ]
        assert body["predictions"][0]["ovulation_date"] == "19-01-2024"
        assert body["predictions"][0]["fertile_start"] == "17-01-2024"
        assert body["predictions"][0]["fertile_end"] == "20-01-2024"

    def test_dates_past_year_9999_return_200(self, client: TestClient) -> None:
        assert post_cycle(client, "01-12-9999", "20-12-9999").status_code == 201
        response = client.get("/api/v1/cycles/predictions")
        assert response.status_code == 200
        body = response.json()
        assert body["out_of_range"] is True
        assert body["no_data"] is False
        assert body["predictions"] == []
        assert body["anchor_date"] == "20-12-9999"
        assert "31-12-9999" in body["message"]


class TestIrregularities:
    def test_flags_long_gap(self, client: TestClient) -> None:
        post_cycle(client, "01-01-2024", "29-01-2024")
        post_cycle(client, "15-02-2024", "14-03-2024")
        body = client.get("/api/v1/cycles/irregularities").json()
        assert body == [
            {
                "previous_start": "01-01-2024",
                "current_start": "15-02-2024",
                "gap_days": 45,
                "average_cycle_length": 28,
                "deviation_days": 17,
            }
        ]

    def test_regular_cycles_return_empty(self, client: TestClient) -> None:
        post_cycle(client, "01-01-2024", "29-01-2024")
        post_cycle(client, "29-01-2024", "26-02-2024")
        assert client.get("/api/v1/cycles/irregularities").json() == []


class TestHealth:
    def test_reports_cycle_count(self, client: TestClient) -> None:
        post_cycle(client, "01-01-2024", "05-01-2024")
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["cycles_recorded"] == 1
