"""API tests for cycle settings, daily logs, phase and analytics."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from src.routers.tests.conftest import TEST_TODAY, TEST_USER_ID

SETTINGS_ROW = {
    "user_id": TEST_USER_ID,
    "avg_cycle_length": 28,
    "last_period_start": date(2024, 1, 1),
    "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
    "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
}


def echo_log(user_id: Any, log_date: date, **fields: Any) -> dict[str, Any]:
    return {"user_id": user_id, "date": log_date, **fields}


@pytest.fixture(autouse=True)
def frozen_today(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("src.routers.daily_logs.utc_today", lambda: TEST_TODAY)
    monkeypatch.setattr("src.routers.phase.utc_today", lambda: TEST_TODAY)


# ---------------------------------------------------------------------------
# Cycle settings
# ---------------------------------------------------------------------------


class TestCycleSettings:
    def test_get_missing_is_404(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        response = client.get("/api/v1/cycle-settings", headers=auth_headers)
        assert response.status_code == 404
        store["get_settings"].assert_awaited_once_with(TEST_USER_ID)

    def test_get(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        response = client.get("/api/v1/cycle-settings", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["avg_cycle_length"] == 28
        assert response.json()["last_period_start"] == "2024-01-01"

    def test_put_upserts(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["upsert_settings"].return_value = {**SETTINGS_ROW, "avg_cycle_length": 30}
        response = client.put(
            "/api/v1/cycle-settings",
            headers=auth_headers,
            json={"avg_cycle_length": 30, "last_period_start": "2024-01-01"},
        )
        assert response.status_code == 200
        store["upsert_settings"].assert_awaited_once_with(TEST_USER_ID, 30, date(2024, 1, 1))

    @pytest.mark.parametrize("length", [0, -5])
    def test_non_positive_length_rejected(
        self, client: TestClient, auth_headers: dict, store: dict, length: int
    ) -> None:
        response = client.put(
            "/api/v1/cycle-settings",
            headers=auth_headers,
            json={"avg_cycle_length": length, "last_period_start": "2024-01-01"},
        )
        assert response.status_code == 422
        store["upsert_settings"].assert_not_awaited()


# ---------------------------------------------------------------------------
# Daily logs
# ---------------------------------------------------------------------------


class TestDailyLogs:
    def test_save_snapshots_estimated_phase(
        self, client: TestClient, auth_headers: dict, store: dict
    ) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        store["upsert_log"].side_effect = echo_log

        response = client.put(
            "/api/v1/daily-logs/2024-01-13",
            headers=auth_headers,
            json={"mood": 4, "energy": 5, "notes": "  good day  "},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["cycle_day"] == 13
        assert body["cycle_phase"] == "Ovulatory (estimated)"
        assert body["flow"] == "none"
        assert body["notes"] == "good day"

    def test_logged_flow_overrides_estimate(
        self, client: TestClient, auth_headers: dict, store: dict
    ) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        store["upsert_log"].side_effect = echo_log

        response = client.put(
            "/api/v1/daily-logs/2024-01-18",
            headers=auth_headers,
            json={"flow": "Heavy"},
        )

        kwargs = store["upsert_log"].call_args.kwargs
        assert kwargs["flow"] == "heavy"
        assert kwargs["cycle_day"] is None
        assert kwargs["cycle_phase"] == "Menstrual (logged)"
        assert response.json()["flow"] == "heavy"

    def test_save_without_settings_is_unknown(
        self, client: TestClient, auth_headers: dict, store: dict
    ) -> None:
        store["upsert_log"].side_effect = echo_log
        response = client.put(
            "/api/v1/daily-logs/2024-01-13", headers=auth_headers, json={"notes": "   "}
        )
        kwargs = store["upsert_log"].call_args.kwargs
        assert kwargs["cycle_phase"] == "Unknown"
        assert kwargs["notes"] is None
        assert response.json()["cycle_day"] is None

    def test_future_date_rejected(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        response = client.put(
            "/api/v1/daily-logs/2024-02-16", headers=auth_headers, json={"mood": 3}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Future logging is disabled"
        store["upsert_log"].assert_not_awaited()

    def test_today_allowed(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["upsert_log"].side_effect = echo_log
        response = client.put(
            f"/api/v1/daily-logs/{TEST_TODAY.isoformat()}", headers=auth_headers, json={}
        )
        assert response.status_code == 200

    @pytest.mark.parametrize("payload", [{"mood": 0}, {"energy": 6}, {"flow": "gushing"}])
    def test_invalid_payload(
        self, client: TestClient, auth_headers: dict, store: dict, payload: dict
    ) -> None:
        response = client.put("/api/v1/daily-logs/2024-01-13", headers=auth_headers, json=payload)
        assert response.status_code == 422

    def test_get_missing_is_404(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        response = client.get("/api/v1/daily-logs/2024-01-13", headers=auth_headers)
        assert response.status_code == 404
        store["get_log"].assert_awaited_once_with(TEST_USER_ID, date(2024, 1, 13))

    def test_get_normalizes_stored_flow(
        self, client: TestClient, auth_headers: dict, store: dict
    ) -> None:
        store["get_log"].return_value = echo_log(
            TEST_USER_ID, date(2024, 1, 13), flow=None, mood=3
        )
        response = client.get("/api/v1/daily-logs/2024-01-13", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["flow"] == "none"

    def test_list_passes_range(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["list_logs"].return_value = [
            echo_log(TEST_USER_ID, date(2024, 1, 1), flow="light"),
            echo_log(TEST_USER_ID, date(2024, 1, 2), flow="none"),
        ]
        response = client.get(
            "/api/v1/daily-logs?start_date=2024-01-01&end_date=2024-01-31",
            headers=auth_headers,
        )
        assert [log["date"] for log in response.json()] == ["2024-01-01", "2024-01-02"]
        store["list_logs"].assert_awaited_once_with(
            TEST_USER_ID, date(2024, 1, 1), date(2024, 1, 31)
        )


# ---------------------------------------------------------------------------
# Phase
# ---------------------------------------------------------------------------


class TestPhase:
    def test_estimated(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        response = client.get("/api/v1/phase?date=2024-01-18", headers=auth_headers)
        assert response.json() == {
            "date": "2024-01-18",
            "cycle_day": 18,
            "phase": "Luteal",
            "phase_source": "estimated",
            "label": "Luteal (estimated)",
        }

    def test_logged_flow_for_the_day(
        self, client: TestClient, auth_headers: dict, store: dict
    ) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        store["get_log"].return_value = {"flow": "spotting"}
        response = client.get("/api/v1/phase?date=2024-01-18", headers=auth_headers)
        body = response.json()
        assert body["phase"] == "Menstrual"
        assert body["phase_source"] == "logged"
        assert body["cycle_day"] is None

    def test_defaults_to_today(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["get_settings"].return_value = SETTINGS_ROW
        response = client.get("/api/v1/phase", headers=auth_headers)
        # 2024-02-15 is 45 days after 2024-01-01 -> day 18 of the second cycle
        assert response.json()["date"] == TEST_TODAY.isoformat()
        assert response.json()["cycle_day"] == 18
        store["get_log"].assert_awaited_once_with(TEST_USER_ID, TEST_TODAY)

    def test_no_settings(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        response = client.get("/api/v1/phase?date=2024-01-18", headers=auth_headers)
        assert response.json()["phase"] == "Unknown"
        assert response.json()["phase_source"] == "unknown"


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


class TestAnalytics:
    def test_series_and_summary(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        store["list_logs"].return_value = [
            {"date": date(2024, 1, 1), "mood": 2, "energy": 1, "cycle_day": None,
             "cycle_phase": "Menstrual (logged)"},
            {"date": date(2024, 1, 13), "mood": 5, "energy": None, "cycle_day": 13,
             "cycle_phase": "Ovulatory (estimated)"},
        ]
        response = client.get("/api/v1/analytics", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["mood"] == [
            {"x": 0, "y": 2, "date": "2024-01-01"},
            {"x": 13, "y": 5, "date": "2024-01-13"},
        ]
        assert [p["y"] for p in body["energy"]] == [1, 0]
        assert [s["phase"] for s in body["phases"]] == ["Menstrual", "Ovulatory"]
        assert body["phases"][1]["avg_energy"] is None

    def test_empty(self, client: TestClient, auth_headers: dict, store: dict) -> None:
        body = client.get("/api/v1/analytics", headers=auth_headers).json()
        assert body["mood"] == []
        assert body["energy"] == []
        assert body["phases"] == []
