"""Tests for the JSON web API.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from py_sched.config import DEFAULT_QUANTUM  # noqa: E402
from py_sched.web.app import create_app  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
_POLICY_COUNT = 7

_REFERENCE = [
    {"id": "P1", "arrival_time": 0, "burst_time": 5},
    {"id": "P2", "arrival_time": 1, "burst_time": 3},
    {"id": "P3", "arrival_time": 2, "burst_time": 1},
]


def _create_client() -> Any:
    """Create a test client from a fresh app."""
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify the app factory."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)


class TestPoliciesEndpoint:
    """Verify GET /api/policies."""

    def test_lists_policies(self) -> None:
        """All seven policies and the default quantum are listed."""
        response = _create_client().get("/api/policies")
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert len(data["policies"]) == _POLICY_COUNT
        assert data["default_quantum"] == DEFAULT_QUANTUM
        rr = next(p for p in data["policies"] if p["id"] == "rr")
        assert rr["uses_quantum"] is True
        assert rr["name"] == "Round Robin"


class TestSimulateEndpoint:
    """Verify POST /api/simulate."""

    def test_fcfs_trace(self) -> None:
        """The FCFS reference trace comes back as JSON."""
        response = _create_client().post("/api/simulate", json={"policy": "fcfs", "processes": _REFERENCE})
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert [(b["process_id"], b["start"], b["end"]) for b in data["timeline"]] == [
            ("P1", 0, 5),
            ("P2", 5, 8),
            ("P3", 8, 9),
        ]
        assert data["average_waiting_time"] == pytest.approx(10 / 3)

    def test_round_robin_quantum(self) -> None:
        """The quantum is honoured."""
        response = _create_client().post(
            "/api/simulate",
            json={"policy": "rr", "quantum": 1, "processes": _REFERENCE},
        )
        assert response.status_code == HTTP_OK
        assert all(b["end"] - b["start"] == 1 for b in response.get_json()["timeline"])

    def test_idle_block_serialised(self) -> None:
        """Idle blocks have no process id and the idle flag set."""
        processes = [{"id": "A", "arrival_time": 0, "burst_time": 1}, {"id": "B", "arrival_time": 3, "burst_time": 1}]
        response = _create_client().post("/api/simulate", json={"policy": "srtf", "processes": processes})
        idle = response.get_json()["timeline"][1]
        assert idle["process_id"] is None
        assert idle["idle"] is True

    def test_missing_body(self) -> None:
        """A request without JSON is rejected."""
        response = _create_client().post("/api/simulate")
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_missing_policy(self) -> None:
        """The policy field is required."""
        response = _create_client().post("/api/simulate", json={"processes": _REFERENCE})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "policy" in response.get_json()["error"]

    def test_unknown_policy(self) -> None:
        """Unknown policies are a client error."""
        response = _create_client().post("/api/simulate", json={"policy": "lottery", "processes": _REFERENCE})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "Unknown policy" in response.get_json()["error"]

    def test_invalid_quantum(self) -> None:
        """A zero quantum is rejected, not clamped."""
        response = _create_client().post(
            "/api/simulate",
            json={"policy": "rr", "quantum": 0, "processes": _REFERENCE},
        )
        assert response.status_code == HTTP_BAD_REQUEST

    def test_duplicate_ids(self) -> None:
        """Duplicate ids are reported by name."""
        processes = [*_REFERENCE, {"id": "P1", "arrival_time": 4, "burst_time": 1}]
        response = _create_client().post("/api/simulate", json={"policy": "fcfs", "processes": processes})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "'P1'" in response.get_json()["error"]

    def test_missing_processes(self) -> None:
        """The processes list is required."""
        response = _create_client().post("/api/simulate", json={"policy": "fcfs"})
        assert response.status_code == HTTP_BAD_REQUEST


class TestCompareEndpoint:
    """Verify POST /api/compare."""

    def test_returns_every_policy(self) -> None:
        """Metrics are returned for all seven policies."""
        response = _create_client().post("/api/compare", json={"processes": _REFERENCE})
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert len(data) == _POLICY_COUNT
        assert data["srtf"]["average_waiting_time"] == pytest.approx(5 / 3)

    def test_empty_processes(self) -> None:
        """An empty workload gives all-zero metrics."""
        response = _create_client().post("/api/compare", json={"processes": []})
        assert response.status_code == HTTP_OK
        assert response.get_json()["fcfs"]["throughput"] == 0

    def test_policy_field_is_ignored(self) -> None:
        """Compare runs every policy, so a stray policy field is not validated."""
        response = _create_client().post("/api/compare", json={"policy": 5, "processes": _REFERENCE})
        assert response.status_code == HTTP_OK
        assert len(response.get_json()) == _POLICY_COUNT

    def test_invalid_quantum_rejected(self) -> None:
        """A non-positive quantum is a 400."""
        response = _create_client().post("/api/compare", json={"quantum": 0, "processes": _REFERENCE})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "quantum" in response.get_json()["error"].lower()
