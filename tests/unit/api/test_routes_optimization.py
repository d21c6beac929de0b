"""Tests for optimization endpoints with use cases and session overridden."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.adapters.persistence.database import get_session
from app.application.errors import (
    OptimizationError,
    WorkOrderNotAssignableError,
    WorkOrderNotFoundError,
)
from app.domain.entities.assignment import AssignmentResult, CandidateAssignment
from app.domain.policies.workload_rebalance import Reassignment, RebalancePlan
from app.domain.value_objects.enums import ReasonCode, RebalanceOutcome
from app.infrastructure.api.dependencies import (
    get_assign_work_order_uc,
    get_optimize_assignments_uc,
    get_optimize_schedule_uc,
    get_preview_candidates_uc,
    get_rebalance_workload_uc,
)
from app.main import app

HEADERS = {"X-Company-ID": "1"}


class FakeSession:
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


class StubUseCase:
    """Returns a canned result, or raises it if it is an exception."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []

    async def execute(self, *args):
        self.calls.append(args)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(session):
    async def _session():
        try:
            yield session
        except Exception:
            await session.rollback()
            raise

    app.dependency_overrides[get_session] = _session
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def _override(dependency, outcome) -> StubUseCase:
    stub = StubUseCase(outcome)
    app.dependency_overrides[dependency] = lambda: stub
    return stub


def _result(work_order_id=5, technician_id=2) -> AssignmentResult:
    return AssignmentResult(
        work_order_id=work_order_id, technician_id=technician_id, score=0.95512,
        estimated_travel_minutes=12, reason_code=ReasonCode.EXCELLENT_SKILL_MATCH,
    )


# ─── Batch assignment ───────────────────────────────────────────────


def test_batch_assignment_commits(client, session):
    stub = _override(get_optimize_assignments_uc, [_result()])

    resp = client.post("/api/optimization/assignments", headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert body["total_assigned"] == 1
    assert body["assignments"][0]["score"] == 0.9551
    assert body["assignments"][0]["reason_code"] == "EXCELLENT_SKILL_MATCH"
    assert stub.calls == [(1,)]
    assert session.commits == 1


def test_batch_assignment_failure_is_not_committed(client, session):
    _override(get_optimize_assignments_uc, OptimizationError("Failed to optimize work orders"))

    resp = client.post("/api/optimization/assignments", headers=HEADERS)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to optimize work orders"
    assert session.commits == 0


def test_company_header_is_required(client):
    _override(get_optimize_assignments_uc, [])
    resp = client.post("/api/optimization/assignments")
    assert resp.status_code == 422


# ─── Single assignment ──────────────────────────────────────────────


def test_single_assignment(client, session):
    _override(get_assign_work_order_uc, _result())

    resp = client.post("/api/optimization/work-orders/5", headers=HEADERS)

    assert resp.status_code == 200
    assert resp.json()["assignment"]["technician_id"] == 2
    assert session.commits == 1


def test_single_assignment_not_found(client):
    _override(get_assign_work_order_uc, WorkOrderNotFoundError(5))
    resp = client.post("/api/optimization/work-orders/5", headers=HEADERS)
    assert resp.status_code == 404


def test_single_assignment_conflict(client):
    _override(get_assign_work_order_uc, WorkOrderNotAssignableError(5, "status is COMPLETED"))
    resp = client.post("/api/optimization/work-orders/5", headers=HEADERS)
    assert resp.status_code == 409
    assert "status is COMPLETED" in resp.json()["detail"]


def test_single_assignment_without_candidate(client, session):
    _override(get_assign_work_order_uc, None)

    resp = client.post("/api/optimization/work-orders/5", headers=HEADERS)

    assert resp.status_code == 200
    assert resp.json() == {"status": "unassigned", "work_order_id": 5, "assignment": None}
    assert session.commits == 1


# ─── Candidate preview ─────────────────────────────────────────────


def test_preview_commits_resolved_locations(client, session):
    candidate = CandidateAssignment(
        technician_id=2, work_order_id=5, skill_score=1.0, distance_score=0.9,
        workload_score=1.0, priority_score=0.5, distance_km=5.123, score=0.935,
        estimated_travel_minutes=12, reason_code=ReasonCode.EXCELLENT_SKILL_MATCH,
    )
    _override(get_preview_candidates_uc, [candidate])

    resp = client.get("/api/optimization/work-orders/5/candidates", headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 1
    assert body["candidates"][0]["distance_km"] == 5.12
    assert session.commits == 1


def test_preview_unknown_order(client, session):
    _override(get_preview_candidates_uc, WorkOrderNotFoundError(5))
    resp = client.get("/api/optimization/work-orders/5/candidates", headers=HEADERS)
    assert resp.status_code == 404
    assert session.commits == 0


# ─── Rebalance & schedule ───────────────────────────────────────────


def test_rebalance_reports_outcome(client, session):
    plan = RebalancePlan(
        reassignments=[Reassignment(work_order_id=10, from_technician_id=1, to_technician_id=2)],
        outcome=RebalanceOutcome.REBALANCING_COMPLETED,
    )
    _override(get_rebalance_workload_uc, plan)

    resp = client.post("/api/optimization/rebalance", headers=HEADERS)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "REBALANCING_COMPLETED"
    assert body["reassignments"][0]["reason"] == "WORKLOAD_REBALANCING"
    assert session.commits == 1


def test_schedule_reversed_period(client):
    stub = _override(get_optimize_schedule_uc, ValueError("Schedule end date must not be before start date"))

    resp = client.post(
        "/api/optimization/schedule",
        params={"start": "2026-03-05", "end": "2026-03-02"},
        headers=HEADERS,
    )

    assert resp.status_code == 422
    assert stub.calls == [(1, date(2026, 3, 5), date(2026, 3, 2))]


# ─── Health ─────────────────────────────────────────────────────────


class UnreachableSession(FakeSession):
    async def execute(self, statement):
        raise ConnectionRefusedError("connection refused")


def test_health_reports_degraded_database():
    async def _session():
        yield UnreachableSession()

    app.dependency_overrides[get_session] = _session
    try:
        resp = TestClient(app).get("/api/health")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    assert resp.json()["status"] == "degraded"
    assert resp.json()["database"].startswith("error:")
