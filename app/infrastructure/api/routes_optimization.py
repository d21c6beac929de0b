"""Optimization endpoints — assignment, candidate preview, rebalancing, scheduling."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.application.errors import (
    OptimizationError,
    WorkOrderNotAssignableError,
    WorkOrderNotFoundError,
)
from app.application.use_cases.optimize_assignments import (
    AssignWorkOrderUseCase,
    OptimizeAssignmentsUseCase,
    PreviewCandidatesUseCase,
)
from app.application.use_cases.optimize_schedule import OptimizeScheduleUseCase
from app.application.use_cases.rebalance_workload import RebalanceWorkloadUseCase
from app.domain.entities.assignment import AssignmentResult, CandidateAssignment
from app.infrastructure.api.dependencies import (
    get_assign_work_order_uc,
    get_company_id,
    get_optimize_assignments_uc,
    get_optimize_schedule_uc,
    get_preview_candidates_uc,
    get_rebalance_workload_uc,
)

router = APIRouter(prefix="/optimization", tags=["optimization"])


@router.post("/assignments")
async def optimize_assignments(
    company_id: int = Depends(get_company_id),
    uc: OptimizeAssignmentsUseCase = Depends(get_optimize_assignments_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign all unassigned work orders of the company (all or nothing)."""
    try:
        results = await uc.execute(company_id)
    except OptimizationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    await session.commit()

    return {
        "status": "ok",
        "total_assigned": len(results),
        "assignments": [_result_to_dict(r) for r in results],
    }


@router.post("/work-orders/{work_order_id}")
async def assign_work_order(
    work_order_id: int,
    company_id: int = Depends(get_company_id),
    uc: AssignWorkOrderUseCase = Depends(get_assign_work_order_uc),
    session: AsyncSession = Depends(get_session),
):
    """Assign one work order to its best technician."""
    try:
        result = await uc.execute(company_id, work_order_id)
    except WorkOrderNotFoundError:
        raise HTTPException(status_code=404, detail="Work order not found")
    except WorkOrderNotAssignableError as e:
        raise HTTPException(status_code=409, detail=str(e))

    # Also keeps any coordinates geocoded while resolving locations
    await session.commit()

    if result is None:
        return {"status": "unassigned", "work_order_id": work_order_id, "assignment": None}
    return {"status": "ok", "work_order_id": work_order_id, "assignment": _result_to_dict(result)}


@router.get("/work-orders/{work_order_id}/candidates")
async def preview_candidates(
    work_order_id: int,
    company_id: int = Depends(get_company_id),
    uc: PreviewCandidatesUseCase = Depends(get_preview_candidates_uc),
    session: AsyncSession = Depends(get_session),
):
    """Ranked technicians for a work order; no assignment is made.

    Coordinates geocoded for address-only locations are still committed.
    """
    try:
        candidates = await uc.execute(company_id, work_order_id)
    except WorkOrderNotFoundError:
        raise HTTPException(status_code=404, detail="Work order not found")
    await session.commit()

    return {
        "work_order_id": work_order_id,
        "total": len(candidates),
        "candidates": [_candidate_to_dict(c) for c in candidates],
    }


@router.post("/rebalance")
async def rebalance_workload(
    company_id: int = Depends(get_company_id),
    uc: RebalanceWorkloadUseCase = Depends(get_rebalance_workload_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        plan = await uc.execute(company_id)
    except OptimizationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    await session.commit()

    return {
        "status": plan.outcome.value,
        "total_reassignments": plan.total_reassignments,
        "reassignments": [
            {
                "work_order_id": r.work_order_id,
                "from_technician_id": r.from_technician_id,
                "to_technician_id": r.to_technician_id,
                "reason": r.reason.value,
            }
            for r in plan.reassignments
        ],
    }


@router.post("/schedule")
async def optimize_schedule(
    start: date,
    end: date,
    company_id: int = Depends(get_company_id),
    uc: OptimizeScheduleUseCase = Depends(get_optimize_schedule_uc),
):
    """Spread the period's work orders over its days and report utilization."""
    try:
        result = await uc.execute(company_id, start, end)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except OptimizationError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "schedule": {
            day.isoformat(): [o.id for o in orders]
            for day, orders in result.schedule.items()
        },
        "metrics": {
            "total_work_orders": result.metrics.total_work_orders,
            "average_daily_work_orders": result.metrics.average_daily_work_orders,
            "utilization_rate": result.metrics.utilization_rate,
        },
        "efficiency_score": result.efficiency_score,
        "suggestions": result.suggestions,
    }


def _result_to_dict(r: AssignmentResult) -> dict:
    return {
        "work_order_id": r.work_order_id,
        "technician_id": r.technician_id,
        "score": round(r.score, 4),
        "estimated_travel_minutes": r.estimated_travel_minutes,
        "reason_code": r.reason_code.value,
        "assignment_method": r.assignment_method,
        "skill_score": r.skill_score,
        "distance_score": r.distance_score,
        "workload_score": r.workload_score,
        "priority_score": r.priority_score,
    }


def _candidate_to_dict(c: CandidateAssignment) -> dict:
    return {
        "technician_id": c.technician_id,
        "score": round(c.score, 4),
        "distance_km": round(c.distance_km, 2),
        "estimated_travel_minutes": c.estimated_travel_minutes,
        "reason_code": c.reason_code.value,
        "skill_score": c.skill_score,
        "distance_score": c.distance_score,
        "workload_score": c.workload_score,
        "priority_score": c.priority_score,
    }
