"""Analytics endpoints — work order summary + technician workload."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.models import WorkOrderModel
from app.adapters.persistence.repositories import SqlTechnicianRepository
from app.domain.policies.workload import (
    MAX_DAILY_ASSIGNMENTS,
    is_overloaded,
    is_underutilized,
    workload_score,
)
from app.domain.value_objects.enums import WorkOrderStatus
from app.infrastructure.api.dependencies import get_company_id, get_technician_repo

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary")
async def analytics_summary(
    company_id: int = Depends(get_company_id),
    session: AsyncSession = Depends(get_session),
):
    """Work order counts for the dashboard."""
    total = (
        await session.execute(
            select(func.count(WorkOrderModel.id)).where(WorkOrderModel.company_id == company_id)
        )
    ).scalar() or 0

    # By status
    status_rows = (
        await session.execute(
            select(WorkOrderModel.status, func.count(WorkOrderModel.id))
            .where(WorkOrderModel.company_id == company_id)
            .group_by(WorkOrderModel.status)
        )
    ).all()
    by_status = {row[0]: row[1] for row in status_rows}

    # By priority
    priority_rows = (
        await session.execute(
            select(WorkOrderModel.priority, func.count(WorkOrderModel.id))
            .where(WorkOrderModel.company_id == company_id)
            .group_by(WorkOrderModel.priority)
        )
    ).all()
    by_priority = {row[0]: row[1] for row in priority_rows}

    unassigned = (
        await session.execute(
            select(func.count(WorkOrderModel.id)).where(
                WorkOrderModel.company_id == company_id,
                WorkOrderModel.status == WorkOrderStatus.PENDING.value,
                WorkOrderModel.assigned_to.is_(None),
            )
        )
    ).scalar() or 0

    return {
        "total_work_orders": total,
        "unassigned": unassigned,
        "by_status": by_status,
        "by_priority": by_priority,
    }


@router.get("/workload")
async def technician_workload(
    company_id: int = Depends(get_company_id),
    repo: SqlTechnicianRepository = Depends(get_technician_repo),
):
    """Technician load distribution against the daily cap."""
    technicians = sorted(
        await repo.get_all(company_id), key=lambda t: (-t.current_load, t.id)
    )

    return {
        "max_daily_assignments": MAX_DAILY_ASSIGNMENTS,
        "total_technicians": len(technicians),
        "overloaded": [t.id for t in technicians if is_overloaded(t.current_load)],
        "underutilized": [t.id for t in technicians if is_underutilized(t.current_load)],
        "technicians": [
            {
                "id": t.id,
                "name": t.name,
                "current_load": t.current_load,
                "workload_score": workload_score(t.current_load),
            }
            for t in technicians
        ],
    }
