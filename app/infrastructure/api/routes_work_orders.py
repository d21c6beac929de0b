"""Work order and technician read endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.adapters.persistence.repositories import SqlTechnicianRepository, SqlWorkOrderRepository
from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.policies.workload import workload_score
from app.domain.value_objects.enums import WorkOrderStatus
from app.infrastructure.api.dependencies import (
    get_company_id,
    get_technician_repo,
    get_work_order_repo,
)

router = APIRouter(tags=["work-orders"])


@router.get("/work-orders")
async def list_work_orders(
    status: WorkOrderStatus | None = None,
    company_id: int = Depends(get_company_id),
    repo: SqlWorkOrderRepository = Depends(get_work_order_repo),
):
    """List the company's work orders, optionally filtered by status."""
    orders = await repo.get_all(company_id)
    if status is not None:
        orders = [o for o in orders if o.status == status]
    return {"total": len(orders), "work_orders": [_serialize_work_order(o) for o in orders]}


@router.get("/work-orders/{work_order_id}")
async def get_work_order(
    work_order_id: int,
    company_id: int = Depends(get_company_id),
    repo: SqlWorkOrderRepository = Depends(get_work_order_repo),
):
    order = await repo.get_by_id(work_order_id)
    if not order or order.company_id != company_id:
        raise HTTPException(status_code=404, detail="Work order not found")
    return _serialize_work_order(order)


@router.get("/technicians")
async def list_technicians(
    company_id: int = Depends(get_company_id),
    repo: SqlTechnicianRepository = Depends(get_technician_repo),
):
    """Technician pool with current load and spare capacity."""
    technicians = await repo.get_all(company_id)
    return {
        "total": len(technicians),
        "technicians": [_serialize_technician(t) for t in technicians],
    }


def _serialize_work_order(o: WorkOrder) -> dict:
    return {
        "id": o.id,
        "company_id": o.company_id,
        "work_order_number": o.work_order_number,
        "title": o.title,
        "description": o.description,
        "priority": o.priority.value,
        "status": o.status.value,
        "assigned_to": o.assigned_to,
        "site_ref": o.site_ref,
        "created_at": o.created_at.isoformat() if o.created_at else None,
        "assignment_date": o.assignment_date.isoformat() if o.assignment_date else None,
        "scheduled_start": o.scheduled_start.isoformat() if o.scheduled_start else None,
        "scheduled_end": o.scheduled_end.isoformat() if o.scheduled_end else None,
    }


def _serialize_technician(t: Technician) -> dict:
    return {
        "id": t.id,
        "name": t.name,
        "email": t.email,
        "skills": sorted(t.skills),
        "location_ref": t.location_ref,
        "is_available": t.is_available,
        "current_load": t.current_load,
        "workload_score": workload_score(t.current_load),
    }
