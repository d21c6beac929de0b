"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import case, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import LocationModel, TechnicianModel, WorkOrderModel
from app.application.ports.geocoder_port import GeocoderPort
from app.application.ports.location_repo import LocationRepository
from app.application.ports.technician_repo import TechnicianRepository
from app.application.ports.work_order_repo import WorkOrderRepository
from app.domain.entities.location import Location
from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.value_objects.enums import (
    OPEN_WORKLOAD_STATUSES,
    WorkOrderPriority,
    WorkOrderStatus,
)
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _work_order_to_domain(m: WorkOrderModel) -> WorkOrder:
    return WorkOrder(
        id=m.id,
        company_id=m.company_id,
        work_order_number=m.work_order_number,
        title=m.title,
        description=m.description,
        priority=WorkOrderPriority(m.priority),
        status=WorkOrderStatus(m.status),
        assigned_to=m.assigned_to,
        site_ref=m.site_ref,
        created_at=m.created_at,
        assignment_date=m.assignment_date,
        scheduled_start=m.scheduled_start,
        scheduled_end=m.scheduled_end,
    )


def _technician_to_domain(m: TechnicianModel, current_load: int = 0) -> Technician:
    return Technician(
        id=m.id,
        company_id=m.company_id,
        name=m.name,
        email=m.email,
        skills=set(m.skills) if m.skills else set(),
        location_ref=m.location_ref,
        current_load=current_load,
        is_available=m.is_available,
    )


def _location_point(m: LocationModel) -> GeoPoint | None:
    if m.latitude is not None and m.longitude is not None:
        return GeoPoint(latitude=m.latitude, longitude=m.longitude)
    return None


# Most urgent first: EMERGENCY=1 … SCHEDULED=5
_PRIORITY_ORDER = case(
    {p.value: p.sort_order for p in WorkOrderPriority},
    value=WorkOrderModel.priority,
    else_=len(WorkOrderPriority) + 1,
)

# ─── Repositories ────────────────────────────────────────────────────


class SqlWorkOrderRepository(WorkOrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, work_order: WorkOrder) -> WorkOrder:
        m = WorkOrderModel(
            company_id=work_order.company_id,
            work_order_number=work_order.work_order_number,
            title=work_order.title,
            description=work_order.description,
            priority=work_order.priority.value,
            status=work_order.status.value,
            assigned_to=work_order.assigned_to,
            site_ref=work_order.site_ref,
            assignment_date=work_order.assignment_date,
            scheduled_start=work_order.scheduled_start,
            scheduled_end=work_order.scheduled_end,
        )
        if work_order.created_at is not None:
            m.created_at = work_order.created_at
        self._s.add(m)
        await self._s.flush()
        work_order.id = m.id
        work_order.created_at = m.created_at
        return work_order

    async def get_by_id(self, work_order_id: int) -> WorkOrder | None:
        m = await self._s.get(WorkOrderModel, work_order_id)
        return _work_order_to_domain(m) if m else None

    async def get_all(self, company_id: int) -> list[WorkOrder]:
        result = await self._s.execute(
            select(WorkOrderModel)
            .where(WorkOrderModel.company_id == company_id)
            .order_by(WorkOrderModel.id)
        )
        return [_work_order_to_domain(m) for m in result.scalars()]

    async def get_unassigned(self, company_id: int) -> list[WorkOrder]:
        result = await self._s.execute(
            select(WorkOrderModel)
            .where(
                WorkOrderModel.company_id == company_id,
                WorkOrderModel.status == WorkOrderStatus.PENDING.value,
                WorkOrderModel.assigned_to.is_(None),
            )
            .order_by(_PRIORITY_ORDER, WorkOrderModel.created_at, WorkOrderModel.id)
        )
        return [_work_order_to_domain(m) for m in result.scalars()]

    async def get_by_assignee(
        self, technician_id: int, statuses: list[WorkOrderStatus]
    ) -> list[WorkOrder]:
        result = await self._s.execute(
            select(WorkOrderModel)
            .where(
                WorkOrderModel.assigned_to == technician_id,
                WorkOrderModel.status.in_([s.value for s in statuses]),
            )
            .order_by(WorkOrderModel.id)
        )
        return [_work_order_to_domain(m) for m in result.scalars()]

    async def get_created_between(
        self, company_id: int, start: datetime, end: datetime
    ) -> list[WorkOrder]:
        result = await self._s.execute(
            select(WorkOrderModel)
            .where(
                WorkOrderModel.company_id == company_id,
                WorkOrderModel.created_at >= start,
                WorkOrderModel.created_at < end,
            )
            .order_by(WorkOrderModel.id)
        )
        return [_work_order_to_domain(m) for m in result.scalars()]

    async def update(self, work_order: WorkOrder) -> WorkOrder:
        await self._s.execute(
            update(WorkOrderModel)
            .where(WorkOrderModel.id == work_order.id)
            .values(
                status=work_order.status.value,
                assigned_to=work_order.assigned_to,
                assignment_date=work_order.assignment_date,
                scheduled_start=work_order.scheduled_start,
                scheduled_end=work_order.scheduled_end,
            )
        )
        await self._s.flush()
        return work_order


class SqlTechnicianRepository(TechnicianRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, technician: Technician) -> Technician:
        m = TechnicianModel(
            company_id=technician.company_id,
            name=technician.name,
            email=technician.email,
            skills=sorted(technician.skills),
            location_ref=technician.location_ref,
            is_available=technician.is_available,
        )
        self._s.add(m)
        await self._s.flush()
        technician.id = m.id
        return technician

    async def get_by_id(self, technician_id: int) -> Technician | None:
        rows = await self._with_load(TechnicianModel.id == technician_id)
        return rows[0] if rows else None

    async def get_all(self, company_id: int) -> list[Technician]:
        return await self._with_load(TechnicianModel.company_id == company_id)

    async def get_available(self, company_id: int) -> list[Technician]:
        return await self._with_load(
            TechnicianModel.company_id == company_id,
            TechnicianModel.is_available.is_(True),
        )

    async def _with_load(self, *criteria) -> list[Technician]:
        """Technicians matching criteria, each with its open-order count."""
        load = (
            select(
                WorkOrderModel.assigned_to.label("technician_id"),
                func.count(WorkOrderModel.id).label("open_count"),
            )
            .where(WorkOrderModel.status.in_([s.value for s in OPEN_WORKLOAD_STATUSES]))
            .group_by(WorkOrderModel.assigned_to)
            .subquery()
        )
        result = await self._s.execute(
            select(TechnicianModel, func.coalesce(load.c.open_count, 0))
            .outerjoin(load, load.c.technician_id == TechnicianModel.id)
            .where(*criteria)
            .order_by(TechnicianModel.id)
        )
        return [_technician_to_domain(m, count) for m, count in result.all()]


class SqlLocationRepository(LocationRepository):
    """Locations table, with optional geocoding of address-only rows."""

    def __init__(self, session: AsyncSession, geocoder: GeocoderPort | None = None):
        self._s = session
        self._geocoder = geocoder

    async def save(self, location: Location) -> Location:
        m = LocationModel(
            ref=location.ref,
            name=location.name,
            address=location.address,
            latitude=location.point.latitude if location.point else None,
            longitude=location.point.longitude if location.point else None,
        )
        self._s.add(m)
        await self._s.flush()
        return location

    async def resolve_many(self, refs: set[str]) -> dict[str, GeoPoint]:
        if not refs:
            return {}

        result = await self._s.execute(
            select(LocationModel).where(LocationModel.ref.in_(sorted(refs)))
        )
        resolved: dict[str, GeoPoint] = {}
        for m in result.scalars():
            point = _location_point(m)
            if point is None and m.address and self._geocoder is not None:
                point = await self._geocoder.geocode(m.address)
                if point is not None:
                    m.latitude = point.latitude
                    m.longitude = point.longitude
                    logger.info("Location %s geocoded from address", m.ref)
            if point is not None:
                resolved[m.ref] = point

        await self._s.flush()
        return resolved
