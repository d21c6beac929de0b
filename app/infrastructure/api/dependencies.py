"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.geocoder.nominatim_adapter import NominatimAdapter
from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import (
    SqlLocationRepository,
    SqlTechnicianRepository,
    SqlWorkOrderRepository,
)
from app.application.use_cases.optimize_assignments import (
    AssignWorkOrderUseCase,
    OptimizeAssignmentsUseCase,
    PreviewCandidatesUseCase,
)
from app.application.use_cases.optimize_schedule import OptimizeScheduleUseCase
from app.application.use_cases.rebalance_workload import RebalanceWorkloadUseCase
from app.config import settings

logger = logging.getLogger(__name__)

# Singleton adapter (internal caching)
_geocoder_adapter = NominatimAdapter() if settings.geocoder_enabled else None
if _geocoder_adapter is None:
    logger.info("Geocoding disabled; locations without coordinates stay unresolved")


def get_company_id(x_company_id: int = Header(..., description="Tenant (company) id")) -> int:
    return x_company_id


def get_work_order_repo(session: AsyncSession = Depends(get_session)) -> SqlWorkOrderRepository:
    return SqlWorkOrderRepository(session)


def get_technician_repo(session: AsyncSession = Depends(get_session)) -> SqlTechnicianRepository:
    return SqlTechnicianRepository(session)


def get_location_repo(session: AsyncSession = Depends(get_session)) -> SqlLocationRepository:
    return SqlLocationRepository(session, geocoder=_geocoder_adapter)


def get_optimize_assignments_uc(
    session: AsyncSession = Depends(get_session),
) -> OptimizeAssignmentsUseCase:
    return OptimizeAssignmentsUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
        location_repo=SqlLocationRepository(session, geocoder=_geocoder_adapter),
    )


def get_assign_work_order_uc(
    session: AsyncSession = Depends(get_session),
) -> AssignWorkOrderUseCase:
    return AssignWorkOrderUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
        location_repo=SqlLocationRepository(session, geocoder=_geocoder_adapter),
    )


def get_preview_candidates_uc(
    session: AsyncSession = Depends(get_session),
) -> PreviewCandidatesUseCase:
    return PreviewCandidatesUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
        location_repo=SqlLocationRepository(session, geocoder=_geocoder_adapter),
    )


def get_rebalance_workload_uc(
    session: AsyncSession = Depends(get_session),
) -> RebalanceWorkloadUseCase:
    return RebalanceWorkloadUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
    )


def get_optimize_schedule_uc(
    session: AsyncSession = Depends(get_session),
) -> OptimizeScheduleUseCase:
    return OptimizeScheduleUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
    )
