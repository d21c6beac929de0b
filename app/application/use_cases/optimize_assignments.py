"""Assignment use cases — batch optimization, single assignment, candidate preview."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from app.application.errors import (
    OptimizationError,
    WorkOrderNotAssignableError,
    WorkOrderNotFoundError,
)
from app.application.ports.location_repo import LocationRepository
from app.application.ports.technician_repo import TechnicianRepository
from app.application.ports.work_order_repo import WorkOrderRepository
from app.domain.entities.assignment import AssignmentResult, CandidateAssignment
from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.policies.assignment_scoring import (
    estimate_completion,
    find_optimal_technician,
    rank_candidates,
)
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)


async def resolve_locations(
    locations: LocationRepository,
    work_orders: list[WorkOrder],
    technicians: list[Technician],
) -> dict[str, GeoPoint]:
    """Resolve every site and technician reference needed for one scoring pass."""
    refs = {o.site_ref for o in work_orders if o.site_ref}
    refs |= {t.location_ref for t in technicians if t.location_ref}
    resolved = await locations.resolve_many(refs)

    missing = refs - resolved.keys()
    if missing:
        logger.warning("No location available for %d reference(s): %s", len(missing), sorted(missing))
    return resolved


class _AssignmentApplier:
    """Shared apply step: the only place a selected candidate mutates state."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._work_orders = work_order_repo
        self._clock = clock

    async def _apply(
        self,
        work_order: WorkOrder,
        candidate: CandidateAssignment,
        technicians: list[Technician],
    ) -> AssignmentResult:
        now = self._clock()
        work_order.assign(
            technician_id=candidate.technician_id,
            assigned_at=now,
            scheduled_end=estimate_completion(candidate, now),
        )
        await self._work_orders.update(work_order)

        # Keep the in-memory pool current so later orders in the same
        # run see this technician's new workload.
        for technician in technicians:
            if technician.id == candidate.technician_id:
                technician.current_load += 1
                break

        logger.info(
            "Assigned work order %s to technician %s with score %.2f (%s)",
            work_order.id, candidate.technician_id,
            candidate.score, candidate.reason_code.value,
        )
        return AssignmentResult.from_candidate(candidate, work_order.id)


class OptimizeAssignmentsUseCase(_AssignmentApplier):
    """Assign every unassigned work order of a company to its best technician."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
        location_repo: LocationRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(work_order_repo, clock)
        self._technicians = technician_repo
        self._locations = location_repo

    async def execute(self, company_id: int) -> list[AssignmentResult]:
        """Run one optimization pass.

        Orders are processed most urgent first. Each assignment is applied
        before the next order is scored.

        Raises:
            OptimizationError: on any unexpected failure. The caller should
                roll back; no partial-result contract exists.
        """
        logger.info("Starting work order optimization for company %s", company_id)
        try:
            orders = await self._work_orders.get_unassigned(company_id)
            if not orders:
                logger.info("No unassigned work orders found for optimization")
                return []

            technicians = await self._technicians.get_available(company_id)
            if not technicians:
                logger.warning("No available technicians found for work order assignment")
                return []

            locations = await resolve_locations(self._locations, orders, technicians)

            results: list[AssignmentResult] = []
            for order in orders:
                candidate = find_optimal_technician(order, technicians, locations)
                if candidate is None:
                    logger.warning("No suitable technician found for work order %s", order.id)
                    continue
                results.append(await self._apply(order, candidate, technicians))

            logger.info(
                "Work order optimization completed. Assigned %d out of %d orders",
                len(results), len(orders),
            )
            return results

        except Exception as e:
            logger.exception("Error during work order optimization")
            raise OptimizationError("Failed to optimize work orders") from e


class AssignWorkOrderUseCase(_AssignmentApplier):
    """Assign a single work order to its best technician."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
        location_repo: LocationRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(work_order_repo, clock)
        self._technicians = technician_repo
        self._locations = location_repo

    async def execute(self, company_id: int, work_order_id: int) -> AssignmentResult | None:
        order = await _load_order(self._work_orders, company_id, work_order_id)
        if not order.is_unassigned():
            reason = (
                f"already assigned to technician {order.assigned_to}"
                if order.assigned_to is not None
                else f"status is {order.status.value}"
            )
            raise WorkOrderNotAssignableError(work_order_id, reason)

        technicians = await self._technicians.get_available(company_id)
        locations = await resolve_locations(self._locations, [order], technicians)
        candidate = find_optimal_technician(order, technicians, locations)
        if candidate is None:
            logger.warning("No suitable technician found for work order %s", order.id)
            return None
        return await self._apply(order, candidate, technicians)


class PreviewCandidatesUseCase:
    """Rank technicians for a work order without applying anything."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
        location_repo: LocationRepository,
    ):
        self._work_orders = work_order_repo
        self._technicians = technician_repo
        self._locations = location_repo

    async def execute(self, company_id: int, work_order_id: int) -> list[CandidateAssignment]:
        order = await _load_order(self._work_orders, company_id, work_order_id)
        technicians = await self._technicians.get_available(company_id)
        locations = await resolve_locations(self._locations, [order], technicians)
        return rank_candidates(order, technicians, locations)


async def _load_order(
    work_orders: WorkOrderRepository, company_id: int, work_order_id: int
) -> WorkOrder:
    order = await work_orders.get_by_id(work_order_id)
    # Another tenant's order is reported as missing
    if order is None or order.company_id != company_id:
        raise WorkOrderNotFoundError(work_order_id)
    return order
