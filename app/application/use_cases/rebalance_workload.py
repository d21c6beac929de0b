"""RebalanceWorkloadUseCase — move open work from overloaded technicians."""

from __future__ import annotations

import logging

from app.application.errors import OptimizationError
from app.application.ports.technician_repo import TechnicianRepository
from app.application.ports.work_order_repo import WorkOrderRepository
from app.domain.policies.workload import is_overloaded
from app.domain.policies.workload_rebalance import RebalancePlan, plan_rebalance
from app.domain.value_objects.enums import RebalanceOutcome, WorkOrderStatus

logger = logging.getLogger(__name__)


class RebalanceWorkloadUseCase:
    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
    ):
        self._work_orders = work_order_repo
        self._technicians = technician_repo

    async def execute(self, company_id: int) -> RebalancePlan:
        logger.info("Starting workload rebalancing for company %s", company_id)
        try:
            technicians = await self._technicians.get_available(company_id)

            assigned_orders = {}
            for technician in technicians:
                if is_overloaded(technician.current_load):
                    assigned_orders[technician.id] = await self._work_orders.get_by_assignee(
                        technician.id, [WorkOrderStatus.ASSIGNED]
                    )

            plan = plan_rebalance(technicians, assigned_orders)
            if plan.outcome == RebalanceOutcome.NO_REBALANCING_NEEDED:
                logger.info("No workload rebalancing needed - all technicians within optimal range")
                return plan

            orders_by_id = {
                o.id: o for orders in assigned_orders.values() for o in orders
            }
            for move in plan.reassignments:
                order = orders_by_id[move.work_order_id]
                order.assigned_to = move.to_technician_id
                await self._work_orders.update(order)
                logger.info(
                    "Reassigned work order %s from technician %s to %s",
                    move.work_order_id, move.from_technician_id, move.to_technician_id,
                )

            logger.info(
                "Workload rebalancing completed. Made %d reassignments (%s)",
                plan.total_reassignments, plan.outcome.value,
            )
            return plan

        except Exception as e:
            logger.exception("Error during workload rebalancing")
            raise OptimizationError("Failed to rebalance workload") from e
