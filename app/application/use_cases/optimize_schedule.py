"""OptimizeScheduleUseCase — distribute a period's work orders across days."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from app.application.errors import OptimizationError
from app.application.ports.technician_repo import TechnicianRepository
from app.application.ports.work_order_repo import WorkOrderRepository
from app.domain.policies.schedule import ScheduleOptimization, optimize_schedule

logger = logging.getLogger(__name__)


class OptimizeScheduleUseCase:
    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
    ):
        self._work_orders = work_order_repo
        self._technicians = technician_repo

    async def execute(self, company_id: int, start: date, end: date) -> ScheduleOptimization:
        """Build the schedule for [start, end], both days inclusive.

        Raises:
            ValueError: if end is before start.
            OptimizationError: on any other failure.
        """
        if end < start:
            raise ValueError("Schedule end date must not be before start date")

        logger.info("Optimizing schedule from %s to %s for company %s", start, end, company_id)
        try:
            work_orders = await self._work_orders.get_created_between(
                company_id,
                datetime.combine(start, time.min),
                datetime.combine(end + timedelta(days=1), time.min),
            )
            technicians = await self._technicians.get_available(company_id)
            result = optimize_schedule(work_orders, len(technicians), start, end)
            logger.info(
                "Schedule optimized: %d orders, utilization %.2f, efficiency %.2f",
                result.metrics.total_work_orders,
                result.metrics.utilization_rate,
                result.efficiency_score,
            )
            return result

        except Exception as e:
            logger.exception("Error during schedule optimization")
            raise OptimizationError("Failed to optimize schedule") from e
