"""WorkOrder entity — a unit of maintenance work at a school/site."""

from dataclasses import dataclass
from datetime import datetime

from app.domain.value_objects.enums import WorkOrderPriority, WorkOrderStatus


@dataclass
class WorkOrder:
    id: int | None
    company_id: int
    work_order_number: str
    title: str
    description: str | None
    priority: WorkOrderPriority = WorkOrderPriority.MEDIUM
    status: WorkOrderStatus = WorkOrderStatus.PENDING
    assigned_to: int | None = None
    site_ref: str | None = None
    created_at: datetime | None = None
    assignment_date: datetime | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None

    def is_unassigned(self) -> bool:
        return self.status == WorkOrderStatus.PENDING and self.assigned_to is None

    def assign(self, technician_id: int, assigned_at: datetime, scheduled_end: datetime) -> None:
        """Apply a selected assignment to this work order."""
        self.assigned_to = technician_id
        self.status = WorkOrderStatus.ASSIGNED
        self.assignment_date = assigned_at
        self.scheduled_end = scheduled_end
