"""PriorityPolicy — fixed weight per work-order priority."""

from app.domain.value_objects.enums import WorkOrderPriority

PRIORITY_WEIGHTS: dict[WorkOrderPriority, float] = {
    WorkOrderPriority.EMERGENCY: 1.0,
    WorkOrderPriority.HIGH: 0.8,
    WorkOrderPriority.MEDIUM: 0.5,
    WorkOrderPriority.LOW: 0.2,
    WorkOrderPriority.SCHEDULED: 0.1,
}


def priority_weight(priority: WorkOrderPriority) -> float:
    return PRIORITY_WEIGHTS[priority]
