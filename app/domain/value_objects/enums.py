"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class WorkOrderPriority(str, Enum):
    EMERGENCY = "EMERGENCY"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    SCHEDULED = "SCHEDULED"

    @property
    def sort_order(self) -> int:
        return _PRIORITY_SORT_ORDER[self]

    @property
    def response_time_hours(self) -> int | None:
        """Target response time; scheduled maintenance follows its own plan."""
        return _PRIORITY_RESPONSE_HOURS[self]

    def is_critical(self) -> bool:
        return self in (WorkOrderPriority.EMERGENCY, WorkOrderPriority.HIGH)


_PRIORITY_SORT_ORDER = {
    WorkOrderPriority.EMERGENCY: 1,
    WorkOrderPriority.HIGH: 2,
    WorkOrderPriority.MEDIUM: 3,
    WorkOrderPriority.LOW: 4,
    WorkOrderPriority.SCHEDULED: 5,
}

_PRIORITY_RESPONSE_HOURS = {
    WorkOrderPriority.EMERGENCY: 4,
    WorkOrderPriority.HIGH: 24,
    WorkOrderPriority.MEDIUM: 72,
    WorkOrderPriority.LOW: 168,
    WorkOrderPriority.SCHEDULED: None,
}


class WorkOrderStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    VERIFIED = "VERIFIED"

    def is_active(self) -> bool:
        return self in (
            WorkOrderStatus.ASSIGNED,
            WorkOrderStatus.IN_PROGRESS,
            WorkOrderStatus.ON_HOLD,
        )

    def is_final(self) -> bool:
        return self in (
            WorkOrderStatus.COMPLETED,
            WorkOrderStatus.CANCELLED,
            WorkOrderStatus.VERIFIED,
        )


# Statuses counted toward a technician's current workload
OPEN_WORKLOAD_STATUSES = (WorkOrderStatus.ASSIGNED, WorkOrderStatus.IN_PROGRESS)


class SkillCategory(str, Enum):
    ELECTRICAL = "ELECTRICAL"
    PLUMBING = "PLUMBING"
    HVAC = "HVAC"
    CARPENTRY = "CARPENTRY"
    GENERAL = "GENERAL"


class ReasonCode(str, Enum):
    EXCELLENT_SKILL_MATCH = "EXCELLENT_SKILL_MATCH"
    PROXIMITY_OPTIMIZATION = "PROXIMITY_OPTIMIZATION"
    WORKLOAD_BALANCING = "WORKLOAD_BALANCING"
    PRIORITY_ASSIGNMENT = "PRIORITY_ASSIGNMENT"
    BALANCED_OPTIMIZATION = "BALANCED_OPTIMIZATION"
    WORKLOAD_REBALANCING = "WORKLOAD_REBALANCING"


class RebalanceOutcome(str, Enum):
    NO_REBALANCING_NEEDED = "NO_REBALANCING_NEEDED"
    NO_SUITABLE_ALTERNATIVES = "NO_SUITABLE_ALTERNATIVES"
    REBALANCING_COMPLETED = "REBALANCING_COMPLETED"
