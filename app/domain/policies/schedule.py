"""SchedulePolicy — spread work orders over a period and measure the result."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from app.domain.entities.work_order import WorkOrder
from app.domain.policies.workload import MAX_DAILY_ASSIGNMENTS

UTILIZATION_WEIGHT = 0.6
DAILY_LOAD_WEIGHT = 0.4

LOW_UTILIZATION = 0.6
HIGH_UTILIZATION = 0.9
NEAR_CAPACITY_SHARE = 0.8


@dataclass(frozen=True)
class ScheduleMetrics:
    total_work_orders: int
    average_daily_work_orders: float
    utilization_rate: float


@dataclass
class ScheduleOptimization:
    schedule: dict[date, list[WorkOrder]]
    metrics: ScheduleMetrics
    efficiency_score: float
    suggestions: list[str] = field(default_factory=list)


def build_daily_schedule(
    work_orders: list[WorkOrder],
    start: date,
    end: date,
) -> dict[date, list[WorkOrder]]:
    """Place each order on the least-booked day (earliest on ties).

    Orders are taken most urgent first, then oldest first.
    """
    if end < start:
        raise ValueError("Schedule end date must not be before start date")

    days = (end - start).days + 1
    schedule: dict[date, list[WorkOrder]] = {
        start + timedelta(days=i): [] for i in range(days)
    }

    ordered = sorted(
        work_orders,
        key=lambda o: (o.priority.sort_order, o.created_at or datetime.min, o.id or 0),
    )
    for order in ordered:
        day = min(schedule, key=lambda d: (len(schedule[d]), d))
        schedule[day].append(order)
    return schedule


def compute_metrics(schedule: dict[date, list[WorkOrder]], technician_count: int) -> ScheduleMetrics:
    total = sum(len(orders) for orders in schedule.values())
    average = total / len(schedule) if schedule else 0.0
    capacity = technician_count * len(schedule) * MAX_DAILY_ASSIGNMENTS
    utilization = total / capacity if capacity else 0.0
    return ScheduleMetrics(
        total_work_orders=total,
        average_daily_work_orders=average,
        utilization_rate=utilization,
    )


def efficiency_score(metrics: ScheduleMetrics) -> float:
    return (
        metrics.utilization_rate * UTILIZATION_WEIGHT
        + (metrics.average_daily_work_orders / MAX_DAILY_ASSIGNMENTS) * DAILY_LOAD_WEIGHT
    )


def suggestions_for(metrics: ScheduleMetrics) -> list[str]:
    suggestions = []
    if metrics.utilization_rate < LOW_UTILIZATION:
        suggestions.append(
            "Consider reducing technician count or increasing work order intake"
        )
    if metrics.utilization_rate > HIGH_UTILIZATION:
        suggestions.append(
            "Consider hiring additional technicians to handle high workload"
        )
    if metrics.average_daily_work_orders > MAX_DAILY_ASSIGNMENTS * NEAR_CAPACITY_SHARE:
        suggestions.append(
            "Schedule shows near-capacity utilization - monitor for potential delays"
        )
    return suggestions


def optimize_schedule(
    work_orders: list[WorkOrder],
    technician_count: int,
    start: date,
    end: date,
) -> ScheduleOptimization:
    schedule = build_daily_schedule(work_orders, start, end)
    metrics = compute_metrics(schedule, technician_count)
    return ScheduleOptimization(
        schedule=schedule,
        metrics=metrics,
        efficiency_score=efficiency_score(metrics),
        suggestions=suggestions_for(metrics),
    )
