"""WorkloadRebalancePolicy — move work off overloaded technicians."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.policies.skill_match import skill_match_score
from app.domain.policies.workload import (
    MAX_DAILY_ASSIGNMENTS,
    is_overloaded,
    is_underutilized,
)
from app.domain.value_objects.enums import ReasonCode, RebalanceOutcome, WorkOrderStatus

MAX_REASSIGNABLE_PER_TECHNICIAN = 3


@dataclass(frozen=True)
class Reassignment:
    work_order_id: int
    from_technician_id: int
    to_technician_id: int
    reason: ReasonCode = ReasonCode.WORKLOAD_REBALANCING


@dataclass
class RebalancePlan:
    reassignments: list[Reassignment] = field(default_factory=list)
    outcome: RebalanceOutcome = RebalanceOutcome.NO_REBALANCING_NEEDED
    final_loads: dict[int, int] = field(default_factory=dict)

    @property
    def total_reassignments(self) -> int:
        return len(self.reassignments)


def plan_rebalance(
    technicians: list[Technician],
    assigned_orders: Mapping[int, list[WorkOrder]],
) -> RebalancePlan:
    """Plan reassignments from overloaded (> 8) to underutilized (< 4) technicians.

    For every overloaded technician (heaviest first), up to three of its
    ASSIGNED work orders are offered, one at a time, to the underutilized
    technician with the best skill match (lowest id on ties). A technician
    stops receiving once it is no longer underutilized, and the donor
    stops giving once it is back within the daily cap.

    Inputs are not mutated; loads are tracked in the returned plan.

    Args:
        technicians: the tenant's technician pool with current loads.
        assigned_orders: technician id → that technician's open work orders.
    """
    loads = {t.id: t.current_load for t in technicians}
    overloaded = sorted(
        (t for t in technicians if is_overloaded(t.current_load)),
        key=lambda t: (-t.current_load, t.id),
    )
    if not overloaded:
        return RebalancePlan(final_loads=loads)

    receivers = [t for t in technicians if is_underutilized(t.current_load)]
    reassignments: list[Reassignment] = []

    for donor in overloaded:
        orders = [
            o for o in assigned_orders.get(donor.id, [])
            if o.status == WorkOrderStatus.ASSIGNED
        ][:MAX_REASSIGNABLE_PER_TECHNICIAN]

        for order in orders:
            eligible = [
                t for t in receivers
                if t.id != donor.id and is_underutilized(loads[t.id])
            ]
            if not eligible:
                break

            target = max(
                eligible,
                key=lambda t: (skill_match_score(order.description, t.skills), -t.id),
            )
            reassignments.append(
                Reassignment(
                    work_order_id=order.id,
                    from_technician_id=donor.id,
                    to_technician_id=target.id,
                )
            )
            loads[donor.id] -= 1
            loads[target.id] += 1

            if loads[donor.id] <= MAX_DAILY_ASSIGNMENTS:
                break

    outcome = (
        RebalanceOutcome.REBALANCING_COMPLETED
        if reassignments
        else RebalanceOutcome.NO_SUITABLE_ALTERNATIVES
    )
    return RebalancePlan(reassignments=reassignments, outcome=outcome, final_loads=loads)
