"""Tests for WorkloadRebalancePolicy."""

from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.policies.workload_rebalance import plan_rebalance
from app.domain.value_objects.enums import ReasonCode, RebalanceOutcome, WorkOrderStatus


def _tech(tid: int, load: int, skills=None) -> Technician:
    return Technician(id=tid, company_id=1, name=f"Tech {tid}", skills=set(skills or ()), current_load=load)


def _assigned(oid: int, technician_id: int, description=None, status=WorkOrderStatus.ASSIGNED) -> WorkOrder:
    return WorkOrder(
        id=oid, company_id=1, work_order_number=f"WO-{oid}", title="Job",
        description=description, status=status, assigned_to=technician_id,
    )


def test_nothing_overloaded():
    plan = plan_rebalance([_tech(1, 5), _tech(2, 3)], {})
    assert plan.outcome == RebalanceOutcome.NO_REBALANCING_NEEDED
    assert plan.total_reassignments == 0
    assert plan.final_loads == {1: 5, 2: 3}


def test_exactly_at_cap_is_not_overloaded():
    plan = plan_rebalance([_tech(1, 8), _tech(2, 0)], {1: [_assigned(10, 1)]})
    assert plan.outcome == RebalanceOutcome.NO_REBALANCING_NEEDED


def test_donor_stops_once_back_within_cap():
    orders = {1: [_assigned(10, 1), _assigned(11, 1), _assigned(12, 1)]}
    plan = plan_rebalance([_tech(1, 10), _tech(2, 0)], orders)

    assert plan.outcome == RebalanceOutcome.REBALANCING_COMPLETED
    assert [r.work_order_id for r in plan.reassignments] == [10, 11]
    assert all(r.to_technician_id == 2 for r in plan.reassignments)
    assert all(r.reason == ReasonCode.WORKLOAD_REBALANCING for r in plan.reassignments)
    assert plan.final_loads == {1: 8, 2: 2}


def test_no_underutilized_receivers():
    orders = {1: [_assigned(10, 1)]}
    plan = plan_rebalance([_tech(1, 10), _tech(2, 6)], orders)
    assert plan.outcome == RebalanceOutcome.NO_SUITABLE_ALTERNATIVES
    assert plan.reassignments == []


def test_best_skill_match_receives():
    orders = {1: [_assigned(10, 1, description="Plumbing leak under the sink")]}
    pool = [_tech(1, 9), _tech(2, 0, {"ELECTRICAL"}), _tech(3, 1, {"PLUMBING"})]
    plan = plan_rebalance(pool, orders)
    assert plan.reassignments[0].to_technician_id == 3


def test_at_most_three_orders_per_donor():
    orders = {1: [_assigned(i, 1) for i in range(10, 15)]}
    pool = [_tech(1, 15), _tech(2, 0), _tech(3, 0), _tech(4, 0)]
    plan = plan_rebalance(pool, orders)

    assert plan.total_reassignments == 3
    assert plan.final_loads[1] == 12


def test_receiver_stops_once_no_longer_underutilized():
    orders = {1: [_assigned(10, 1), _assigned(11, 1), _assigned(12, 1)]}
    plan = plan_rebalance([_tech(1, 12), _tech(2, 3)], orders)

    assert plan.outcome == RebalanceOutcome.REBALANCING_COMPLETED
    assert plan.total_reassignments == 1
    assert plan.final_loads == {1: 11, 2: 4}


def test_only_assigned_orders_are_moved():
    orders = {1: [_assigned(10, 1, status=WorkOrderStatus.IN_PROGRESS), _assigned(11, 1)]}
    plan = plan_rebalance([_tech(1, 9), _tech(2, 0)], orders)
    assert [r.work_order_id for r in plan.reassignments] == [11]


def test_heaviest_donor_goes_first():
    orders = {
        1: [_assigned(10, 1), _assigned(11, 1)],
        2: [_assigned(20, 2), _assigned(21, 2), _assigned(22, 2)],
    }
    plan = plan_rebalance([_tech(1, 9), _tech(2, 11), _tech(3, 2)], orders)

    assert [r.work_order_id for r in plan.reassignments] == [20, 21]
    assert {r.from_technician_id for r in plan.reassignments} == {2}


def test_inputs_are_not_mutated():
    pool = [_tech(1, 10), _tech(2, 0)]
    orders = {1: [_assigned(10, 1)]}
    plan_rebalance(pool, orders)

    assert [t.current_load for t in pool] == [10, 0]
    assert orders[1][0].assigned_to == 1
