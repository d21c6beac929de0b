"""AssignmentScoringPolicy — multi-factor technician scoring for a work order."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta

from app.domain.entities.assignment import CandidateAssignment
from app.domain.entities.technician import Technician
from app.domain.entities.work_order import WorkOrder
from app.domain.policies.distance import (
    DistanceEstimate,
    estimate_distance,
    within_travel_radius,
)
from app.domain.policies.priority import priority_weight
from app.domain.policies.skill_match import skill_match_score
from app.domain.policies.workload import workload_score
from app.domain.value_objects.enums import ReasonCode
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

SKILL_MATCH_WEIGHT = 0.35
DISTANCE_WEIGHT = 0.25
WORKLOAD_WEIGHT = 0.20
PRIORITY_WEIGHT = 0.20

MIN_SKILL_SCORE = 0.3
PROXIMITY_THRESHOLD_KM = 5.0
BASE_COMPLETION_HOURS = 4


def combine_scores(
    skill_score: float,
    normalized_distance: float,
    workload: float,
    priority: float,
) -> float:
    """Weighted sum of the four signals, kept inside [0, 1]."""
    overall = (
        skill_score * SKILL_MATCH_WEIGHT
        + (1.0 - normalized_distance) * DISTANCE_WEIGHT
        + workload * WORKLOAD_WEIGHT
        + priority * PRIORITY_WEIGHT
    )
    return min(1.0, max(0.0, overall))


def determine_reason(
    skill_score: float,
    distance_km: float,
    workload: float,
    priority: float,
) -> ReasonCode:
    """Explain the assignment. Rules are checked in order; first match wins."""
    if skill_score > 0.8:
        return ReasonCode.EXCELLENT_SKILL_MATCH
    if distance_km < PROXIMITY_THRESHOLD_KM:
        return ReasonCode.PROXIMITY_OPTIMIZATION
    if workload > 0.8:
        return ReasonCode.WORKLOAD_BALANCING
    if priority > 0.8:
        return ReasonCode.PRIORITY_ASSIGNMENT
    return ReasonCode.BALANCED_OPTIMIZATION


def score_candidate(
    work_order: WorkOrder,
    technician: Technician,
    locations: Mapping[str, GeoPoint],
) -> CandidateAssignment | None:
    """Score one technician for one work order, or None if filtered out.

    Filters, in order:
      1. skill score below 0.3, checked before anything else is computed.
      2. either location unresolved.
      3. distance above the travel radius.

    Args:
        work_order: the order being dispatched.
        technician: the candidate.
        locations: resolved coordinates keyed by location reference.
    """
    skill = skill_match_score(work_order.description, technician.skills)
    if skill < MIN_SKILL_SCORE:
        logger.debug(
            "Technician %s skipped for work order %s: skill score %.2f",
            technician.id, work_order.id, skill,
        )
        return None

    distance = _distance_for(work_order, technician, locations)
    if distance is None or not within_travel_radius(distance):
        logger.debug(
            "Technician %s skipped for work order %s: distance %s",
            technician.id, work_order.id,
            "unavailable" if distance is None else f"{distance.distance_km:.1f} km",
        )
        return None

    workload = workload_score(technician.current_load)
    priority = priority_weight(work_order.priority)

    return CandidateAssignment(
        technician_id=technician.id,
        work_order_id=work_order.id,
        skill_score=skill,
        distance_score=1.0 - distance.normalized_distance,
        workload_score=workload,
        priority_score=priority,
        distance_km=distance.distance_km,
        score=combine_scores(skill, distance.normalized_distance, workload, priority),
        estimated_travel_minutes=distance.estimated_travel_minutes,
        reason_code=determine_reason(skill, distance.distance_km, workload, priority),
    )


def rank_candidates(
    work_order: WorkOrder,
    technicians: list[Technician],
    locations: Mapping[str, GeoPoint],
) -> list[CandidateAssignment]:
    """All surviving candidates, best first.

    Sorted by (score DESC, technician id ASC) so equal scores always
    resolve to the same technician regardless of pool order.
    """
    candidates = []
    for technician in technicians:
        candidate = score_candidate(work_order, technician, locations)
        if candidate is not None:
            candidates.append(candidate)
    return sorted(candidates, key=lambda c: (-c.score, c.technician_id))


def find_optimal_technician(
    work_order: WorkOrder,
    technicians: list[Technician],
    locations: Mapping[str, GeoPoint],
) -> CandidateAssignment | None:
    """Best candidate for the work order, or None if nobody qualifies."""
    ranked = rank_candidates(work_order, technicians, locations)
    return ranked[0] if ranked else None


def estimate_completion(candidate: CandidateAssignment, now: datetime) -> datetime:
    """Default 4 hours of work plus whole hours of travel."""
    hours = BASE_COMPLETION_HOURS + candidate.estimated_travel_minutes // 60
    return now + timedelta(hours=hours)


def _distance_for(
    work_order: WorkOrder,
    technician: Technician,
    locations: Mapping[str, GeoPoint],
) -> DistanceEstimate | None:
    origin = locations.get(technician.location_ref) if technician.location_ref else None
    destination = locations.get(work_order.site_ref) if work_order.site_ref else None
    return estimate_distance(origin, destination)
