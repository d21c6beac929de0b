"""DistancePolicy — travel distance, proximity and travel time between two points."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.value_objects.geo_point import GeoPoint

MAX_TRAVEL_DISTANCE_KM = 50.0
MINUTES_PER_KM = 2.5


@dataclass(frozen=True)
class DistanceEstimate:
    distance_km: float
    normalized_distance: float  # 0 = on site, 1 = at or beyond the travel radius
    estimated_travel_minutes: int


def estimate_distance(
    origin: GeoPoint | None,
    destination: GeoPoint | None,
) -> DistanceEstimate | None:
    """Estimate the trip between two resolved locations.

    Returns None when either side could not be resolved; callers treat
    that as "no location available" and drop the candidate.
    """
    if origin is None or destination is None:
        return None

    distance_km = origin.haversine_km(destination)
    return DistanceEstimate(
        distance_km=distance_km,
        normalized_distance=min(1.0, distance_km / MAX_TRAVEL_DISTANCE_KM),
        estimated_travel_minutes=int(distance_km * MINUTES_PER_KM),
    )


def within_travel_radius(estimate: DistanceEstimate) -> bool:
    return estimate.distance_km <= MAX_TRAVEL_DISTANCE_KM
