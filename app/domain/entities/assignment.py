"""Assignment entities — scoring candidates and applied results."""

from dataclasses import dataclass

from app.domain.value_objects.enums import ReasonCode

DEFAULT_ASSIGNMENT_METHOD = "OPTIMIZATION_ALGORITHM"


@dataclass(frozen=True)
class CandidateAssignment:
    """One technician scored against one work order. Never persisted."""

    technician_id: int
    work_order_id: int | None
    skill_score: float
    distance_score: float
    workload_score: float
    priority_score: float
    distance_km: float
    score: float
    estimated_travel_minutes: int
    reason_code: ReasonCode


@dataclass(frozen=True)
class AssignmentResult:
    """What the caller gets back after an assignment is applied."""

    work_order_id: int
    technician_id: int
    score: float
    estimated_travel_minutes: int
    reason_code: ReasonCode
    assignment_method: str = DEFAULT_ASSIGNMENT_METHOD
    skill_score: float | None = None
    distance_score: float | None = None
    workload_score: float | None = None
    priority_score: float | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.score <= 1.0:
            raise ValueError("Optimization score must be between 0 and 1")
        if self.estimated_travel_minutes < 0:
            raise ValueError("Estimated travel time cannot be negative")

    @classmethod
    def from_candidate(cls, candidate: CandidateAssignment, work_order_id: int) -> "AssignmentResult":
        return cls(
            work_order_id=work_order_id,
            technician_id=candidate.technician_id,
            score=candidate.score,
            estimated_travel_minutes=candidate.estimated_travel_minutes,
            reason_code=candidate.reason_code,
            skill_score=candidate.skill_score,
            distance_score=candidate.distance_score,
            workload_score=candidate.workload_score,
            priority_score=candidate.priority_score,
        )
