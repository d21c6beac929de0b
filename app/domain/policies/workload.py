"""WorkloadPolicy — spare capacity of a technician against the daily cap."""

MAX_DAILY_ASSIGNMENTS = 8


def workload_score(current_load: int) -> float:
    """Linear decay from 1.0 (idle) to 0.0 at the daily cap; never negative."""
    return max(0.0, (MAX_DAILY_ASSIGNMENTS - current_load) / MAX_DAILY_ASSIGNMENTS)


def is_overloaded(current_load: int) -> bool:
    return current_load > MAX_DAILY_ASSIGNMENTS


def is_underutilized(current_load: int) -> bool:
    return current_load < MAX_DAILY_ASSIGNMENTS / 2
