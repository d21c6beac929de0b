"""Technician entity — a field user who performs work orders."""

from dataclasses import dataclass, field


@dataclass
class Technician:
    id: int | None
    company_id: int
    name: str
    email: str | None = None
    skills: set[str] = field(default_factory=set)
    location_ref: str | None = None
    current_load: int = 0
    is_available: bool = True

    def has_skill(self, skill: str) -> bool:
        return skill in self.skills
