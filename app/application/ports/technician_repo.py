"""Port interface for technician profiles and their derived workload."""

from abc import ABC, abstractmethod

from app.domain.entities.technician import Technician


class TechnicianRepository(ABC):
    @abstractmethod
    async def save(self, technician: Technician) -> Technician:
        ...

    @abstractmethod
    async def get_by_id(self, technician_id: int) -> Technician | None:
        ...

    @abstractmethod
    async def get_all(self, company_id: int) -> list[Technician]:
        ...

    @abstractmethod
    async def get_available(self, company_id: int) -> list[Technician]:
        """Available technicians with current_load = open ASSIGNED + IN_PROGRESS orders."""
        ...
