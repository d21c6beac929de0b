"""Port interface for work order persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from app.domain.entities.work_order import WorkOrder
from app.domain.value_objects.enums import WorkOrderStatus


class WorkOrderRepository(ABC):
    @abstractmethod
    async def save(self, work_order: WorkOrder) -> WorkOrder:
        ...

    @abstractmethod
    async def get_by_id(self, work_order_id: int) -> WorkOrder | None:
        ...

    @abstractmethod
    async def get_all(self, company_id: int) -> list[WorkOrder]:
        ...

    @abstractmethod
    async def get_unassigned(self, company_id: int) -> list[WorkOrder]:
        """PENDING orders with no technician, most urgent and oldest first."""
        ...

    @abstractmethod
    async def get_by_assignee(
        self, technician_id: int, statuses: list[WorkOrderStatus]
    ) -> list[WorkOrder]:
        ...

    @abstractmethod
    async def get_created_between(
        self, company_id: int, start: datetime, end: datetime
    ) -> list[WorkOrder]:
        """Orders created in [start, end)."""
        ...

    @abstractmethod
    async def update(self, work_order: WorkOrder) -> WorkOrder:
        ...
