"""Port interface for resolving location references to coordinates."""

from abc import ABC, abstractmethod

from app.domain.entities.location import Location
from app.domain.value_objects.geo_point import GeoPoint


class LocationRepository(ABC):
    @abstractmethod
    async def save(self, location: Location) -> Location:
        ...

    @abstractmethod
    async def resolve_many(self, refs: set[str]) -> dict[str, GeoPoint]:
        """Resolve references to points.

        References that cannot be resolved are left out of the result;
        this never raises for an unknown or unlocated reference.
        """
        ...
