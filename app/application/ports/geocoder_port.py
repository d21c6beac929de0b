"""Port interface for turning a site or base address into coordinates."""

from abc import ABC, abstractmethod

from app.domain.value_objects.geo_point import GeoPoint


class GeocoderPort(ABC):
    @abstractmethod
    async def geocode(self, address: str) -> GeoPoint | None:
        """Resolve a location's postal address.

        Returns None when the address is blank or cannot be resolved;
        lookup failures are not raised to the caller.
        """
        ...
