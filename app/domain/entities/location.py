"""Location entity — a referenced place (site, home base, last known position)."""

from dataclasses import dataclass

from app.domain.value_objects.geo_point import GeoPoint


@dataclass
class Location:
    ref: str
    name: str
    address: str | None = None
    point: GeoPoint | None = None
