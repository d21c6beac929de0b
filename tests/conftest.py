"""Pytest configuration and shared fixtures."""

import pytest

from app.domain.value_objects.geo_point import GeoPoint


@pytest.fixture
def site_point():
    """A school site in Riyadh."""
    return GeoPoint(latitude=24.7136, longitude=46.6753)


@pytest.fixture
def electrical_description():
    return "Classroom 4B: exposed wiring behind the electrical panel, breaker keeps tripping."


@pytest.fixture
def mixed_description():
    return "Water leak above the HVAC unit, cooling has stopped in the library."
