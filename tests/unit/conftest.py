import random

import pytest

from linkshortener.registry import Registry
from linkshortener.dao.memory import MemoryStorageDAO
from linkshortener.geolocation import BaseGeolocator, GeoLocation
from linkshortener.exceptions import GeolocationError


class StaticGeolocator(BaseGeolocator):
    """Geolocator answering with a fixed location."""

    def __init__(self, city: str | None = 'Sofia', country: str | None = 'Bulgaria'):
        self.calls = 0
        self.location = GeoLocation(city=city, country=country)

    def locate(self) -> GeoLocation:
        self.calls += 1
        return self.location


class FailingGeolocator(BaseGeolocator):
    """Geolocator failing every lookup with the given error."""

    def __init__(self, error: Exception | None = None):
        self.error = error or GeolocationError()

    def locate(self) -> GeoLocation:
        raise self.error


@pytest.fixture
def storage() -> MemoryStorageDAO:
    return MemoryStorageDAO()


@pytest.fixture
def geolocator() -> StaticGeolocator:
    return StaticGeolocator()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def registry(storage, geolocator, rng) -> Registry:
    return Registry(storage=storage, geolocator=geolocator, rng=rng)


@pytest.fixture
def failing_geolocator() -> type[FailingGeolocator]:
    """Factory for geolocators failing with a given error."""
    return FailingGeolocator
