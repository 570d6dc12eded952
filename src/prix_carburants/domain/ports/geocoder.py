"""Geocoder port."""

from typing import Protocol

from prix_carburants.domain.models.coordinate import Coordinate


class Geocoder(Protocol):
    """Port for resolving place names to coordinates."""

    async def resolve(self, city_name: str) -> Coordinate | None:
        """Resolve a city name, returning None when it cannot be located."""
        ...
