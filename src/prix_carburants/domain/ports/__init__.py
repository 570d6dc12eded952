"""Ports (interfaces) for the ports-and-adapters architecture."""

from prix_carburants.domain.ports.geocoder import Geocoder
from prix_carburants.domain.ports.station_repository import StationRepository

__all__ = [
    "Geocoder",
    "StationRepository",
]
