"""Domain layer - core business models and ports."""

from prix_carburants.domain.models import (
    Coordinate,
    QueryResult,
    QueryStatus,
    ServiceFlags,
    Station,
)
from prix_carburants.domain.ports import Geocoder, StationRepository

__all__ = [
    "Coordinate",
    "Geocoder",
    "QueryResult",
    "QueryStatus",
    "ServiceFlags",
    "Station",
    "StationRepository",
]
