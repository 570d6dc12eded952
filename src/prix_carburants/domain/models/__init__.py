"""Domain models for fuel-station queries."""

from prix_carburants.domain.models.coordinate import Coordinate
from prix_carburants.domain.models.query_result import QueryResult, QueryStatus
from prix_carburants.domain.models.station import ServiceFlags, Station

__all__ = [
    "Coordinate",
    "QueryResult",
    "QueryStatus",
    "ServiceFlags",
    "Station",
]
