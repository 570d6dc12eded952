"""Opendatasoft fuel price dataset adapter."""

from prix_carburants.adapters.opendatasoft_api.http_client import (
    OpendatasoftHttpClient,
    RecordsPage,
)
from prix_carburants.adapters.opendatasoft_api.opendatasoft_station_repository import (
    OpendatasoftStationRepository,
)
from prix_carburants.adapters.opendatasoft_api.station_parser import StationParser

__all__ = [
    "OpendatasoftHttpClient",
    "OpendatasoftStationRepository",
    "RecordsPage",
    "StationParser",
]
