"""Adapters layer - external system integrations."""

from prix_carburants.adapters.config import AppConfig
from prix_carburants.adapters.favorites import JsonFavoritesStore
from prix_carburants.adapters.nominatim_api import NominatimGeocoder
from prix_carburants.adapters.opendatasoft_api import OpendatasoftStationRepository

__all__ = [
    "AppConfig",
    "JsonFavoritesStore",
    "NominatimGeocoder",
    "OpendatasoftStationRepository",
]
