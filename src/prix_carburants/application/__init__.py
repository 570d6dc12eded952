"""Application layer - use cases built on the domain ports."""

from prix_carburants.application.itinerary_filter import BoundingBox, is_within
from prix_carburants.application.services import StationQueryService
from prix_carburants.application.station_filter import StationFilter

__all__ = ["BoundingBox", "StationFilter", "StationQueryService", "is_within"]
