"""Application services."""

from prix_carburants.application.services.station_query_service import StationQueryService

__all__ = ["StationQueryService"]
