"""Station repository port."""

from typing import Protocol

from prix_carburants.domain.models.station import Station


class StationRepository(Protocol):
    """Port for retrieving fuel stations."""

    async def fetch_all(self) -> list[Station]:
        """Fetch every station the source exposes, page by page."""
        ...

    async def fetch_by_city(self, city: str) -> list[Station]:
        """Fetch stations located in a city."""
        ...

    async def fetch_itinerary_candidates(self) -> list[Station]:
        """Fetch the unfiltered superset used for itinerary filtering."""
        ...
