"""Station repository adapter for the opendatasoft fuel price dataset."""

import logging
from typing import TYPE_CHECKING

from prix_carburants.adapters.opendatasoft_api.constants import (
    CITY_FIELD,
    DEFAULT_MAX_RECORDS,
    FALLBACK_RECORDS_URL,
    MAX_PAGE_SIZE,
    RECORDS_URL,
)
from prix_carburants.adapters.opendatasoft_api.http_client import OpendatasoftHttpClient
from prix_carburants.adapters.opendatasoft_api.station_parser import StationParser
from prix_carburants.domain.models.station import Station
from prix_carburants.domain.ports.station_repository import StationRepository

if TYPE_CHECKING:
    from aiohttp import ClientSession


def city_where_clause(city: str) -> str:
    """Build the ODSQL filter matching a city name.

    >>> city_where_clause("Lyon")
    'com_arm_name like "%Lyon%"'
    """
    escaped = city.replace("\\", "\\\\").replace('"', '\\"')
    return f'{CITY_FIELD} like "%{escaped}%"'


class OpendatasoftStationRepository(StationRepository):
    """Adapter fetching stations from the "prix-des-carburants-j-1" dataset."""

    def __init__(
        self,
        session: "ClientSession",
        *,
        records_url: str = RECORDS_URL,
        fallback_url: str | None = FALLBACK_RECORDS_URL,
        page_size: int = MAX_PAGE_SIZE,
        max_records: int = DEFAULT_MAX_RECORDS,
        timeout_seconds: float = 10.0,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            records_url: Primary records endpoint.
            fallback_url: Endpoint tried once when a city query fails.
            page_size: Records requested per page.
            max_records: Upper bound when listing all stations.
            timeout_seconds: Timeout of each HTTP request.
            logger: Logger to use, defaults to the module logger.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._http_client = OpendatasoftHttpClient(
            session, timeout_seconds=timeout_seconds, logger=self._logger
        )
        self._records_url = records_url
        self._fallback_url = fallback_url
        self._page_size = page_size
        self._max_records = max_records

    async def fetch_all(self) -> list[Station]:
        """Fetch stations page by page.

        Stops on a short page, on the declared total_count, or at max_records.
        A failing page ends pagination; stations already collected are kept.
        """
        stations: list[Station] = []
        offset = 0
        total = self._max_records

        while offset < total:
            limit = min(self._page_size, total - offset)
            page = await self._http_client.fetch_records(
                self._records_url, {"limit": limit, "offset": offset}
            )
            if page is None:
                self._logger.warning(
                    f"Stopping at offset {offset}, keeping {len(stations)} station(s)"
                )
                break

            stations.extend(StationParser.parse_stations(page.results))

            if page.total_count is not None:
                total = min(total, page.total_count)
            if len(page.results) < limit:
                break
            offset += limit

        return stations

    async def fetch_by_city(self, city: str) -> list[Station]:
        """Fetch stations whose city contains the given name.

        The server-side LIKE filter may match more than asked, so every
        station is checked again locally (case-insensitive substring).
        Stations without a city never match.
        """
        params: dict[str, str | int] = {
            "where": city_where_clause(city),
            "limit": self._page_size,
        }

        page = await self._http_client.fetch_records(self._records_url, params)
        if page is None and self._fallback_url:
            self._logger.info(f"Retrying city query for '{city}' on {self._fallback_url}")
            page = await self._http_client.fetch_records(self._fallback_url, params)
        if page is None:
            return []

        needle = city.casefold()
        stations = StationParser.parse_stations(page.results)
        matching = [
            station
            for station in stations
            if station.has_known_city and needle in station.city.casefold()
        ]

        dropped = len(stations) - len(matching)
        if dropped:
            self._logger.debug(f"Dropped {dropped} station(s) not located in '{city}'")

        return matching

    async def fetch_itinerary_candidates(self) -> list[Station]:
        """Fetch the candidate stations of an itinerary query (all stations)."""
        return await self.fetch_all()
