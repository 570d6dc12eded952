"""Station query service."""

import logging

from prix_carburants.application.itinerary_filter import BoundingBox
from prix_carburants.domain.models.coordinate import Coordinate
from prix_carburants.domain.models.query_result import QueryResult
from prix_carburants.domain.models.station import Station
from prix_carburants.domain.ports.geocoder import Geocoder
from prix_carburants.domain.ports.station_repository import StationRepository

MSG_NO_STATIONS = "Aucune station trouvée."
MSG_CITY_REQUIRED = "Veuillez entrer une ville."
MSG_ITINERARY_REQUIRED = "Veuillez entrer une ville de départ et une ville d'arrivée."


def no_stations_in_city(city: str) -> str:
    return f"Aucune station trouvée pour la ville '{city}'."


def no_stations_between(start_city: str, end_city: str) -> str:
    return f"Aucune station trouvée entre '{start_city}' et '{end_city}'."


class StationQueryService:
    """Entry point for the three station queries offered to front ends.

    Every operation returns a QueryResult and never raises: upstream failures
    surface as NO_RESULTS, bad arguments as INVALID_INPUT.
    """

    def __init__(
        self,
        station_repository: StationRepository,
        geocoder: Geocoder,
        *,
        cache_itinerary_geocoding: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize with a station repository and a geocoder.

        Args:
            station_repository: Source of station records.
            geocoder: Resolves city names to coordinates.
            cache_itinerary_geocoding: Reuse coordinates of a city already
                resolved within the same itinerary query.
            logger: Logger to use, defaults to the module logger.
        """
        self._station_repository = station_repository
        self._geocoder = geocoder
        self._cache_itinerary_geocoding = cache_itinerary_geocoding
        self._logger = logger or logging.getLogger(__name__)

    async def fetch_stations_online(self) -> QueryResult:
        """Fetch every available station."""
        stations = await self._station_repository.fetch_all()
        self._logger.info(f"Fetched {len(stations)} station(s)")
        return QueryResult.found(stations, MSG_NO_STATIONS)

    async def fetch_stations_by_city(self, city: str) -> QueryResult:
        """Fetch the stations of one city."""
        city = city.strip()
        if not city:
            return QueryResult.invalid_input(MSG_CITY_REQUIRED)

        stations = await self._station_repository.fetch_by_city(city)
        self._logger.info(f"Fetched {len(stations)} station(s) for city '{city}'")
        return QueryResult.found(stations, no_stations_in_city(city))

    async def fetch_stations_by_itinerary(self, start_city: str, end_city: str) -> QueryResult:
        """Fetch stations inside the bounding box between two cities.

        Both endpoints are geocoded first; if either cannot be located the
        candidate stations are never fetched. Each candidate is then geocoded
        by its city and kept when it falls inside the box, in fetch order.
        """
        start_city = start_city.strip()
        end_city = end_city.strip()
        if not start_city or not end_city:
            return QueryResult.invalid_input(MSG_ITINERARY_REQUIRED)

        empty_message = no_stations_between(start_city, end_city)

        start = await self._geocoder.resolve(start_city)
        if start is None:
            self._logger.warning(f"Could not geocode start city '{start_city}'")
            return QueryResult.no_results(empty_message)

        end = await self._geocoder.resolve(end_city)
        if end is None:
            self._logger.warning(f"Could not geocode end city '{end_city}'")
            return QueryResult.no_results(empty_message)

        candidates = await self._station_repository.fetch_itinerary_candidates()
        stations = await self._filter_in_box(candidates, BoundingBox.from_corners(start, end))
        self._logger.info(
            f"Kept {len(stations)} of {len(candidates)} station(s) "
            f"between '{start_city}' and '{end_city}'"
        )
        return QueryResult.found(stations, empty_message)

    async def _filter_in_box(self, candidates: list[Station], box: BoundingBox) -> list[Station]:
        """Keep candidates whose city resolves to a point inside the box."""
        # Scoped to a single query, never shared between calls
        resolved: dict[str, Coordinate | None] = {}
        kept: list[Station] = []

        for station in candidates:
            if not station.has_known_city:
                continue

            point = await self._locate(station.city, resolved)
            if point is None:
                self._logger.debug(f"Dropping station {station.id}: city '{station.city}' not found")
                continue

            if box.contains(point):
                kept.append(station)

        return kept

    async def _locate(self, city: str, resolved: dict[str, Coordinate | None]) -> Coordinate | None:
        """Geocode a station city, reusing the per-query cache when enabled."""
        if not self._cache_itinerary_geocoding:
            return await self._geocoder.resolve(city)

        key = city.casefold()
        if key not in resolved:
            resolved[key] = await self._geocoder.resolve(city)
        return resolved[key]
