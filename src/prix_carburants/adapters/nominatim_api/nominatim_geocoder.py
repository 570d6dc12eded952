"""Geocoder adapter backed by Nominatim (OpenStreetMap)."""

import logging
from typing import Any

import aiohttp

from prix_carburants.adapters.api_rate_limiter import ApiRateLimiter
from prix_carburants.adapters.api_request_logger import log_api_request
from prix_carburants.adapters.nominatim_api.constants import (
    NOMINATIM_MIN_DELAY_SECONDS,
    NOMINATIM_SEARCH_URL,
)
from prix_carburants.domain.models.coordinate import Coordinate
from prix_carburants.domain.ports.geocoder import Geocoder


class NominatimGeocoder(Geocoder):
    """Resolves city names with the Nominatim free-text search.

    Each call is a fresh request; failures are logged and reported as None.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        search_url: str = NOMINATIM_SEARCH_URL,
        user_agent: str = "prix-carburants/0.1",
        country_codes: str | None = "fr",
        min_delay_seconds: float = NOMINATIM_MIN_DELAY_SECONDS,
        timeout_seconds: float = 10.0,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession for HTTP requests.
            search_url: Nominatim /search endpoint.
            user_agent: Identifying User-Agent, required by the usage policy.
            country_codes: Optional comma-separated country filter.
            min_delay_seconds: Minimum delay between two requests.
            timeout_seconds: Timeout of each HTTP request.
            logger: Logger to use, defaults to the module logger.
        """
        self._session = session
        self._search_url = search_url
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._country_codes = country_codes
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._rate_limiter = (
            ApiRateLimiter("nominatim", min_delay_seconds) if min_delay_seconds > 0 else None
        )
        self._logger = logger or logging.getLogger(__name__)

    async def resolve(self, city_name: str) -> Coordinate | None:
        """Resolve a city name to the coordinates of the best match.

        Args:
            city_name: Free-text place name, e.g. "Lyon".

        Returns:
            Coordinate of the first match, or None if nothing usable came back.
        """
        params: dict[str, str | int] = {"q": city_name, "format": "json", "limit": 1}
        if self._country_codes:
            params["countrycodes"] = self._country_codes

        if self._rate_limiter:
            await self._rate_limiter.acquire()

        log_api_request("GET", self._search_url, params, self._headers)

        try:
            async with self._session.get(
                self._search_url, params=params, headers=self._headers, timeout=self._timeout
            ) as response:
                return await self._handle_search_response(response, city_name)
        except (aiohttp.ClientError, TimeoutError) as e:
            self._logger.warning(f"Error geocoding '{city_name}': {e}")
        except ValueError as e:
            self._logger.warning(f"Invalid JSON while geocoding '{city_name}': {e}")

        return None

    async def _handle_search_response(
        self, response: aiohttp.ClientResponse, city_name: str
    ) -> Coordinate | None:
        """Handle search API response."""
        if response.status != 200:
            response_text = await response.text()
            self._logger.warning(
                f"Nominatim returned status {response.status} for '{city_name}': "
                f"{response_text[:200]}"
            )
            return None

        data = await response.json(content_type=None)
        if not isinstance(data, list) or not data:
            self._logger.info(f"No geocoding match for '{city_name}'")
            return None

        return self._parse_match(data[0], city_name)

    def _parse_match(self, match: Any, city_name: str) -> Coordinate | None:
        """Read lat/lon (string-encoded decimals) from a search match."""
        if not isinstance(match, dict):
            return None

        try:
            return Coordinate(latitude=float(match["lat"]), longitude=float(match["lon"]))
        except (KeyError, TypeError, ValueError):
            self._logger.warning(f"Geocoding match for '{city_name}' has no usable lat/lon")
            return None
