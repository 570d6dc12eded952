"""HTTP client for the opendatasoft records API.

API Documentation: https://help.opendatasoft.com/apis/ods-explore-v2/
"""

import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from prix_carburants.adapters.api_request_logger import log_api_request
from prix_carburants.adapters.opendatasoft_api.constants import DEFAULT_HEADERS


@dataclass(frozen=True)
class RecordsPage:
    """One page of the records envelope."""

    results: list[Any]
    total_count: int | None = None


class OpendatasoftHttpClient:
    """HTTP client for opendatasoft dataset records.

    Every failure (transport error, non-200 status, unusable envelope) is
    logged and reported as None; nothing is retried.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout_seconds: float = 10.0,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize with an aiohttp session.

        Args:
            session: aiohttp ClientSession used for every request.
            timeout_seconds: Total timeout of a single request.
            logger: Logger to use, defaults to the module logger.
        """
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._logger = logger or logging.getLogger(__name__)

    async def fetch_records(self, url: str, params: dict[str, str | int]) -> RecordsPage | None:
        """Fetch one page of records.

        Args:
            url: Records endpoint.
            params: Query parameters (limit, offset, where).

        Returns:
            RecordsPage, or None if the request failed.
        """
        log_api_request("GET", url, params, DEFAULT_HEADERS)

        try:
            async with self._session.get(
                url, params=params, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                return await self._handle_records_response(response, url)
        except (aiohttp.ClientError, TimeoutError) as e:
            self._logger.warning(f"Error fetching records from {url}: {e}")
        except ValueError as e:
            self._logger.warning(f"Invalid JSON from {url}: {e}")

        return None

    async def _handle_records_response(
        self, response: aiohttp.ClientResponse, url: str
    ) -> RecordsPage | None:
        """Parse the records envelope."""
        if response.status != 200:
            response_text = await response.text()
            self._logger.warning(
                f"Records API returned status {response.status} for {url}: {response_text[:200]}"
            )
            return None

        # content_type=None: accept any Content-Type, empty bodies decode to None
        data = await response.json(content_type=None)
        if not isinstance(data, dict):
            self._logger.warning(f"Records API returned no JSON object for {url}")
            return None

        results = data.get("results")
        if not isinstance(results, list):
            self._logger.warning(f"Records API response for {url} has no 'results' list")
            return None

        return RecordsPage(results=results, total_count=self._parse_total_count(data))

    @staticmethod
    def _parse_total_count(data: dict[str, Any]) -> int | None:
        """Read the declared number of matching records, if any."""
        total_count = data.get("total_count")
        if isinstance(total_count, int) and not isinstance(total_count, bool):
            return total_count
        return None
