"""Parser for opendatasoft fuel price records."""

import logging
import math
from collections.abc import Mapping
from typing import Any

from prix_carburants.adapters.opendatasoft_api.constants import CITY_FIELD
from prix_carburants.domain.models.station import (
    NO_FUEL_TYPES,
    UNKNOWN_ADDRESS,
    UNKNOWN_BRAND,
    UNKNOWN_CITY,
    UNKNOWN_ID,
    UNKNOWN_POSTAL_CODE,
    ServiceFlags,
    Station,
)

logger = logging.getLogger(__name__)

# Service list entries look like "Toilettes publiques/Boutique alimentaire/..."
SERVICE_SEPARATOR = "/"
TOILETS_MARKER = "toilettes"
SHOP_MARKER = "boutique"
AIR_PUMP_MARKER = "gonflage"


class StationParser:
    """Parses raw dataset records into Station objects."""

    @staticmethod
    def parse_stations(records: list[Any]) -> list[Station]:
        """Parse a list of records, skipping the ones that cannot be built.

        Args:
            records: Raw records from the "results" array.

        Returns:
            List of Station objects in record order.
        """
        results = []

        for record in records:
            station = StationParser.parse_station(record)
            if station:
                results.append(station)

        return results

    @staticmethod
    def parse_station(record: Any) -> Station | None:
        """Parse a single record into a Station object.

        Missing or null fields fall back to placeholders. A field that cannot
        be converted loses only its own value.
        """
        try:
            if not isinstance(record, Mapping):
                raise TypeError(f"expected a JSON object, got {type(record).__name__}")

            return Station(
                id=StationParser._text(record.get("id"), UNKNOWN_ID),
                address=StationParser._text(record.get("address"), UNKNOWN_ADDRESS),
                city=StationParser._text(record.get(CITY_FIELD), UNKNOWN_CITY),
                postal_code=StationParser._text(record.get("cp"), UNKNOWN_POSTAL_CODE),
                fuel_types=StationParser._fuel_types(record.get("fuel")),
                price_gazole=StationParser._price(record, "price_gazole"),
                price_sp95=StationParser._price(record, "price_sp95"),
                price_sp98=StationParser._price(record, "price_sp98"),
                brand=StationParser._text(record.get("brand"), UNKNOWN_BRAND),
                services=StationParser._services(record.get("service")),
            )
        except Exception as e:
            logger.warning(f"Error parsing station record: {e}")
            return None

    @staticmethod
    def _text(value: Any, default: str) -> str:
        """Convert a scalar to text, using the default for null or blank values."""
        if value is None or isinstance(value, (dict, list)):
            return default

        text = str(value).strip()
        return text or default

    @staticmethod
    def _fuel_types(value: Any) -> str:
        """Join the fuel type codes, e.g. ["Gazole", "SP95"] -> "Gazole, SP95"."""
        if not isinstance(value, list):
            return NO_FUEL_TYPES

        codes = [str(code).strip() for code in value if code is not None and str(code).strip()]
        return ", ".join(codes) if codes else NO_FUEL_TYPES

    @staticmethod
    def _price(record: Mapping[str, Any], field_name: str) -> float | None:
        """Parse a price, returning None when absent or not numeric."""
        value = record.get(field_name)
        if value is None or isinstance(value, bool):
            return None

        try:
            price = float(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring non-numeric {field_name}: {value!r}")
            return None

        return price if math.isfinite(price) else None

    @staticmethod
    def _services(value: Any) -> ServiceFlags:
        """Derive service flags from the "/"-delimited service list."""
        if isinstance(value, list):
            value = SERVICE_SEPARATOR.join(str(item) for item in value if item is not None)
        if not isinstance(value, str) or not value:
            return ServiceFlags()

        entries = [entry.strip().lower() for entry in value.split(SERVICE_SEPARATOR)]
        return ServiceFlags(
            has_toilets=any(TOILETS_MARKER in entry for entry in entries),
            has_shop=any(SHOP_MARKER in entry for entry in entries),
            has_air_pump=any(AIR_PUMP_MARKER in entry for entry in entries),
        )
