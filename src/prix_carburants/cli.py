"""Command-line front end for French fuel-station prices."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any

import aiohttp

from prix_carburants.adapters.config import AppConfig
from prix_carburants.adapters.favorites import JsonFavoritesStore
from prix_carburants.adapters.favorites.json_favorites_store import (
    MSG_FAVORITE_ADDED,
    MSG_FAVORITE_EXISTS,
    MSG_FAVORITE_MISSING,
    MSG_FAVORITE_REMOVED,
)
from prix_carburants.adapters.nominatim_api import NominatimGeocoder
from prix_carburants.adapters.opendatasoft_api import OpendatasoftStationRepository
from prix_carburants.application.services import StationQueryService
from prix_carburants.application.station_filter import (
    ALL_BRANDS,
    ALL_FUELS,
    BRAND_CHOICES,
    FUEL_CHOICES,
    StationFilter,
)
from prix_carburants.domain.models import QueryResult, QueryStatus, Station

EXIT_NO_RESULTS = 1
EXIT_INVALID_INPUT = 2
EXIT_ERROR = 3

TABLE_COLUMNS = (
    ("ID", 10),
    ("Marque", 18),
    ("Adresse", 32),
    ("Ville", 20),
    ("CP", 6),
    ("Carburants", 28),
    ("Gazole", 7),
    ("SP95", 7),
    ("SP98", 7),
)


def build_query_service(session: aiohttp.ClientSession, config: AppConfig) -> StationQueryService:
    """Wire the adapters into a StationQueryService."""
    repository = OpendatasoftStationRepository(
        session,
        records_url=config.fuel_api_url,
        fallback_url=config.fuel_api_fallback_url,
        page_size=config.page_size,
        max_records=config.max_records,
        timeout_seconds=config.http_timeout_seconds,
    )
    geocoder = NominatimGeocoder(
        session,
        search_url=config.geocoding_url,
        user_agent=config.geocoding_user_agent,
        country_codes=config.geocoding_country_codes,
        min_delay_seconds=config.geocoding_min_delay_seconds,
        timeout_seconds=config.http_timeout_seconds,
    )
    return StationQueryService(
        repository,
        geocoder,
        cache_itinerary_geocoding=config.itinerary_geocode_cache,
    )


def _format_price(price: float | None) -> str:
    """Format a price with three decimals, or "-" when unknown."""
    return f"{price:.3f}" if price is not None else "-"


def _truncate(text: str, width: int) -> str:
    """Shorten text to the column width, marking the cut with an ellipsis."""
    return text if len(text) <= width else text[: width - 1] + "…"


def format_station_table(stations: list[Station]) -> str:
    """Render stations as a fixed-width text table."""
    header = " ".join(name.ljust(width) for name, width in TABLE_COLUMNS)
    lines = [header, "-" * len(header)]

    for station in stations:
        values = (
            station.id,
            station.brand,
            station.address,
            station.city,
            station.postal_code,
            station.fuel_types,
            _format_price(station.price_gazole),
            _format_price(station.price_sp95),
            _format_price(station.price_sp98),
        )
        lines.append(
            " ".join(
                _truncate(value, width).ljust(width)
                for value, (_name, width) in zip(values, TABLE_COLUMNS, strict=True)
            )
        )

    return "\n".join(lines)


def format_stations_json(stations: list[Station]) -> str:
    """Render stations as a JSON array."""
    return json.dumps([asdict(station) for station in stations], indent=2, ensure_ascii=False)


def _print_stations(stations: list[Station], as_json: bool) -> None:
    """Print stations as JSON or as a table followed by a count."""
    if as_json:
        print(format_stations_json(stations))
    else:
        print(format_station_table(stations))
        print(f"\n{len(stations)} station(s)")


def _report(result: QueryResult, as_json: bool) -> int:
    """Print a query result and return the process exit code."""
    if result.status is QueryStatus.OK:
        _print_stations(list(result.stations), as_json)
        return 0

    if result.message:
        print(result.message, file=sys.stderr)
    return EXIT_INVALID_INPUT if result.is_invalid_input else EXIT_NO_RESULTS


def _station_filter(args: Any) -> StationFilter:
    return StationFilter(brand=args.brand, fuel=args.fuel)


async def _handle_favorites_command(
    args: Any, config: AppConfig, service: StationQueryService
) -> int:
    """Handle the favorites sub-commands."""
    store = JsonFavoritesStore(config.favorites_file)

    if args.action in ("add", "remove"):
        try:
            changed = (
                store.add(args.station_id)
                if args.action == "add"
                else store.remove(args.station_id)
            )
        except OSError as e:
            print(f"Error saving favorites to {store.path}: {e}", file=sys.stderr)
            return EXIT_ERROR

        if args.action == "add":
            message = MSG_FAVORITE_ADDED if changed else MSG_FAVORITE_EXISTS
        else:
            message = MSG_FAVORITE_REMOVED if changed else MSG_FAVORITE_MISSING

        if not changed:
            print(message, file=sys.stderr)
            return EXIT_INVALID_INPUT
        print(message)
        return 0

    if not store.ids:
        print("Aucune station favorite.", file=sys.stderr)
        return EXIT_NO_RESULTS

    result = await service.fetch_stations_online()
    favorites = QueryResult.found(
        store.filter_stations(list(result.stations)), "Aucune station favorite trouvée."
    )
    return _report(_station_filter(args).apply(favorites), args.json)


async def _execute_command(args: Any, config: AppConfig) -> int:
    """Execute the appropriate command based on args."""
    async with aiohttp.ClientSession() as session:
        service = build_query_service(session, config)

        if args.command == "favorites":
            return await _handle_favorites_command(args, config, service)

        if args.command == "all":
            result = await service.fetch_stations_online()
        elif args.command == "city":
            result = await service.fetch_stations_by_city(args.city)
        else:
            result = await service.fetch_stations_by_itinerary(args.start_city, args.end_city)
        return _report(_station_filter(args).apply(result), args.json)


def _setup_argparse() -> argparse.ArgumentParser:
    """Set up and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="prix-carburants",
        description="Prix des carburants en France (opendatasoft, J-1)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List stations
  prix-carburants all

  # Stations in a city
  prix-carburants city Lyon

  # Leclerc stations selling E85 in a city
  prix-carburants city Lyon --brand Leclerc --fuel E85

  # Stations between two cities (bounding box)
  prix-carburants itinerary Paris Marseille --json

  # Manage favorites
  prix-carburants favorites add 69003001
  prix-carburants favorites list

Configuration is read from environment variables or a .env file
(e.g. PAGE_SIZE, MAX_RECORDS, FAVORITES_FILE, LOG_LEVEL).
        """,
    )

    output_parent = argparse.ArgumentParser(add_help=False)
    output_parent.add_argument("--json", action="store_true", help="Output as JSON")
    output_parent.add_argument(
        "--brand",
        choices=BRAND_CHOICES,
        default=ALL_BRANDS,
        help=f"Only show this brand ('Autres' for any other brand, default: {ALL_BRANDS})",
    )
    output_parent.add_argument(
        "--fuel",
        choices=FUEL_CHOICES,
        default=ALL_FUELS,
        help=f"Only show stations selling this fuel (default: {ALL_FUELS})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("all", parents=[output_parent], help="List all stations")

    city_parser = subparsers.add_parser("city", parents=[output_parent], help="Stations in a city")
    city_parser.add_argument("city", help="City name (e.g., Lyon)")

    itinerary_parser = subparsers.add_parser(
        "itinerary", parents=[output_parent], help="Stations between two cities"
    )
    itinerary_parser.add_argument("start_city", help="Departure city")
    itinerary_parser.add_argument("end_city", help="Arrival city")

    favorites_parser = subparsers.add_parser("favorites", help="Manage favorite stations")
    favorites_sub = favorites_parser.add_subparsers(dest="action", required=True)
    favorites_sub.add_parser("list", parents=[output_parent], help="Show favorite stations")
    add_parser = favorites_sub.add_parser("add", help="Add a station to favorites")
    add_parser.add_argument("station_id", help="Station ID")
    remove_parser = favorites_sub.add_parser("remove", help="Remove a station from favorites")
    remove_parser.add_argument("station_id", help="Station ID")

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _setup_argparse()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_INVALID_INPUT

    config = AppConfig()
    _configure_logging(config.log_level)

    return await _execute_command(args, config)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
