"""Brand and fuel filters applied to query results before display."""

from dataclasses import dataclass

from prix_carburants.domain.models.query_result import QueryResult, QueryStatus
from prix_carburants.domain.models.station import Station

ALL_BRANDS = "Toutes"
OTHER_BRANDS = "Autres"
KNOWN_BRANDS = ("Total", "Carrefour", "Intermarché", "Leclerc")
BRAND_CHOICES = (ALL_BRANDS, *KNOWN_BRANDS, OTHER_BRANDS)

ALL_FUELS = "Tous"
FUEL_CHOICES = (ALL_FUELS, "Gazole", "SP95", "SP98", "E10", "E85")

MSG_NO_MATCHING_STATIONS = "Aucune station ne correspond aux filtres."


@dataclass(frozen=True)
class StationFilter:
    """Brand and fuel-type selection.

    Attributes:
        brand: A known brand, ALL_BRANDS, or OTHER_BRANDS for every brand
            outside KNOWN_BRANDS. Compared case-insensitively.
        fuel: ALL_FUELS or a fuel code looked up as a case-insensitive
            substring of the station's fuel types.
    """

    brand: str = ALL_BRANDS
    fuel: str = ALL_FUELS

    @property
    def is_empty(self) -> bool:
        return self.brand == ALL_BRANDS and self.fuel == ALL_FUELS

    def matches(self, station: Station) -> bool:
        return self._brand_matches(station.brand) and self._fuel_matches(station.fuel_types)

    def apply(self, result: QueryResult) -> QueryResult:
        """Narrow an OK result to matching stations.

        Results that are not OK pass through untouched. An OK result left
        without stations becomes NO_RESULTS.
        """
        if self.is_empty or result.status is not QueryStatus.OK:
            return result

        kept = [station for station in result.stations if self.matches(station)]
        return QueryResult.found(kept, MSG_NO_MATCHING_STATIONS)

    def _brand_matches(self, brand: str) -> bool:
        if self.brand == ALL_BRANDS:
            return True

        brand = brand.casefold()
        if self.brand == OTHER_BRANDS:
            return brand not in {known.casefold() for known in KNOWN_BRANDS}
        return brand == self.brand.casefold()

    def _fuel_matches(self, fuel_types: str) -> bool:
        return self.fuel == ALL_FUELS or self.fuel.casefold() in fuel_types.casefold()
