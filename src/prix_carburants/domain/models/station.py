"""Station domain model."""

from dataclasses import dataclass, field

# Placeholders used when the source omits a field
UNKNOWN_ID = "ID inconnu"
UNKNOWN_ADDRESS = "Adresse inconnue"
UNKNOWN_CITY = "Ville inconnue"
UNKNOWN_POSTAL_CODE = "Code Postal inconnu"
UNKNOWN_BRAND = "Marque inconnue"
NO_FUEL_TYPES = "Aucun"


@dataclass(frozen=True)
class ServiceFlags:
    """Services advertised by a station."""

    has_toilets: bool = False
    has_shop: bool = False
    has_air_pump: bool = False


@dataclass(frozen=True)
class Station:
    """Represents a fuel retail point with its latest reported prices."""

    id: str
    address: str
    city: str
    postal_code: str
    fuel_types: str
    price_gazole: float | None
    price_sp95: float | None
    price_sp98: float | None
    brand: str
    services: ServiceFlags = field(default_factory=ServiceFlags)

    @property
    def has_known_city(self) -> bool:
        return self.city != UNKNOWN_CITY
