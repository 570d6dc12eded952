"""Favorite stations persisted as a JSON array of station ids."""

import json
import logging
from pathlib import Path

from prix_carburants.domain.models.station import Station

logger = logging.getLogger(__name__)

MSG_FAVORITE_ADDED = "Station ajoutée aux favoris !"
MSG_FAVORITE_EXISTS = "Cette station est déjà dans vos favoris."
MSG_FAVORITE_REMOVED = "Station retirée des favoris."
MSG_FAVORITE_MISSING = "Cette station n'est pas dans vos favoris."


class JsonFavoritesStore:
    """Set of favorite station ids backed by a flat JSON file.

    The file is read once at construction and rewritten wholesale after
    every successful add or remove. Write failures raise OSError.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._ids: list[str] = self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(self._ids)

    def contains(self, station_id: str) -> bool:
        return station_id in self._ids

    def add(self, station_id: str) -> bool:
        """Add a station id. Returns False if it was already a favorite."""
        if station_id in self._ids:
            return False
        self._ids.append(station_id)
        self._save()
        return True

    def remove(self, station_id: str) -> bool:
        """Remove a station id. Returns False if it was not a favorite."""
        if station_id not in self._ids:
            return False
        self._ids.remove(station_id)
        self._save()
        return True

    def filter_stations(self, stations: list[Station]) -> list[Station]:
        """Keep the favorite stations, in the given order."""
        favorites = set(self._ids)
        return [station for station in stations if station.id in favorites]

    def _load(self) -> list[str]:
        if not self._path.exists():
            return []

        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read favorites from {self._path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Favorites file {self._path} does not hold a JSON array, ignoring it")
            return []

        ids: list[str] = []
        for item in data:
            station_id = str(item)
            if station_id not in ids:
                ids.append(station_id)
        return ids

    def _save(self) -> None:
        if self._path.parent != Path():
            self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            json.dump(self._ids, f, ensure_ascii=False)
