"""Favorites persistence adapter."""

from prix_carburants.adapters.favorites.json_favorites_store import JsonFavoritesStore

__all__ = ["JsonFavoritesStore"]
