"""Nominatim geocoding adapter."""

from prix_carburants.adapters.nominatim_api.nominatim_geocoder import NominatimGeocoder

__all__ = ["NominatimGeocoder"]
