"""Constants for the Nominatim geocoding adapter.

API Documentation: https://nominatim.org/release-docs/latest/api/Search/
Usage policy: https://operations.osmfoundation.org/policies/nominatim/

The public instance allows at most one request per second and requires an
identifying User-Agent.
"""

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
NOMINATIM_SEARCH_URL = f"{NOMINATIM_BASE_URL}/search"  # GET /search?q=...&format=json

NOMINATIM_MIN_DELAY_SECONDS = 1.0
