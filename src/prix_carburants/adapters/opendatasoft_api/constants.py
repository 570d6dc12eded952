"""Constants for the opendatasoft fuel price adapter.

Dataset: "prix-des-carburants-j-1" (fuel prices reported the previous day).
API Documentation: https://help.opendatasoft.com/apis/ods-explore-v2/

No authentication required. The records endpoint returns at most 100 records
per request.
"""

DATASET_ID = "prix-des-carburants-j-1"

# Records endpoint (GET ?limit=&offset=&where=)
RECORDS_URL = (
    f"https://public.opendatasoft.com/api/explore/v2.1/catalog/datasets/{DATASET_ID}/records"
)
# Mirror of the same dataset on the opendatasoft data hub
FALLBACK_RECORDS_URL = (
    f"https://data.opendatasoft.com/api/explore/v2.1/catalog/datasets/{DATASET_ID}@public/records"
)

MAX_PAGE_SIZE = 100
DEFAULT_MAX_RECORDS = 1000

# Field holding the city (arrondissement name for Paris, Lyon and Marseille)
CITY_FIELD = "com_arm_name"

# HTTP headers
DEFAULT_HEADERS = {
    "Accept": "application/json",
}
