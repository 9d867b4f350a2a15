"""Constants for the National Rail Live Departure Board web service (LDBWS).

Served through the Rail Data Marketplace; each board kind is a separate
product with its own API key, sent in the ``x-apikey`` header.
"""

# API endpoints
DEP_BASE_URL = "https://api1.raildata.org.uk/1010-live-departure-board-dep1_2/LDBWS/api/20220120/GetDepartureBoard"
ARR_BASE_URL = "https://api1.raildata.org.uk/1010-live-arrival-board-arr1_1/LDBWS/api/20220120/GetArrivalBoard"

# Environment variables holding the per-product API keys
DEP_API_KEY_VAR = "DEP_API_KEY"
ARR_API_KEY_VAR = "ARR_API_KEY"

# HTTP
API_KEY_HEADER = "x-apikey"
DEFAULT_HEADERS = {
    "Accept": "application/json",
}

# Rows requested when no limit is given
DEFAULT_NUM_ROWS = 10
