"""
Configuration constants for fetching start.gg tournaments and syncing them
into the events spreadsheet.

This module centralizes all default parameters used by the fetcher, the row
mapper, the sheet synchronizer and the run controller.
"""

# =============================================================================
# start.gg API
# =============================================================================

STARTGG_API_URL = "https://api.start.gg/gql/alpha"
STARTGG_SITE_URL = "https://www.start.gg/"
STARTGG_DETAILS_SUFFIX = "/details"

# Results per page requested from the tournaments query
DEFAULT_PER_PAGE = 100

# Upcoming window covered by each fetch
DEFAULT_WINDOW_DAYS = 90
SECONDS_PER_DAY = 86_400

DEFAULT_TIMEOUT = 30.0

# =============================================================================
# Spreadsheet
# =============================================================================

DEFAULT_SHEET_NAME = "Events"
DEFAULT_CREDENTIALS_FILE = "service_account.json"
DEFAULT_TIMEZONE = "UTC"

HEADER_ROW = [
    "Start Date/Time",
    "Name",
    "URL",
    "Country Code",
    "Region Code",
    "Venue Address",
    "Games",
]

# 1-based column holding the tournament URL (upsert key)
URL_COLUMN = 3
# 1-based column holding the start date (sort key)
DATE_COLUMN = 1
# New rows are inserted directly below the header
FIRST_DATA_ROW = 2

GAMES_SEPARATOR = " / "
SHEET_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

SHEETS_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
]

# =============================================================================
# Run controller
# =============================================================================

# Wall-clock budget per invocation (seconds)
DEFAULT_TIME_BUDGET_SECONDS = 240.0
DEFAULT_STATE_FILE = "data/sync_state.json"

# Continuous mode
DEFAULT_INTERVAL_MINUTES = 60
DEFAULT_ERROR_SLEEP_SECONDS = 60
