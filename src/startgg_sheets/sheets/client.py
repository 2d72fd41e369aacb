"""Open the target worksheet with a service-account credential."""

from __future__ import annotations

import logging

import gspread
from google.oauth2.service_account import Credentials
from gspread.exceptions import WorksheetNotFound

from startgg_sheets.core.config import SyncConfig
from startgg_sheets.core.constants import HEADER_ROW, SHEETS_SCOPES

logger = logging.getLogger(__name__)


def authorize(credentials_file: str) -> gspread.Client:
    """Return a gspread client authorized with a service-account key file."""
    creds = Credentials.from_service_account_file(
        credentials_file, scopes=SHEETS_SCOPES
    )
    return gspread.authorize(creds)


def open_worksheet(
    config: SyncConfig, client: gspread.Client | None = None
) -> gspread.Worksheet:
    """Open (creating if missing) the configured worksheet.

    Args:
        config: Sync configuration with spreadsheet id, sheet name and
            credentials file.
        client: Pre-authorized client; built from the credentials file if None.

    Returns:
        The worksheet events are synced into.
    """
    if client is None:
        client = authorize(config.credentials_file)
    client.set_timeout(config.timeout)

    spreadsheet = client.open_by_key(config.spreadsheet_id)
    try:
        worksheet = spreadsheet.worksheet(config.sheet_name)
    except WorksheetNotFound:
        logger.warning(
            f"Worksheet '{config.sheet_name}' not found; creating it"
        )
        worksheet = spreadsheet.add_worksheet(
            config.sheet_name, rows=1000, cols=len(HEADER_ROW)
        )
    logger.debug(
        f"Opened worksheet '{worksheet.title}' in spreadsheet {config.spreadsheet_id}"
    )
    return worksheet
