"""Sync upcoming start.gg tournaments into a Google Sheet."""

from __future__ import annotations

from startgg_sheets.continuous import SyncRunner, SyncState, SyncStateStore
from startgg_sheets.core.config import SyncConfig
from startgg_sheets.scraping import fetch_tournament_page
from startgg_sheets.sheets import SheetSynchronizer
from startgg_sheets.transform import TournamentRow, tournaments_to_rows

__version__ = "0.1.0"

__all__ = [
    "SheetSynchronizer",
    "SyncConfig",
    "SyncRunner",
    "SyncState",
    "SyncStateStore",
    "TournamentRow",
    "fetch_tournament_page",
    "tournaments_to_rows",
]
