"""start.gg tournament fetching."""

from __future__ import annotations

from startgg_sheets.scraping.api import (
    TournamentPage,
    build_time_window,
    build_tournaments_payload,
    fetch_tournament_page,
)

__all__ = [
    "TournamentPage",
    "build_time_window",
    "build_tournaments_payload",
    "fetch_tournament_page",
]
