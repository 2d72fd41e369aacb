"""Map start.gg tournament records to spreadsheet rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from startgg_sheets.core.constants import (
    DEFAULT_TIMEZONE,
    GAMES_SEPARATOR,
    STARTGG_DETAILS_SUFFIX,
    STARTGG_SITE_URL,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TournamentRow:
    """One tournament, flattened into the sheet's column order."""

    start: datetime
    name: str
    url: str
    country_code: str
    region_code: str
    venue_address: str
    games: str

    def as_list(self) -> list:
        return [
            self.start,
            self.name,
            self.url,
            self.country_code,
            self.region_code,
            self.venue_address,
            self.games,
        ]


def build_tournament_url(slug: str) -> str:
    """Canonical public details URL for a tournament slug."""
    return f"{STARTGG_SITE_URL}{slug}{STARTGG_DETAILS_SUFFIX}"


def epoch_to_datetime(
    timestamp: int | float, tz: Optional[tzinfo] = None
) -> datetime:
    """Convert epoch seconds to an aware datetime (UTC unless tz is given)."""
    return datetime.fromtimestamp(timestamp, tz=tz or ZoneInfo(DEFAULT_TIMEZONE))


def unique_game_names(events: Iterable[dict]) -> List[str]:
    """Game names of the events, deduplicated in first-appearance order."""
    seen: set[str] = set()
    names: List[str] = []
    for event in events:
        videogame = (event or {}).get("videogame") or {}
        name = videogame.get("name")
        if not name or name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names


def tournament_to_row(
    tournament: dict, tz: Optional[tzinfo] = None
) -> TournamentRow | None:
    """Build the row for one tournament, or None when it lists no events."""
    events = tournament.get("events")
    if events is None:
        logger.info(
            f"Skipping tournament {tournament.get('slug') or tournament.get('id')}: no events listed"
        )
        return None

    return TournamentRow(
        start=epoch_to_datetime(tournament["startAt"], tz),
        name=tournament.get("name") or "",
        url=build_tournament_url(tournament["slug"]),
        country_code=tournament.get("countryCode") or "",
        region_code=tournament.get("addrState") or "",
        venue_address=tournament.get("venueAddress") or "",
        games=GAMES_SEPARATOR.join(unique_game_names(events)),
    )


def tournaments_to_rows(
    tournaments: Iterable[dict], tz: Optional[tzinfo] = None
) -> List[TournamentRow]:
    """Map tournaments to rows, preserving input order and skipping eventless ones."""
    rows = []
    for tournament in tournaments:
        row = tournament_to_row(tournament, tz)
        if row is not None:
            rows.append(row)
    return rows
