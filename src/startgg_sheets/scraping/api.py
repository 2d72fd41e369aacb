"""
HTTP client for the start.gg GraphQL API.

Fetches one page of upcoming tournaments per call. GraphQL-level errors are
logged and reported on the returned page rather than raised; transport and
decoding failures propagate to the caller.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import requests

from startgg_sheets.core.constants import (
    DEFAULT_PER_PAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_WINDOW_DAYS,
    SECONDS_PER_DAY,
    STARTGG_API_URL,
)
from startgg_sheets.scraping.queries import (
    TOURNAMENTS_OPERATION,
    TOURNAMENTS_QUERY,
)

logger = logging.getLogger(__name__)


@dataclass
class TournamentPage:
    """Result of fetching one page of tournaments."""

    page: int
    tournaments: List[dict] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """True when the API answered with a GraphQL error list."""
        return bool(self.errors)

    @property
    def is_empty(self) -> bool:
        """True for a genuinely empty page (no errors, no tournaments)."""
        return not self.errors and not self.tournaments


def _auth_headers(api_key: str) -> dict:
    if not api_key:
        raise ValueError("start.gg API key is empty")
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def build_time_window(
    now: Optional[float] = None, window_days: int = DEFAULT_WINDOW_DAYS
) -> tuple[int, int]:
    """Return (startAt, endAt) epoch seconds from now to now + window_days."""
    if now is None:
        now = time.time()
    start_at = int(now)
    return start_at, start_at + window_days * SECONDS_PER_DAY


def build_tournaments_payload(
    page: int,
    start_at: int,
    end_at: int,
    per_page: int = DEFAULT_PER_PAGE,
) -> dict:
    """Build the POST body for one page of the tournaments query."""
    return {
        "operationName": TOURNAMENTS_OPERATION,
        "query": TOURNAMENTS_QUERY,
        "variables": {
            "page": page,
            "perPage": per_page,
            "startAt": start_at,
            "endAt": end_at,
        },
    }


def _error_messages(errors: list) -> List[str]:
    messages = []
    for error in errors:
        if isinstance(error, dict):
            messages.append(str(error.get("message", error)))
        else:
            messages.append(str(error))
    return messages


def _extract_nodes(payload: dict) -> List[dict]:
    data = payload.get("data") or {}
    tournaments = data.get("tournaments") or {}
    return list(tournaments.get("nodes") or [])


def fetch_tournament_page(
    page: int,
    api_key: str,
    *,
    window_days: int = DEFAULT_WINDOW_DAYS,
    per_page: int = DEFAULT_PER_PAGE,
    timeout: float = DEFAULT_TIMEOUT,
    session: requests.Session | None = None,
    clock: Callable[[], float] = time.time,
    url: str = STARTGG_API_URL,
) -> TournamentPage:
    """Fetch one page of tournaments starting within the next window_days.

    Args:
        page: 1-based page number.
        api_key: start.gg bearer token.
        window_days: Length of the upcoming window.
        per_page: Results per page.
        timeout: Request timeout in seconds.
        session: Requests session for HTTP operations.
        clock: Source of "now" in epoch seconds.
        url: GraphQL endpoint.

    Returns:
        The page. When the API returns GraphQL errors each message is logged
        and the page comes back with no tournaments and ``errors`` set.

    Raises:
        requests.RequestException: On network failure or an HTTP error
            status without a GraphQL error list.
        ValueError: If the response body is not JSON.
    """
    if session is None:
        session = requests.Session()

    start_at, end_at = build_time_window(clock(), window_days)
    body = build_tournaments_payload(page, start_at, end_at, per_page)

    logger.debug(f"Fetching tournaments page {page} ({start_at}..{end_at})")
    response = session.post(
        url, json=body, headers=_auth_headers(api_key), timeout=timeout
    )
    payload = response.json()

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if errors:
        messages = _error_messages(errors)
        for message in messages:
            logger.error(f"start.gg API error on page {page}: {message}")
        return TournamentPage(page=page, errors=messages)

    response.raise_for_status()

    nodes = _extract_nodes(payload)
    logger.info(f"Fetched {len(nodes)} tournaments from page {page}")
    return TournamentPage(page=page, tournaments=nodes)
