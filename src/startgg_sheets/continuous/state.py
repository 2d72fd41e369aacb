"""Pagination cursor persistence between invocations."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class StopReason(Enum):
    """Why a run's fetch loop ended."""

    EMPTY_PAGE = "empty_page"  # Upstream window exhausted
    NO_ROWS = "no_rows"  # Page had tournaments but none mapped to rows
    FETCH_ERROR = "fetch_error"  # start.gg returned GraphQL errors
    TIME_BUDGET = "time_budget"  # Wall-clock budget used up
    PAGE_BUDGET = "page_budget"  # max_pages reached


def _coerce_page_number(raw) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(value, 0)


@dataclass
class SyncState:
    """State carried from one invocation to the next."""

    # Last page reached; the next run fetches page_number + 1
    page_number: int = 0
    last_run_started: datetime | None = None
    last_run_finished: datetime | None = None
    # StopReason value of the last completed run
    last_stop_reason: str | None = None
    last_rows_written: int = 0
    consecutive_failures: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        for key in ["last_run_started", "last_run_finished"]:
            if data[key]:
                data[key] = data[key].isoformat()
        # Key name shared with the spreadsheet-side script property
        data["pageNumber"] = data.pop("page_number")
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SyncState:
        """Create from dictionary, tolerating missing or malformed values."""
        data = dict(data)
        page_raw = data.pop("pageNumber", data.pop("page_number", 0))
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        for key in ["last_run_started", "last_run_finished"]:
            if kwargs.get(key):
                try:
                    kwargs[key] = datetime.fromisoformat(kwargs[key])
                except (TypeError, ValueError):
                    kwargs[key] = None
        return cls(page_number=_coerce_page_number(page_raw), **kwargs)


class SyncStateStore:
    """
    Loads and saves SyncState as JSON.

    A missing or unreadable file yields a fresh state with cursor 0.
    """

    def __init__(self, state_file: str = "data/sync_state.json"):
        """
        Args:
            state_file: Path to persist the sync state
        """
        self.state_file = Path(state_file)

    def load(self) -> SyncState:
        """Load state from disk."""
        if not self.state_file.exists():
            logger.info("No existing state file, starting from page 0")
            return SyncState()
        try:
            with open(self.state_file, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load state file {self.state_file}: {e}")
            return SyncState()
        if not isinstance(data, dict):
            logger.error(f"State file {self.state_file} is not a JSON object")
            return SyncState()
        state = SyncState.from_dict(data)
        logger.info(f"Loaded state: page_number={state.page_number}")
        return state

    def save(self, state: SyncState) -> None:
        """Persist state to disk."""
        self.state_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_file, "w") as f:
            json.dump(state.to_dict(), f, indent=2)
        logger.debug(f"Saved state: page_number={state.page_number}")
