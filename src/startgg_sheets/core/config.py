"""Configuration dataclass for the sync job.

Values come from the environment, with a local ``.env`` file as a fallback
for development. CLI flags are applied on top via ``dataclasses.replace``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from startgg_sheets.core.constants import (
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_PER_PAGE,
    DEFAULT_SHEET_NAME,
    DEFAULT_STATE_FILE,
    DEFAULT_TIME_BUDGET_SECONDS,
    DEFAULT_TIMEOUT,
    DEFAULT_TIMEZONE,
    DEFAULT_WINDOW_DAYS,
)

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Required configuration is missing or malformed."""


def _read_dotenv(path: str) -> Dict[str, str]:
    """Parse KEY=VALUE lines from a .env file, ignoring comments and blanks."""
    values: Dict[str, str] = {}
    if not os.path.exists(path):
        return values
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and v:
                values[k] = v
    return values


def _lookup(env: Mapping[str, str], fallback: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value:
        return value
    return fallback.get(name)


def _parse_float(name: str, raw: Optional[str], default: float) -> float:
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _parse_int(name: str, raw: Optional[str], default: Optional[int]) -> Optional[int]:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class SyncConfig:
    """Everything one sync invocation needs to know."""

    # start.gg bearer token
    api_key: str = ""
    # Target Google spreadsheet
    spreadsheet_id: str = ""
    sheet_name: str = DEFAULT_SHEET_NAME
    credentials_file: str = DEFAULT_CREDENTIALS_FILE

    # Persisted pagination cursor
    state_file: str = DEFAULT_STATE_FILE

    # Run budget; max_pages=None means only the time budget applies
    time_budget_seconds: float = DEFAULT_TIME_BUDGET_SECONDS
    max_pages: Optional[int] = None

    # Fetch parameters
    window_days: int = DEFAULT_WINDOW_DAYS
    per_page: int = DEFAULT_PER_PAGE
    timeout: float = DEFAULT_TIMEOUT

    # Timezone used to render start dates in the sheet
    timezone: str = DEFAULT_TIMEZONE

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        dotenv_path: str | None = None,
    ) -> SyncConfig:
        """Build a config from environment variables.

        Args:
            env: Mapping to read from. Defaults to ``os.environ``.
            dotenv_path: Fallback .env file. Defaults to ``./.env``.

        Returns:
            A populated (not yet validated) config.
        """
        env = os.environ if env is None else env
        if dotenv_path is None:
            dotenv_path = os.path.join(os.getcwd(), ".env")
        fallback = _read_dotenv(dotenv_path)

        def get(name: str) -> Optional[str]:
            return _lookup(env, fallback, name)

        return cls(
            api_key=get("STARTGG_API_KEY") or "",
            spreadsheet_id=get("STARTGG_SPREADSHEET_ID") or "",
            sheet_name=get("STARTGG_SHEET_NAME") or DEFAULT_SHEET_NAME,
            credentials_file=get("GOOGLE_APPLICATION_CREDENTIALS")
            or DEFAULT_CREDENTIALS_FILE,
            state_file=get("STARTGG_STATE_FILE") or DEFAULT_STATE_FILE,
            time_budget_seconds=_parse_float(
                "STARTGG_TIME_BUDGET_SECONDS",
                get("STARTGG_TIME_BUDGET_SECONDS"),
                DEFAULT_TIME_BUDGET_SECONDS,
            ),
            max_pages=_parse_int(
                "STARTGG_MAX_PAGES", get("STARTGG_MAX_PAGES"), None
            ),
            window_days=_parse_int(
                "STARTGG_WINDOW_DAYS",
                get("STARTGG_WINDOW_DAYS"),
                DEFAULT_WINDOW_DAYS,
            ),
            timeout=_parse_float(
                "STARTGG_TIMEOUT", get("STARTGG_TIMEOUT"), DEFAULT_TIMEOUT
            ),
            timezone=get("STARTGG_TIMEZONE") or DEFAULT_TIMEZONE,
        )

    def validate(self) -> SyncConfig:
        """Raise ConfigError when a required value is missing; return self."""
        missing = []
        if not self.api_key:
            missing.append("STARTGG_API_KEY")
        if not self.spreadsheet_id:
            missing.append("STARTGG_SPREADSHEET_ID")
        if missing:
            raise ConfigError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set it in the environment or .env file."
            )
        if self.time_budget_seconds <= 0:
            raise ConfigError("time_budget_seconds must be positive")
        if self.max_pages is not None and self.max_pages < 1:
            raise ConfigError("max_pages must be at least 1")
        if self.window_days < 1:
            raise ConfigError("window_days must be at least 1")
        self.zone()
        return self

    def zone(self) -> ZoneInfo:
        """Resolve the configured IANA timezone, raising ConfigError if unknown."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(
                f"STARTGG_TIMEZONE must be an IANA timezone, got {self.timezone!r}"
            ) from e

    def describe(self) -> dict:
        """Loggable view of the config with the API key masked."""
        return {
            "api_key": "***" if self.api_key else "",
            "spreadsheet_id": self.spreadsheet_id,
            "sheet_name": self.sheet_name,
            "credentials_file": self.credentials_file,
            "state_file": self.state_file,
            "time_budget_seconds": self.time_budget_seconds,
            "max_pages": self.max_pages,
            "window_days": self.window_days,
            "per_page": self.per_page,
            "timeout": self.timeout,
            "timezone": self.timezone,
        }
