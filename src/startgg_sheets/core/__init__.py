"""Core configuration, constants and logging for the sync job."""

from startgg_sheets.core.config import ConfigError, SyncConfig
from startgg_sheets.core.logging import log_timing, setup_logging
from startgg_sheets.core.sentry import init_sentry

__all__ = [
    "ConfigError",
    "SyncConfig",
    "init_sentry",
    "log_timing",
    "setup_logging",
]
