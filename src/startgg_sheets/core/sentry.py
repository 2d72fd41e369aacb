"""
Optional Sentry error reporting for the sync job.

Sentry stays off unless a DSN is configured:
- STARTGG_SHEETS_SENTRY_DSN, then SENTRY_DSN
- SENTRY_ENV: environment tag, default "development"
- SENTRY_TRACES_SAMPLE_RATE: tracing sample rate, clamped to [0, 1]
- SENTRY_DEBUG: 1/true/yes/on turns on SDK debug output

Once enabled, ERROR records from the package loggers become Sentry events.
That covers start.gg GraphQL errors logged by the fetcher and failed cycles
in continuous mode. INFO records are kept as breadcrumbs.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

DSN_ENV_VARS = ("STARTGG_SHEETS_SENTRY_DSN", "SENTRY_DSN")
BREADCRUMB_LEVEL = logging.INFO
EVENT_LEVEL = logging.ERROR


def _configured_dsn() -> str | None:
    for name in DSN_ENV_VARS:
        dsn = os.getenv(name, "").strip().strip("\"'")
        if dsn:
            return dsn
    return None


def _traces_sample_rate() -> float:
    raw = os.getenv("SENTRY_TRACES_SAMPLE_RATE", "")
    if not raw:
        return 0.0
    try:
        rate = float(raw)
    except ValueError:
        logger.debug(f"Ignoring non-numeric SENTRY_TRACES_SAMPLE_RATE={raw!r}")
        return 0.0
    return min(max(rate, 0.0), 1.0)


def init_sentry(*, context: str, release: str | None = None) -> bool:
    """Turn on Sentry for this process if a usable DSN is configured.

    Args:
        context: Value of the ``service`` tag attached to every event.
        release: Release name, e.g. ``startgg-sheets@0.1.0``.

    Returns:
        True when the SDK was initialized.
    """
    dsn = _configured_dsn()
    if dsn is None:
        logger.info("Sentry disabled: no DSN configured")
        return False
    parsed = urlparse(dsn)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        logger.warning("Sentry disabled: DSN is not an http(s) URL")
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.logging import LoggingIntegration
    except ImportError as e:  # pragma: no cover
        logger.warning(f"Sentry disabled: {e}")
        return False

    environment = os.getenv("SENTRY_ENV") or "development"
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[
            LoggingIntegration(level=BREADCRUMB_LEVEL, event_level=EVENT_LEVEL)
        ],
        traces_sample_rate=_traces_sample_rate(),
        debug=os.getenv("SENTRY_DEBUG", "").lower() in {"1", "true", "yes", "on"},
    )
    sentry_sdk.set_tag("service", context)
    logger.info(f"Sentry enabled for {context} ({environment}, release={release})")
    return True
