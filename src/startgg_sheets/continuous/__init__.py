"""Scheduled sync: run controller, persisted cursor and CLI."""

from __future__ import annotations

from startgg_sheets.continuous.manager import RunSummary, SyncRunner
from startgg_sheets.continuous.state import StopReason, SyncState, SyncStateStore

__all__ = [
    "RunSummary",
    "StopReason",
    "SyncRunner",
    "SyncState",
    "SyncStateStore",
]
