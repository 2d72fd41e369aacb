"""Run controller: fetch pages, map rows, upsert them, persist the cursor."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import requests

from startgg_sheets.continuous.state import StopReason, SyncState, SyncStateStore
from startgg_sheets.core.config import SyncConfig
from startgg_sheets.core.constants import DEFAULT_ERROR_SLEEP_SECONDS
from startgg_sheets.core.logging import log_timing
from startgg_sheets.scraping.api import TournamentPage, fetch_tournament_page
from startgg_sheets.sheets.client import open_worksheet
from startgg_sheets.sheets.protocols import WorksheetLike
from startgg_sheets.sheets.sync import SheetSynchronizer, SyncResult
from startgg_sheets.transform.rows import tournaments_to_rows

logger = logging.getLogger(__name__)

PageFetcher = Callable[[int], TournamentPage]


@dataclass
class RunSummary:
    """What one invocation did."""

    pages_fetched: int = 0
    rows_inserted: int = 0
    rows_updated: int = 0
    tournaments_skipped: int = 0
    stop_reason: StopReason | None = None
    page_number: int = 0

    @property
    def rows_written(self) -> int:
        return self.rows_inserted + self.rows_updated

    def to_dict(self) -> dict:
        return {
            "pages_fetched": self.pages_fetched,
            "rows_inserted": self.rows_inserted,
            "rows_updated": self.rows_updated,
            "tournaments_skipped": self.tournaments_skipped,
            "stop_reason": self.stop_reason.value if self.stop_reason else None,
            "page_number": self.page_number,
        }


class SyncRunner:
    """
    Drives one bounded sync of upcoming start.gg tournaments into the sheet.

    Each run resumes from the persisted cursor, fetches pages until one is
    empty, a fetch fails, or the run budget is spent, then freezes and sorts
    the sheet and writes the cursor back.
    """

    def __init__(
        self,
        config: SyncConfig,
        worksheet: WorksheetLike | None = None,
        state_store: SyncStateStore | None = None,
        session: requests.Session | None = None,
        fetch_page: PageFetcher | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the runner.

        Args:
            config: Sync configuration
            worksheet: Target worksheet (opened from config if None)
            state_store: Cursor persistence (uses config.state_file if None)
            session: Requests session for start.gg calls
            fetch_page: Page fetcher override, mainly for tests
            clock: Monotonic clock used for the time budget
        """
        self.config = config
        self._worksheet = worksheet
        self.state_store = state_store or SyncStateStore(config.state_file)
        # Only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.fetch_page = fetch_page or self._fetch_from_api
        self.clock = clock

    def close(self) -> None:
        """Release the HTTP session if this runner created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> SyncRunner:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def worksheet(self) -> WorksheetLike:
        if self._worksheet is None:
            self._worksheet = open_worksheet(self.config)
        return self._worksheet

    def _fetch_from_api(self, page: int) -> TournamentPage:
        return fetch_tournament_page(
            page,
            self.config.api_key,
            window_days=self.config.window_days,
            per_page=self.config.per_page,
            timeout=self.config.timeout,
            session=self.session,
        )

    def _budget_exhausted(self, loop_start: float, pages_fetched: int) -> StopReason | None:
        if self.clock() - loop_start >= self.config.time_budget_seconds:
            return StopReason.TIME_BUDGET
        if (
            self.config.max_pages is not None
            and pages_fetched >= self.config.max_pages
        ):
            return StopReason.PAGE_BUDGET
        return None

    def run_once(self, state: SyncState | None = None) -> RunSummary:
        """
        Run a single sync invocation.

        Args:
            state: Starting state; loaded from the state store if None

        Returns:
            Summary of the run. The updated state is saved to the store.
        """
        tz = self.config.zone()
        if state is None:
            state = self.state_store.load()
        state.last_run_started = datetime.now(timezone.utc)

        synchronizer = SheetSynchronizer(self.worksheet)
        synchronizer.ensure_header()
        synchronizer.build_index()

        summary = RunSummary()
        totals = SyncResult()
        page_number = state.page_number
        loop_start = self.clock()
        logger.info(f"Resuming after page {page_number}")

        while True:
            page_number += 1
            page = self.fetch_page(page_number)
            summary.pages_fetched += 1

            if page.failed:
                # Retry this page next invocation
                page_number -= 1
                summary.stop_reason = StopReason.FETCH_ERROR
                break

            if not page.tournaments:
                summary.stop_reason = StopReason.EMPTY_PAGE
                break

            rows = tournaments_to_rows(page.tournaments, tz)
            summary.tournaments_skipped += len(page.tournaments) - len(rows)
            if not rows:
                # Window not exhausted; keep the cursor on this page
                summary.stop_reason = StopReason.NO_ROWS
                break
            totals += synchronizer.apply(rows)

            reason = self._budget_exhausted(loop_start, summary.pages_fetched)
            if reason is not None:
                summary.stop_reason = reason
                break

        synchronizer.finalize()

        if summary.stop_reason is StopReason.EMPTY_PAGE:
            page_number = 0

        summary.rows_inserted = totals.inserted
        summary.rows_updated = totals.updated
        summary.page_number = page_number

        state.page_number = page_number
        state.last_run_finished = datetime.now(timezone.utc)
        state.last_stop_reason = summary.stop_reason.value
        state.last_rows_written = summary.rows_written
        if summary.stop_reason is StopReason.FETCH_ERROR:
            state.consecutive_failures += 1
        else:
            state.consecutive_failures = 0
        self.state_store.save(state)

        logger.info(
            f"Run complete: pages={summary.pages_fetched}, "
            f"inserted={summary.rows_inserted}, updated={summary.rows_updated}, "
            f"skipped={summary.tournaments_skipped}, "
            f"stop={summary.stop_reason.value}, next_page={page_number + 1}"
        )
        return summary

    def run_continuous(
        self,
        interval_minutes: int = 60,
        max_cycles: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Run sync invocations on a fixed interval.

        Args:
            interval_minutes: Minutes between invocation starts
            max_cycles: Maximum cycles to run (None for infinite)
            sleep: Sleep function, replaceable in tests
        """
        logger.info(
            f"Starting continuous sync with {interval_minutes} minute intervals"
        )

        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            try:
                cycle_start = time.time()
                with log_timing(logger, f"sync cycle {cycles + 1}"):
                    self.run_once()
                cycle_duration = time.time() - cycle_start
                cycles += 1

                if max_cycles is None or cycles < max_cycles:
                    sleep_seconds = max(0, interval_minutes * 60 - cycle_duration)
                    if sleep_seconds > 0:
                        logger.info(
                            f"Sleeping {sleep_seconds:.0f}s until next cycle"
                        )
                        sleep(sleep_seconds)

            except KeyboardInterrupt:
                logger.info("Interrupted by user")
                break
            except Exception as e:
                logger.error(f"Error in cycle {cycles + 1}: {e}", exc_info=True)
                self._record_failure()
                cycles += 1
                if max_cycles is None or cycles < max_cycles:
                    sleep(DEFAULT_ERROR_SLEEP_SECONDS)

        logger.info(f"Continuous sync stopped after {cycles} cycles")

    def _record_failure(self) -> None:
        state = self.state_store.load()
        state.consecutive_failures += 1
        self.state_store.save(state)

    def get_status(self) -> dict:
        """Current persisted state, for display."""
        state = self.state_store.load()
        return {
            "page_number": state.page_number,
            "next_page": state.page_number + 1,
            "last_run_started": state.last_run_started.isoformat()
            if state.last_run_started
            else None,
            "last_run_finished": state.last_run_finished.isoformat()
            if state.last_run_finished
            else None,
            "last_stop_reason": state.last_stop_reason,
            "last_rows_written": state.last_rows_written,
            "consecutive_failures": state.consecutive_failures,
        }

    def reset(self) -> SyncState:
        """Reset the cursor to the start of the window."""
        state = self.state_store.load()
        state.page_number = 0
        self.state_store.save(state)
        logger.info("Pagination cursor reset to 0")
        return state
