"""
Upsert tournament rows into the events worksheet.

Rows are keyed by the tournament URL in column C. The URL -> physical row
index is read from the sheet once and then maintained as rows are inserted,
so each upsert costs one write and no search.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable

from gspread.utils import rowcol_to_a1

from startgg_sheets.core.constants import (
    DATE_COLUMN,
    FIRST_DATA_ROW,
    HEADER_ROW,
    SHEET_DATETIME_FORMAT,
    URL_COLUMN,
)
from startgg_sheets.sheets.protocols import WorksheetLike
from startgg_sheets.transform.rows import TournamentRow

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "USER_ENTERED"


@dataclass
class SyncResult:
    """Counts of rows written by one apply() call."""

    inserted: int = 0
    updated: int = 0

    @property
    def written(self) -> int:
        return self.inserted + self.updated

    def __iadd__(self, other: SyncResult) -> SyncResult:
        self.inserted += other.inserted
        self.updated += other.updated
        return self


def row_to_cells(row: TournamentRow) -> list:
    """Render a row's values as cell input; datetimes become sheet date strings."""
    cells = []
    for value in row.as_list():
        if isinstance(value, datetime):
            cells.append(value.strftime(SHEET_DATETIME_FORMAT))
        else:
            cells.append(value)
    return cells


def _row_range(row_number: int, width: int = len(HEADER_ROW)) -> str:
    return f"{rowcol_to_a1(row_number, 1)}:{rowcol_to_a1(row_number, width)}"


class SheetSynchronizer:
    """
    Applies tournament rows to a worksheet, updating in place by URL or
    inserting below the header.
    """

    def __init__(self, worksheet: WorksheetLike):
        self.worksheet = worksheet
        self._url_rows: Dict[str, int] | None = None
        self._last_row = 0

    @property
    def url_rows(self) -> Dict[str, int]:
        """URL -> 1-based physical row, built lazily from the sheet."""
        if self._url_rows is None:
            self.build_index()
        return self._url_rows

    def build_index(self) -> Dict[str, int]:
        """Read the URL column and index each data row by its exact URL text.

        The first occurrence wins when a URL appears more than once.
        """
        values = self.worksheet.col_values(URL_COLUMN)
        index: Dict[str, int] = {}
        for row_number, value in enumerate(
            values[FIRST_DATA_ROW - 1 :], start=FIRST_DATA_ROW
        ):
            if value and value not in index:
                index[value] = row_number
        self._url_rows = index
        self._last_row = len(values)
        logger.debug(f"Indexed {len(index)} existing rows by URL")
        return index

    def ensure_header(self) -> bool:
        """Write the header row when row 1 is empty. Returns True if written."""
        if any(self.worksheet.row_values(1)):
            return False
        self.worksheet.update(
            values=[list(HEADER_ROW)], range_name=_row_range(1)
        )
        self._last_row = max(self._last_row, 1)
        logger.info("Wrote header row to empty worksheet")
        return True

    def upsert(self, row: TournamentRow) -> bool:
        """Write one row. Returns True when a new row was inserted."""
        cells = row_to_cells(row)
        existing = self.url_rows.get(row.url)

        if existing is not None:
            self.worksheet.update(
                values=[cells],
                range_name=_row_range(existing),
                value_input_option=VALUE_INPUT_OPTION,
            )
            logger.debug(f"Updated row {existing} for {row.url}")
            return False

        self.worksheet.insert_row(
            cells, index=FIRST_DATA_ROW, value_input_option=VALUE_INPUT_OPTION
        )
        for url, row_number in self._url_rows.items():
            if row_number >= FIRST_DATA_ROW:
                self._url_rows[url] = row_number + 1
        self._url_rows[row.url] = FIRST_DATA_ROW
        self._last_row = max(self._last_row, FIRST_DATA_ROW - 1) + 1
        logger.debug(f"Inserted row for {row.url}")
        return True

    def apply(self, rows: Iterable[TournamentRow]) -> SyncResult:
        """Upsert rows one at a time in input order."""
        result = SyncResult()
        for row in rows:
            if self.upsert(row):
                result.inserted += 1
            else:
                result.updated += 1
        if result.written:
            logger.info(
                f"Applied {result.written} rows "
                f"(inserted={result.inserted}, updated={result.updated})"
            )
        return result

    def finalize(self) -> None:
        """Freeze the header row and sort data rows ascending by start date."""
        self.worksheet.freeze(rows=1)

        end_row = max(self.worksheet.row_count, self._last_row)
        if end_row < FIRST_DATA_ROW:
            return
        end_col = max(self.worksheet.col_count, len(HEADER_ROW))
        sort_range = (
            f"{rowcol_to_a1(FIRST_DATA_ROW, 1)}:{rowcol_to_a1(end_row, end_col)}"
        )
        self.worksheet.sort((DATE_COLUMN, "asc"), range=sort_range)
        logger.debug(f"Sorted {sort_range} by column {DATE_COLUMN}")
