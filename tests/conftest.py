import logging
import re

import pytest
import requests

from startgg_sheets.core.constants import HEADER_ROW
from startgg_sheets.core.logging import PACKAGE_LOGGER


class FakeWorksheet:
    """In-memory stand-in for gspread.Worksheet (1-based rows and columns)."""

    def __init__(self, rows=None, row_count=1000, col_count=7):
        self.rows = [list(r) for r in rows or []]
        self.row_count = row_count
        self.col_count = col_count
        self.frozen_rows = 0
        self.updates = []
        self.inserts = []
        self.sort_calls = []

    def _pad(self, n):
        while len(self.rows) < n:
            self.rows.append([])

    def row_values(self, row, **kwargs):
        if row > len(self.rows):
            return []
        return list(self.rows[row - 1])

    def col_values(self, col, **kwargs):
        values = [r[col - 1] if len(r) >= col else "" for r in self.rows]
        while values and values[-1] == "":
            values.pop()
        return values

    def update(self, values=None, range_name=None, **kwargs):
        row = int(re.match(r"[A-Z]+(\d+)", range_name).group(1))
        self._pad(row)
        self.rows[row - 1] = list(values[0])
        self.updates.append((row, list(values[0]), kwargs))

    def insert_row(self, values, index=1, **kwargs):
        self._pad(index - 1)
        self.rows.insert(index - 1, list(values))
        self.row_count += 1
        self.inserts.append((index, list(values), kwargs))

    def freeze(self, rows=None, cols=None):
        self.frozen_rows = rows

    def sort(self, *specs, range=None):
        self.sort_calls.append((specs, range))
        col, order = specs[0]
        header, data = self.rows[:1], self.rows[1:]

        def key(r):
            value = r[col - 1] if len(r) >= col else ""
            return (value == "", value)

        data.sort(key=key, reverse=(order == "des"))
        self.rows = header + data

    @property
    def data_rows(self):
        return [r for r in self.rows[1:] if any(r)]


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append(
            {"url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        return self.responses.pop(0)


class FakeClock:
    """Monotonic clock that advances by `step` seconds on every read."""

    def __init__(self, step=0.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # setup_logging() disables propagation, which would hide records from caplog
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def header_sheet():
    return FakeWorksheet(rows=[list(HEADER_ROW)])


@pytest.fixture
def make_worksheet():
    return FakeWorksheet


@pytest.fixture
def make_session():
    def factory(*payloads, status_code=200):
        return FakeSession(
            [FakeResponse(p, status_code=status_code) for p in payloads]
        )

    return factory


@pytest.fixture
def make_clock():
    return FakeClock


def tournament(slug, name=None, start_at=1_700_000_000, games=("Street Fighter 6",), **extra):
    """Build a start.gg tournament node as returned by the API."""
    node = {
        "id": hash(slug) % 100_000,
        "slug": slug,
        "name": name or slug.title(),
        "startAt": start_at,
        "countryCode": "US",
        "addrState": "CA",
        "venueAddress": "123 Main St",
        "events": None
        if games is None
        else [
            {"id": i, "videogame": {"id": i, "name": g}}
            for i, g in enumerate(games)
        ],
    }
    node.update(extra)
    return node


@pytest.fixture
def make_tournament():
    return tournament
