from gspread.exceptions import WorksheetNotFound

import startgg_sheets.sheets.client as client_mod
from startgg_sheets.core.config import SyncConfig


class _FakeWorksheet:
    def __init__(self, title):
        self.title = title


class _FakeSpreadsheet:
    def __init__(self, titles):
        self.titles = list(titles)
        self.added = []

    def worksheet(self, title):
        if title not in self.titles:
            raise WorksheetNotFound(title)
        return _FakeWorksheet(title)

    def add_worksheet(self, title, rows, cols):
        self.added.append((title, rows, cols))
        self.titles.append(title)
        return _FakeWorksheet(title)


class _FakeClient:
    def __init__(self, spreadsheet):
        self.spreadsheet = spreadsheet
        self.opened = []
        self.timeout = None

    def set_timeout(self, timeout):
        self.timeout = timeout

    def open_by_key(self, key):
        self.opened.append(key)
        return self.spreadsheet


def test_open_worksheet_uses_configured_sheet():
    client = _FakeClient(_FakeSpreadsheet(["Events"]))
    config = SyncConfig(spreadsheet_id="abc", timeout=12.0)

    ws = client_mod.open_worksheet(config, client=client)

    assert ws.title == "Events"
    assert client.opened == ["abc"]
    assert client.timeout == 12.0


def test_open_worksheet_creates_missing_sheet():
    spreadsheet = _FakeSpreadsheet(["Sheet1"])
    config = SyncConfig(spreadsheet_id="abc", sheet_name="Upcoming")

    ws = client_mod.open_worksheet(config, client=_FakeClient(spreadsheet))

    assert ws.title == "Upcoming"
    assert spreadsheet.added == [("Upcoming", 1000, 7)]


def test_open_worksheet_authorizes_from_credentials_file(monkeypatch):
    seen = {}
    client = _FakeClient(_FakeSpreadsheet(["Events"]))

    def fake_authorize(path):
        seen["path"] = path
        return client

    monkeypatch.setattr(client_mod, "authorize", fake_authorize)
    config = SyncConfig(spreadsheet_id="abc", credentials_file="sa.json")

    client_mod.open_worksheet(config)

    assert seen["path"] == "sa.json"
