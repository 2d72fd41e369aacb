from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from startgg_sheets.transform.rows import (
    TournamentRow,
    build_tournament_url,
    epoch_to_datetime,
    tournament_to_row,
    tournaments_to_rows,
    unique_game_names,
)


def test_end_to_end_example_row(make_tournament):
    node = make_tournament(
        "abc",
        name="Foo Open",
        start_at=1_700_000_000,
        games=("Street Fighter 6",),
    )
    row = tournament_to_row(node)
    assert row.as_list() == [
        datetime.fromtimestamp(1_700_000_000, tz=timezone.utc),
        "Foo Open",
        "https://www.start.gg/abc/details",
        "US",
        "CA",
        "123 Main St",
        "Street Fighter 6",
    ]


def test_game_names_deduplicated_in_first_appearance_order(make_tournament):
    node = make_tournament("t", games=("A", "B", "A", "C"))
    assert tournament_to_row(node).games == "A / B / C"


def test_unique_game_names_ignores_missing_videogame():
    events = [
        {"id": 1, "videogame": {"name": "Tekken 8"}},
        {"id": 2, "videogame": None},
        {"id": 3},
        {"id": 4, "videogame": {"name": "Tekken 8"}},
    ]
    assert unique_game_names(events) == ["Tekken 8"]


def test_null_events_are_skipped(make_tournament, caplog):
    caplog.set_level("INFO", logger="startgg_sheets.transform.rows")
    node = make_tournament("no-events", games=None)
    assert tournament_to_row(node) is None
    assert any("no-events" in m for m in caplog.messages)


def test_empty_events_list_still_produces_row(make_tournament):
    node = make_tournament("empty", games=())
    row = tournament_to_row(node)
    assert row is not None
    assert row.games == ""


def test_tournaments_to_rows_preserves_order_and_skips(make_tournament):
    nodes = [
        make_tournament("b", start_at=1_700_100_000),
        make_tournament("skip", games=None),
        make_tournament("a", start_at=1_700_000_000),
    ]
    rows = tournaments_to_rows(nodes)
    assert [r.url for r in rows] == [
        "https://www.start.gg/b/details",
        "https://www.start.gg/a/details",
    ]
    assert all(isinstance(r, TournamentRow) for r in rows)


def test_missing_optional_fields_become_empty_strings(make_tournament):
    node = make_tournament("bare", countryCode=None, addrState=None, venueAddress=None)
    row = tournament_to_row(node)
    assert (row.country_code, row.region_code, row.venue_address) == ("", "", "")


def test_epoch_to_datetime_respects_timezone():
    tz = ZoneInfo("America/Los_Angeles")
    dt = epoch_to_datetime(1_700_000_000, tz)
    assert dt.tzinfo is tz
    assert dt == datetime.fromtimestamp(1_700_000_000, tz=timezone.utc)
    assert dt.hour == 14  # 22:13 UTC -> 14:13 PST


def test_build_tournament_url_keeps_slug_path():
    assert (
        build_tournament_url("tournament/genesis-11")
        == "https://www.start.gg/tournament/genesis-11/details"
    )
