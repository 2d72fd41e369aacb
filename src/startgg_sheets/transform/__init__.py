"""Tournament record -> sheet row mapping."""

from startgg_sheets.transform.rows import (
    TournamentRow,
    build_tournament_url,
    epoch_to_datetime,
    tournament_to_row,
    tournaments_to_rows,
    unique_game_names,
)

__all__ = [
    "TournamentRow",
    "build_tournament_url",
    "epoch_to_datetime",
    "tournament_to_row",
    "tournaments_to_rows",
    "unique_game_names",
]
