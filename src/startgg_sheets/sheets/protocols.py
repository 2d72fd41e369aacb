"""Protocol for the subset of the gspread worksheet API the synchronizer uses."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WorksheetLike(Protocol):
    """Structural type satisfied by ``gspread.Worksheet``.

    Lets tests substitute an in-memory worksheet without touching the
    Sheets API.
    """

    @property
    def row_count(self) -> int: ...

    @property
    def col_count(self) -> int: ...

    def row_values(self, row: int, **kwargs: Any) -> list: ...

    def col_values(self, col: int, **kwargs: Any) -> list: ...

    def update(self, values: Any = None, range_name: str | None = None, **kwargs: Any) -> Any: ...

    def insert_row(self, values: list, index: int = 1, **kwargs: Any) -> Any: ...

    def freeze(self, rows: int | None = None, cols: int | None = None) -> Any: ...

    def sort(self, *specs: tuple, range: str | None = None) -> Any: ...
