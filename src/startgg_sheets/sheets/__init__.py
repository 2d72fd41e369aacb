"""Google Sheets access and row upserts."""

from startgg_sheets.sheets.protocols import WorksheetLike
from startgg_sheets.sheets.sync import SheetSynchronizer, SyncResult, row_to_cells

__all__ = [
    "SheetSynchronizer",
    "SyncResult",
    "WorksheetLike",
    "row_to_cells",
]
