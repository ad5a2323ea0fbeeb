from sheetbase.domains.sheets.entities import Cell, SheetRegistry, SheetTable
from sheetbase.domains.sheets.selection import ActiveSheetPointer, active_sheet

__all__ = [
    "Cell", "SheetRegistry", "SheetTable",
    "ActiveSheetPointer", "active_sheet",
]
