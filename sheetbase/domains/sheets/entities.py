from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional

# Размер пустой сетки для листа без сохраненных данных
DEFAULT_ROWS = 5
DEFAULT_COLUMNS = 5


@dataclass
class Cell:
    row: int
    col: int
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SheetRegistry:
    """Имена листов в порядке добавления"""

    def __init__(self, sheet_names: Optional[Iterable[str]] = None):
        self.sheet_names: List[str] = list(sheet_names or [])

    def __contains__(self, name: str) -> bool:
        return name in self.sheet_names

    def __repr__(self) -> str:
        return f"SheetRegistry(sheet_names={self.sheet_names})"


class SheetTable:
    """Полный снимок сетки одного листа"""

    def __init__(self, collection_name: str, rows: int, columns: int, cells: Optional[List[Cell]] = None):
        self.collection_name = collection_name
        self.rows = rows
        self.columns = columns
        # дубликаты координат и ячейки вне сетки хранятся как есть
        self.cells: List[Cell] = list(cells or [])

    @classmethod
    def empty(cls, collection_name: str) -> "SheetTable":
        return cls(collection_name, DEFAULT_ROWS, DEFAULT_COLUMNS, [])

    def cells_as_dicts(self) -> List[Dict[str, Any]]:
        return [cell.to_dict() for cell in self.cells]

    @staticmethod
    def cells_from_dicts(items: Iterable[Dict[str, Any]]) -> List[Cell]:
        return [Cell(row=item["row"], col=item["col"], value=item.get("value")) for item in items]

    def __repr__(self) -> str:
        return f"SheetTable(collection_name={self.collection_name}, rows={self.rows}, columns={self.columns})"
