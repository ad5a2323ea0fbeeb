from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SetCollectionRequest(BaseModel):
    collection: Optional[str] = None


class SheetNameRequest(BaseModel):
    """Запрос с именем листа (addSheet, deleteSheet)"""
    sheet_name: Optional[str] = Field(None, alias="sheetName")

    model_config = ConfigDict(populate_by_name=True)


class SheetResultResponse(BaseModel):
    success: bool
    message: str


class SheetListResponse(BaseModel):
    sheets: List[str]


class CellSchema(BaseModel):
    """Ячейка сетки"""
    row: int
    col: int
    value: Optional[str] = None

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        # числа и булевы значения хранятся строками
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v


class TableMetadata(BaseModel):
    rows: int
    columns: int


class TableResponse(BaseModel):
    metadata: TableMetadata
    data: List[CellSchema]


class SaveTableRequest(BaseModel):
    """Полный снимок листа"""
    rows: int = Field(..., ge=0)
    columns: int = Field(..., ge=0)
    data: List[CellSchema] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str
