import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.auth import login_gate
from sheetbase.core.db import get_db
from sheetbase.core.exceptions import StorageError
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.services import SessionManager
from sheetbase.domains.sheets.entities import Cell
from sheetbase.domains.sheets.schemas import (
    CellSchema, MessageResponse, SaveTableRequest, TableMetadata, TableResponse
)
from sheetbase.domains.sheets.services import SheetSelectionService, TableService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tables"])


@router.get("/getTable", response_model=TableResponse)
async def get_table(
    current_session: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Данные активного листа"""
    collection_name = SheetSelectionService(SessionManager(db)).current(current_session)
    table_service = TableService(db)

    try:
        table = await table_service.get_table(collection_name)
    except SQLAlchemyError:
        logger.exception(f"Fetching table {collection_name!r} failed")
        raise StorageError("Error fetching table data")

    return TableResponse(
        metadata=TableMetadata(rows=table.rows, columns=table.columns),
        data=[CellSchema(row=cell.row, col=cell.col, value=cell.value) for cell in table.cells],
    )


@router.post("/saveTable", response_model=MessageResponse)
async def save_table(
    table_data: SaveTableRequest,
    current_session: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Сохранение активного листа целиком"""
    collection_name = SheetSelectionService(SessionManager(db)).current(current_session)
    table_service = TableService(db)

    try:
        await table_service.save_table(
            collection_name,
            table_data.rows,
            table_data.columns,
            [Cell(row=cell.row, col=cell.col, value=cell.value) for cell in table_data.data],
        )
    except SQLAlchemyError:
        logger.exception(f"Saving table {collection_name!r} failed")
        raise StorageError("Error saving table data")

    return MessageResponse(message="Table data saved successfully")
