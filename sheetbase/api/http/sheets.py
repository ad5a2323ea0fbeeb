import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.auth import login_gate
from sheetbase.core.db import get_db
from sheetbase.core.exceptions import SheetAlreadyExistsError, StorageError
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.services import SessionManager
from sheetbase.domains.sheets.schemas import (
    MessageResponse, SetCollectionRequest, SheetListResponse, SheetNameRequest, SheetResultResponse
)
from sheetbase.domains.sheets.services import SheetRegistryService, SheetSelectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sheets"])


@router.post("/setCollection", response_model=MessageResponse)
async def set_collection(
    request_data: SetCollectionRequest,
    current_session: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Выбор активного листа"""
    selection_service = SheetSelectionService(SessionManager(db))

    try:
        name = await selection_service.select(request_data.collection, current_session)
    except SQLAlchemyError:
        logger.exception("Selecting sheet failed")
        raise StorageError("Internal server error")

    return MessageResponse(message=f"Active collection set to {name}")


@router.post("/addSheet", response_model=SheetResultResponse)
async def add_sheet(
    request_data: SheetNameRequest,
    _: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Добавление листа в реестр"""
    registry_service = SheetRegistryService(db)

    try:
        await registry_service.add_sheet(request_data.sheet_name)
    except SheetAlreadyExistsError as e:
        return SheetResultResponse(success=False, message=e.message)
    except SQLAlchemyError:
        logger.exception("Adding sheet failed")
        raise StorageError("Error adding sheet")

    return SheetResultResponse(success=True, message="Sheet added successfully")


@router.get("/getSheets", response_model=SheetListResponse)
async def get_sheets(
    _: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Список листов"""
    registry_service = SheetRegistryService(db)

    try:
        sheets = await registry_service.list_sheets()
    except SQLAlchemyError:
        logger.exception("Fetching sheets failed")
        raise StorageError("Error fetching sheets")

    return SheetListResponse(sheets=sheets)


@router.delete("/deleteSheet", response_model=SheetResultResponse)
async def delete_sheet(
    request_data: SheetNameRequest,
    _: Optional[Session] = Depends(login_gate),
    db: AsyncSession = Depends(get_db)
):
    """Удаление листа и его данных"""
    registry_service = SheetRegistryService(db)

    try:
        await registry_service.remove_sheet(request_data.sheet_name)
    except SQLAlchemyError:
        logger.exception("Deleting sheet failed")
        raise StorageError("Internal server error")

    return SheetResultResponse(
        success=True,
        message=f'Sheet "{request_data.sheet_name}" deleted successfully',
    )
