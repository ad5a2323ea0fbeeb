import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.config import settings
from sheetbase.core.exceptions import SheetNotFoundError, ValidationError
from sheetbase.db.repositories.sheet_repository import SheetRegistryRepository, SheetTableRepository
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.services import SessionManager
from sheetbase.domains.sheets.entities import Cell, SheetTable
from sheetbase.domains.sheets.selection import ActiveSheetPointer, active_sheet

logger = logging.getLogger(__name__)


class TableService:
    """Снимки сеток листов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.table_repository = SheetTableRepository(session)

    async def get_table(self, collection_name: str) -> SheetTable:
        """Лист по имени или пустая сетка 5x5, если данных нет"""
        table = await self.table_repository.get(collection_name)
        return table or SheetTable.empty(collection_name)

    async def save_table(self, collection_name: str, rows: int, columns: int, cells: Iterable[Cell]) -> SheetTable:
        """Полная перезапись листа; координаты ячеек не проверяются"""
        table = SheetTable(collection_name, rows, columns, list(cells))
        return await self.table_repository.upsert(table)

    async def delete_table(self, collection_name: str, commit: bool = True) -> int:
        return await self.table_repository.delete(collection_name, commit=commit)


class SheetRegistryService:
    """Реестр имен листов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.registry_repository = SheetRegistryRepository(session)
        self.table_service = TableService(session)

    async def add_sheet(self, name: Optional[str]) -> None:
        """Добавление листа; дубликат отсекает уникальный индекс"""
        if not name:
            raise ValidationError("Sheet name is required!")

        await self.registry_repository.add(name)
        logger.info(f"Sheet {name!r} added")

    async def list_sheets(self) -> List[str]:
        registry = await self.registry_repository.get()
        return registry.sheet_names

    async def remove_sheet(self, name: Optional[str]) -> None:
        """
        Удаление листа из реестра вместе с его данными.

        Обе операции выполняются в одной транзакции. Результат определяет
        только удаление данных: если их не было, бросается SheetNotFoundError,
        но имя из реестра все равно удаляется.
        """
        if not name:
            raise ValidationError("Sheet name is required!")

        try:
            await self.registry_repository.remove(name, commit=False)
            deleted = await self.table_service.delete_table(name, commit=False)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        if deleted == 0:
            raise SheetNotFoundError()

        logger.info(f"Sheet {name!r} deleted")


class SheetSelectionService:
    """
    Выбор активного листа.

    В режиме "process" выбор общий для всех клиентов. В режиме "session"
    выбор хранится в серверной сессии вошедшего пользователя; клиенты
    без сессии используют общий указатель.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        pointer: ActiveSheetPointer = active_sheet,
        scope: str = None,
    ):
        self.session_manager = session_manager
        self.pointer = pointer
        self.scope = scope or settings.active_sheet_scope

    def _per_session(self, server_session: Optional[Session]) -> bool:
        return self.scope == "session" and server_session is not None

    def current(self, server_session: Optional[Session] = None) -> str:
        if self._per_session(server_session):
            return server_session.active_sheet or self.pointer.default_name
        return self.pointer.name

    async def select(self, name: Optional[str], server_session: Optional[Session] = None) -> str:
        """Смена активного листа без проверки его существования"""
        if not name:
            raise ValidationError("Collection name is required!")

        if self._per_session(server_session):
            server_session.data["active_sheet"] = name
            await self.session_manager.save(server_session)
            return name

        return self.pointer.select(name)
