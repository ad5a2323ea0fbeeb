import uuid
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from sheetbase.core.exceptions import SheetAlreadyExistsError
from sheetbase.db.models.sheet import SheetName as SheetNameModel, SheetTable as SheetTableModel
from sheetbase.domains.sheets.entities import SheetRegistry, SheetTable

# INSERT ... ON CONFLICT для поддерживаемых драйверов
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class SheetRegistryRepository:
    """Репозиторий реестра листов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self) -> SheetRegistry:
        """Все имена листов в порядке добавления"""
        result = await self.session.execute(
            select(SheetNameModel.name).order_by(SheetNameModel.id)
        )
        return SheetRegistry(result.scalars().all())

    async def add(self, name: str) -> None:
        """Добавление имени; уникальность проверяет БД"""
        self.session.add(SheetNameModel(name=name))
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise SheetAlreadyExistsError()

    async def remove(self, name: str, commit: bool = True) -> int:
        """Удаление имени; отсутствие имени не ошибка"""
        result = await self.session.execute(
            delete(SheetNameModel).where(SheetNameModel.name == name)
        )
        if commit:
            await self.session.commit()
        return result.rowcount


class SheetTableRepository:
    """Репозиторий данных листов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, collection_name: str) -> Optional[SheetTable]:
        result = await self.session.execute(
            select(SheetTableModel)
            .where(SheetTableModel.collection_name == collection_name)
            .execution_options(populate_existing=True)
        )
        db_table = result.scalar_one_or_none()
        return self._to_domain(db_table) if db_table else None

    async def upsert(self, table: SheetTable) -> SheetTable:
        """Полная перезапись листа или создание одним запросом"""
        insert = UPSERT_INSERTS[self.session.bind.dialect.name]
        values = {
            "rows": table.rows,
            "columns": table.columns,
            "data": table.cells_as_dicts(),
        }

        stmt = insert(SheetTableModel).values(
            uuid=uuid.uuid4(),
            collection_name=table.collection_name,
            **values,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["collection_name"],
            set_={**values, "updated_at": func.now()},
        )

        await self.session.execute(stmt)
        await self.session.commit()
        return table

    async def delete(self, collection_name: str, commit: bool = True) -> int:
        """Удаление листа, возвращает число удаленных записей"""
        result = await self.session.execute(
            delete(SheetTableModel).where(SheetTableModel.collection_name == collection_name)
        )
        if commit:
            await self.session.commit()
        return result.rowcount

    def _to_domain(self, db_table: SheetTableModel) -> SheetTable:
        return SheetTable(
            collection_name=db_table.collection_name,
            rows=db_table.rows,
            columns=db_table.columns,
            cells=SheetTable.cells_from_dicts(db_table.data or []),
        )
