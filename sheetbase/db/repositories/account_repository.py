from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.exceptions import UsernameTakenError
from sheetbase.db.models.account import Account as AccountModel
from sheetbase.domains.identity.entities import Account


class AccountRepository:
    """Репозиторий учетных записей"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, account: Account) -> Account:
        """Создание учетной записи; уникальность имени проверяет БД"""
        db_account = AccountModel(
            uuid=account.uuid,
            username=account.username,
            password_hash=account.password_hash,
        )

        self.session.add(db_account)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise UsernameTakenError()

        await self.session.refresh(db_account)
        return self._to_domain(db_account)

    async def get_by_username(self, username: str) -> Optional[Account]:
        result = await self.session.execute(
            select(AccountModel).where(AccountModel.username == username)
        )
        db_account = result.scalar_one_or_none()
        return self._to_domain(db_account) if db_account else None

    def _to_domain(self, db_account: AccountModel) -> Account:
        """Преобразование модели БД в доменную сущность"""
        return Account(
            uuid=db_account.uuid,
            username=db_account.username,
            password_hash=db_account.password_hash,
            created_at=db_account.created_at,
        )
