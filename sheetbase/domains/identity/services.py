import logging
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.config import settings
from sheetbase.core.exceptions import AccountNotFoundError, AuthError, ValidationError
from sheetbase.core.security import sign_session_id, unsign_session_id
from sheetbase.db.repositories.account_repository import AccountRepository
from sheetbase.db.repositories.session_repository import SessionRepository
from sheetbase.domains.identity.entities import Account, Session, utcnow

logger = logging.getLogger(__name__)

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6


class IdentityService:
    """Регистрация и проверка учетных данных"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.account_repository = AccountRepository(session)

    async def signup(self, username: Optional[str], password: Optional[str]) -> Account:
        """Регистрация новой учетной записи"""
        if not username or not password:
            raise ValidationError("Username and password are required!")
        if len(username) < MIN_USERNAME_LENGTH:
            raise ValidationError(f"Username must be at least {MIN_USERNAME_LENGTH} characters long")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        # дубликат имени ловит уникальный индекс, а не предварительная проверка
        account = await self.account_repository.create(Account.create_account(username, password))
        logger.info(f"Registered account {account.username}")
        return account

    async def login(self, username: Optional[str], password: Optional[str]) -> Account:
        """Проверка имени и пароля"""
        if not username or not password:
            raise ValidationError("Username and password are required")

        account = await self.account_repository.get_by_username(username)
        if not account:
            raise AccountNotFoundError()

        if not account.authenticate(password):
            logger.info(f"Failed login for {username}")
            raise AuthError("Invalid credentials")

        return account


class SessionManager:
    """Серверные сессии, идентификатор которых хранится в подписанной cookie"""

    def __init__(self, session: AsyncSession, max_age: int = None):
        self.session = session
        self.max_age = max_age if max_age is not None else settings.session_max_age
        self.session_repository = SessionRepository(session)

    async def start(self, account: Account) -> Tuple[Session, str]:
        """Новая сессия; возвращает сессию и значение для cookie"""
        # просроченные сессии убираются при каждом входе
        purged = await self.session_repository.delete_expired(utcnow())
        if purged:
            logger.info(f"Purged {purged} expired sessions")

        server_session = Session.start(account, self.max_age)
        await self.session_repository.create(server_session)
        logger.info(f"Session started for {account.username}")
        return server_session, sign_session_id(server_session.session_id)

    async def load(self, cookie_value: Optional[str]) -> Optional[Session]:
        """Сессия по cookie; любая проблема означает "не вошел", а не ошибку"""
        session_id = unsign_session_id(cookie_value)
        if not session_id:
            return None

        server_session = await self.session_repository.get(session_id)
        if server_session is None:
            return None

        if server_session.is_expired():
            await self.session_repository.delete(session_id)
            return None

        return server_session

    async def save(self, server_session: Session) -> None:
        await self.session_repository.save_data(server_session)

    async def destroy(self, cookie_value: Optional[str]) -> bool:
        session_id = unsign_session_id(cookie_value)
        if not session_id:
            return False
        return await self.session_repository.delete(session_id)
