import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.config import settings
from sheetbase.core.db import get_db
from sheetbase.core.exceptions import AuthError, StorageError
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.services import SessionManager

logger = logging.getLogger(__name__)


def get_session_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


async def get_current_session(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[Session]:
    """Текущая серверная сессия или None"""
    try:
        return await SessionManager(db).load(get_session_cookie(request))
    except SQLAlchemyError:
        logger.exception("Loading session failed")
        raise StorageError("Internal server error")


async def require_session(
    current_session: Optional[Session] = Depends(get_current_session),
) -> Session:
    """Зависимость для эндпоинтов, требующих входа"""
    if current_session is None:
        raise AuthError("Authentication required")
    return current_session


async def login_gate(
    current_session: Optional[Session] = Depends(get_current_session),
) -> Optional[Session]:
    """Проверка входа для данных листов, если включен REQUIRE_LOGIN"""
    if settings.require_login and current_session is None:
        raise AuthError("Authentication required")
    return current_session
