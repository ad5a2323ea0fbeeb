import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.auth import get_session_cookie, require_session
from sheetbase.core.config import settings
from sheetbase.core.db import get_db
from sheetbase.core.exceptions import StorageError
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.schemas import (
    LoginRequest, LoginResponse, MessageResponse, SessionResponse, SignupRequest, UserOut
)
from sheetbase.domains.identity.services import IdentityService, SessionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["authentication"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)

    try:
        await identity_service.signup(signup_data.username, signup_data.password)
    except SQLAlchemyError:
        logger.exception("Signup failed")
        raise StorageError("Internal server error")

    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя и создание серверной сессии"""
    identity_service = IdentityService(db)
    session_manager = SessionManager(db)

    try:
        account = await identity_service.login(login_data.username, login_data.password)
        _, cookie_value = await session_manager.start(account)
    except SQLAlchemyError:
        logger.exception("Login failed")
        raise StorageError("Internal server error")

    response.set_cookie(
        key=settings.session_cookie_name,
        value=cookie_value,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )

    return LoginResponse(
        success=True,
        message="Login successful",
        user=UserOut(**account.public()),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Выход пользователя"""
    session_manager = SessionManager(db)

    try:
        await session_manager.destroy(get_session_cookie(request))
    except SQLAlchemyError:
        logger.exception("Logout failed")
        raise StorageError("Internal server error")

    response.delete_cookie(settings.session_cookie_name)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=SessionResponse)
async def me(current_session: Session = Depends(require_session)):
    """Пользователь текущей сессии"""
    return SessionResponse(success=True, user=UserOut(**current_session.user()))
