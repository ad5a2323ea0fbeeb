import secrets
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from sheetbase.core.config import settings

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt учитывает только первые 72 байта
BCRYPT_MAX_BYTES = 72


def _truncate(password: str) -> str:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES].decode("utf-8", "ignore")


def get_password_hash(password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(_truncate(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    return pwd_context.verify(_truncate(plain_password), hashed_password)


def generate_session_id() -> str:
    """Новый непрозрачный идентификатор сессии"""
    return secrets.token_urlsafe(32)


def sign_session_id(session_id: str) -> str:
    """Подпись идентификатора сессии для cookie"""
    return jwt.encode(
        {"sid": session_id},
        settings.session_secret,
        algorithm=settings.session_algorithm,
    )


def unsign_session_id(token: str) -> Optional[str]:
    """Извлечение идентификатора сессии из cookie, None при неверной подписи"""
    if not token:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
        )
    except JWTError:
        return None

    session_id = payload.get("sid")
    return session_id if isinstance(session_id, str) else None
