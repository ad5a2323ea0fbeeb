import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sheetbase.core.security import generate_session_id, get_password_hash, verify_password


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account:
    """Учетная запись пользователя"""

    def __init__(
        self,
        uuid: uuid.UUID,
        username: str,
        password_hash: str,
        created_at: Optional[datetime] = None,
    ):
        self.uuid = uuid
        self.username = username
        self.password_hash = password_hash
        self.created_at = created_at or utcnow()

    def authenticate(self, password: str) -> bool:
        """Проверка пароля"""
        return verify_password(password, self.password_hash)

    def public(self) -> Dict[str, str]:
        return {"id": str(self.uuid), "username": self.username}

    @classmethod
    def create_account(cls, username: str, password: str) -> "Account":
        """Новая учетная запись с хешированием пароля"""
        return cls(
            uuid=uuid.uuid4(),
            username=username,
            password_hash=get_password_hash(password),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Account):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Account(uuid={self.uuid}, username={self.username})"


class Session:
    """Серверная сессия, привязанная к cookie браузера"""

    def __init__(self, session_id: str, data: Dict[str, Any], expires_at: datetime):
        self.session_id = session_id
        self.data = dict(data or {})
        # SQLite отдает naive datetime, считаем его UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        self.expires_at = expires_at

    @property
    def account_id(self) -> Optional[str]:
        return self.data.get("account_id")

    @property
    def username(self) -> Optional[str]:
        return self.data.get("username")

    @property
    def active_sheet(self) -> Optional[str]:
        return self.data.get("active_sheet")

    def user(self) -> Dict[str, Optional[str]]:
        return {"id": self.account_id, "username": self.username}

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    @classmethod
    def start(cls, account: Account, max_age: int) -> "Session":
        """Новая сессия для вошедшего пользователя"""
        return cls(
            session_id=generate_session_id(),
            data={"account_id": str(account.uuid), "username": account.username},
            expires_at=utcnow() + timedelta(seconds=max_age),
        )

    def __repr__(self) -> str:
        return f"Session(username={self.username}, expires_at={self.expires_at})"
