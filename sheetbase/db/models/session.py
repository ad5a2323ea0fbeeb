from sqlalchemy import Column, DateTime, JSON, String
from sqlalchemy.sql import func

from sheetbase.core.db import Base


class ServerSession(Base):
    __tablename__ = "sessions"

    # непрозрачный идентификатор из подписанной cookie
    session_id = Column(String(64), primary_key=True)
    # {"account_id", "username", "active_sheet"?}
    data = Column(JSON, nullable=False, default=dict)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
