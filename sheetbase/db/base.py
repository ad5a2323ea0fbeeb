import uuid

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.sql import func

from sheetbase.core.db import Base


class BaseModel(Base):
    """Общие колонки для всех таблиц"""

    __abstract__ = True

    uuid = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
