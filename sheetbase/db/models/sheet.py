from sqlalchemy import Column, DateTime, Integer, JSON, String
from sqlalchemy.sql import func

from sheetbase.core.db import Base
from sheetbase.db.base import BaseModel


class SheetName(Base):
    """Имя листа в реестре; порядок добавления задает id"""

    __tablename__ = "sheet_names"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class SheetTable(BaseModel):
    __tablename__ = "sheet_tables"

    collection_name = Column(String(255), unique=True, index=True, nullable=False)
    rows = Column(Integer, nullable=False)
    columns = Column(Integer, nullable=False)
    # разреженный список ячеек [{"row", "col", "value"}]
    data = Column(JSON, nullable=False, default=list)
