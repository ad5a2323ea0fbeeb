from sqlalchemy import Column, String

from sheetbase.db.base import BaseModel


class Account(BaseModel):
    __tablename__ = "accounts"

    username = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
