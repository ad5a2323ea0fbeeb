from sheetbase.db.repositories.account_repository import AccountRepository
from sheetbase.db.repositories.session_repository import SessionRepository
from sheetbase.db.repositories.sheet_repository import SheetRegistryRepository, SheetTableRepository

__all__ = [
    "AccountRepository",
    "SessionRepository",
    "SheetRegistryRepository",
    "SheetTableRepository",
]
