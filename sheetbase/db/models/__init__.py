from sheetbase.db.models.account import Account
from sheetbase.db.models.session import ServerSession
from sheetbase.db.models.sheet import SheetName, SheetTable

__all__ = [
    "Account",
    "ServerSession",
    "SheetName",
    "SheetTable",
]
