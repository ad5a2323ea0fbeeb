from sheetbase.api.http.health import router as health_router
from sheetbase.api.http.auth import router as auth_router
from sheetbase.api.http.sheets import router as sheets_router
from sheetbase.api.http.tables import router as tables_router

__all__ = [
    "health_router",
    "auth_router",
    "sheets_router",
    "tables_router",
]
