from fastapi import APIRouter

from sheetbase.api.http import auth_router, health_router, sheets_router, tables_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(sheets_router)
api_router.include_router(tables_router)
