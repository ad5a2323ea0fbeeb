import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheetbase import __version__
from sheetbase.api.router import api_router
from sheetbase.core.config import settings
from sheetbase.core.db import dispose_engine, init_models
from sheetbase.core.exceptions import SheetBaseError
from sheetbase.core.logging_config import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # без БД приложение не стартует
    try:
        await init_models()
    except Exception:
        logger.exception("Database connection error")
        raise
    yield
    await dispose_engine()


app = FastAPI(
    title="SheetBase",
    description="Бэкенд для многолистовых таблиц",
    version=__version__,
    lifespan=lifespan,
)

# При allow_origins=["*"] браузер не примет credentials
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=settings.cors_origin_list != ["*"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(SheetBaseError)
async def sheetbase_error_handler(request: Request, exc: SheetBaseError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg')}" if location else errors[0].get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"success": False, "message": "Something went wrong!"})


app.include_router(api_router)
