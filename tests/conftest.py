"""
SheetBase - конфигурация тестов и фикстуры
"""
import os
import tempfile
from typing import AsyncGenerator

import pytest
from faker import Faker
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Окружение задается до импорта приложения
_test_dir = tempfile.mkdtemp(prefix="sheetbase-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["SESSION_SECRET"] = "test-session-secret-for-testing-only"
os.environ["ENVIRONMENT"] = "testing"
os.environ["ACTIVE_SHEET_SCOPE"] = "process"
os.environ["REQUIRE_LOGIN"] = "false"

from sheetbase.core.db import SessionLocal, drop_models, init_models  # noqa: E402
from sheetbase.domains.sheets.selection import active_sheet  # noqa: E402
from sheetbase.main import app  # noqa: E402

fake = Faker()


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    """Чистая схема и сброшенный активный лист для каждого теста"""
    await init_models()
    active_sheet.reset()
    yield
    active_sheet.reset()
    await drop_models()


@pytest.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session


@pytest.fixture
async def client(database) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def credentials() -> dict:
    return {
        "username": fake.user_name() + fake.numerify("###"),
        "password": fake.password(length=10),
    }


@pytest.fixture
async def logged_in_client(client: AsyncClient, credentials: dict) -> AsyncClient:
    """Клиент с установленной cookie сессии"""
    response = await client.post("/api/signup", json=credentials)
    assert response.status_code == 201
    response = await client.post("/api/login", json=credentials)
    assert response.status_code == 200
    return client
