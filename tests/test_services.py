from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.core.exceptions import (
    AccountNotFoundError, AuthError, SheetAlreadyExistsError, SheetNotFoundError, UsernameTakenError, ValidationError
)
from sheetbase.core.security import sign_session_id
from sheetbase.db.models import ServerSession
from sheetbase.db.repositories.session_repository import SessionRepository
from sheetbase.db.repositories.sheet_repository import SheetRegistryRepository
from sheetbase.domains.identity.entities import Session
from sheetbase.domains.identity.services import IdentityService, SessionManager
from sheetbase.domains.sheets.entities import Cell
from sheetbase.domains.sheets.selection import ActiveSheetPointer
from sheetbase.domains.sheets.services import SheetRegistryService, SheetSelectionService, TableService


@pytest.mark.asyncio
async def test_registry_add_and_list(db_session: AsyncSession):
    service = SheetRegistryService(db_session)

    assert await service.list_sheets() == []
    await service.add_sheet("Budget")
    await service.add_sheet("Plan")

    assert await service.list_sheets() == ["Budget", "Plan"]


@pytest.mark.asyncio
async def test_registry_duplicate(db_session: AsyncSession):
    service = SheetRegistryService(db_session)
    await service.add_sheet("Budget")

    with pytest.raises(SheetAlreadyExistsError):
        await service.add_sheet("Budget")

    assert await service.list_sheets() == ["Budget"]


@pytest.mark.asyncio
async def test_registry_requires_name(db_session: AsyncSession):
    service = SheetRegistryService(db_session)

    with pytest.raises(ValidationError):
        await service.add_sheet("")
    with pytest.raises(ValidationError):
        await service.remove_sheet(None)


@pytest.mark.asyncio
async def test_remove_sheet_deletes_registry_and_table(db_session: AsyncSession):
    registry_service = SheetRegistryService(db_session)
    table_service = TableService(db_session)
    await registry_service.add_sheet("Budget")
    await table_service.save_table("Budget", 3, 3, [Cell(0, 0, "x")])

    await registry_service.remove_sheet("Budget")

    assert await registry_service.list_sheets() == []
    table = await table_service.get_table("Budget")
    assert (table.rows, table.columns, table.cells) == (5, 5, [])


@pytest.mark.asyncio
async def test_remove_sheet_without_table(db_session: AsyncSession):
    """Нет данных - SheetNotFoundError, но имя из реестра удалено"""
    registry_service = SheetRegistryService(db_session)
    await registry_service.add_sheet("Draft")

    with pytest.raises(SheetNotFoundError):
        await registry_service.remove_sheet("Draft")

    assert await registry_service.list_sheets() == []


@pytest.mark.asyncio
async def test_registry_names_are_unique_in_database(db_session: AsyncSession):
    repository = SheetRegistryRepository(db_session)
    assert (await repository.get()).sheet_names == []

    await repository.add("A")
    await repository.add("B")
    with pytest.raises(SheetAlreadyExistsError):
        await repository.add("A")

    registry = await repository.get()
    assert registry.sheet_names == ["A", "B"]
    assert "B" in registry

    assert await repository.remove("A") == 1
    assert await repository.remove("A") == 0


@pytest.mark.asyncio
async def test_table_round_trip(db_session: AsyncSession):
    service = TableService(db_session)
    cells = [Cell(0, 0, "x"), Cell(0, 0, "y"), Cell(99, 99, None)]

    await service.save_table("Sheet", 3, 4, cells)
    table = await service.get_table("Sheet")

    assert (table.rows, table.columns) == (3, 4)
    assert table.cells == cells


@pytest.mark.asyncio
async def test_delete_table_count(db_session: AsyncSession):
    service = TableService(db_session)
    await service.save_table("Sheet", 1, 1, [])

    assert await service.delete_table("Sheet") == 1
    assert await service.delete_table("Sheet") == 0


@pytest.mark.asyncio
async def test_signup_and_login(db_session: AsyncSession):
    service = IdentityService(db_session)
    account = await service.signup("carol", "secret1")

    assert account.password_hash != "secret1"
    assert await service.login("carol", "secret1") == account

    with pytest.raises(AuthError):
        await service.login("carol", "wrong-password")
    with pytest.raises(AccountNotFoundError):
        await service.login("dave", "secret1")


@pytest.mark.asyncio
async def test_signup_duplicate_username(db_session: AsyncSession):
    service = IdentityService(db_session)
    await service.signup("carol", "secret1")

    with pytest.raises(UsernameTakenError):
        await service.signup("carol", "another1")


@pytest.mark.asyncio
async def test_session_start_and_load(db_session: AsyncSession):
    account = await IdentityService(db_session).signup("erin", "secret1")
    manager = SessionManager(db_session)

    server_session, cookie_value = await manager.start(account)
    loaded = await manager.load(cookie_value)

    assert loaded.session_id == server_session.session_id
    assert loaded.user() == {"id": str(account.uuid), "username": "erin"}

    assert await manager.destroy(cookie_value) is True
    assert await manager.load(cookie_value) is None


@pytest.mark.asyncio
async def test_expired_session_is_not_logged_in(db_session: AsyncSession):
    repository = SessionRepository(db_session)
    expired = Session(
        session_id="expired-session",
        data={"account_id": "1", "username": "old"},
        expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
    )
    await repository.create(expired)

    manager = SessionManager(db_session)
    assert await manager.load(sign_session_id("expired-session")) is None
    # просроченная запись удаляется при обращении
    assert await repository.get("expired-session") is None


@pytest.mark.asyncio
async def test_unknown_session_is_not_logged_in(db_session: AsyncSession):
    manager = SessionManager(db_session)

    assert await manager.load(sign_session_id("never-created")) is None
    assert await manager.load(None) is None


@pytest.mark.asyncio
async def test_selection_process_scope(db_session: AsyncSession):
    pointer = ActiveSheetPointer("defaultCollection")
    service = SheetSelectionService(SessionManager(db_session), pointer=pointer, scope="process")

    assert service.current() == "defaultCollection"
    await service.select("Budget")
    assert service.current() == "Budget"
    assert pointer.name == "Budget"

    with pytest.raises(ValidationError):
        await service.select("")


@pytest.mark.asyncio
async def test_selection_session_scope(db_session: AsyncSession):
    account = await IdentityService(db_session).signup("frank", "secret1")
    manager = SessionManager(db_session)
    server_session, cookie_value = await manager.start(account)

    pointer = ActiveSheetPointer("defaultCollection")
    service = SheetSelectionService(manager, pointer=pointer, scope="session")

    await service.select("Private", server_session)

    assert pointer.name == "defaultCollection"
    reloaded = await manager.load(cookie_value)
    assert service.current(reloaded) == "Private"
    # без сессии используется общий указатель
    assert service.current(None) == "defaultCollection"


@pytest.mark.asyncio
async def test_table_upsert_replaces_existing_row(db_session: AsyncSession):
    service = TableService(db_session)
    await service.save_table("Sheet", 1, 1, [Cell(0, 0, "old")])
    await service.save_table("Sheet", 2, 3, [Cell(1, 2, "new")])

    table = await service.get_table("Sheet")

    assert (table.rows, table.columns) == (2, 3)
    assert table.cells == [Cell(1, 2, "new")]
    assert await service.delete_table("Sheet") == 1


@pytest.mark.asyncio
async def test_login_purges_unseen_expired_sessions(db_session: AsyncSession):
    """Просроченные сессии удаляются, даже если их cookie больше не приходит"""
    repository = SessionRepository(db_session)
    now = datetime.now(timezone.utc)
    expiries = {
        "stale-1": now - timedelta(days=1),
        "stale-2": now - timedelta(seconds=1),
        "alive": now + timedelta(days=1),
    }
    for session_id, expires_at in expiries.items():
        await repository.create(Session(session_id=session_id, data={}, expires_at=expires_at))

    account = await IdentityService(db_session).signup("grace", "secret1")
    await SessionManager(db_session).start(account)

    assert await repository.get("stale-1") is None
    assert await repository.get("stale-2") is None
    assert await repository.get("alive") is not None


@pytest.mark.asyncio
async def test_delete_expired_count(db_session: AsyncSession):
    repository = SessionRepository(db_session)
    now = datetime.now(timezone.utc)
    await repository.create(Session(session_id="old", data={}, expires_at=now - timedelta(hours=1)))

    assert await repository.delete_expired(now) == 1
    assert await repository.delete_expired(now) == 0


@pytest.mark.asyncio
async def test_session_row_is_keyed_by_session_id(db_session: AsyncSession):
    assert [column.name for column in ServerSession.__table__.primary_key.columns] == ["session_id"]

    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
    await SessionRepository(db_session).create(Session(session_id="abc", data={"username": "ada"}, expires_at=expires_at))

    row = await db_session.get(ServerSession, "abc")
    assert row is not None
    assert row.data == {"username": "ada"}
