from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from sheetbase.db.models.session import ServerSession
from sheetbase.domains.identity.entities import Session


class SessionRepository:
    """Хранилище серверных сессий"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, server_session: Session) -> Session:
        self.session.add(
            ServerSession(
                session_id=server_session.session_id,
                data=dict(server_session.data),
                expires_at=server_session.expires_at,
            )
        )
        await self.session.commit()
        return server_session

    async def get(self, session_id: str) -> Optional[Session]:
        result = await self.session.execute(
            select(ServerSession)
            .where(ServerSession.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        db_session = result.scalar_one_or_none()
        if not db_session:
            return None
        return Session(
            session_id=db_session.session_id,
            data=db_session.data,
            expires_at=db_session.expires_at,
        )

    async def save_data(self, server_session: Session) -> None:
        """Перезапись данных сессии целиком"""
        await self.session.execute(
            update(ServerSession)
            .where(ServerSession.session_id == server_session.session_id)
            .values(data=dict(server_session.data))
        )
        await self.session.commit()

    async def delete(self, session_id: str) -> bool:
        result = await self.session.execute(
            delete(ServerSession).where(ServerSession.session_id == session_id)
        )
        await self.session.commit()
        return result.rowcount > 0


    async def delete_expired(self, now: datetime) -> int:
        """Удаление всех просроченных сессий"""
        result = await self.session.execute(
            delete(ServerSession).where(ServerSession.expires_at < now)
        )
        await self.session.commit()
        return result.rowcount
