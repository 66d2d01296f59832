from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, session: Session) -> Session:
        """Create a new session"""
        self.session.add(session)
        await self.session.flush()
        await self.session.refresh(session)
        return session
