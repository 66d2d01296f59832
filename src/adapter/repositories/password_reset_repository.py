import hmac
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_repository import IPasswordResetRepository
from src.domain.entities import PasswordReset


class PasswordResetRepository(IPasswordResetRepository):
    """PasswordReset repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, password_reset: PasswordReset) -> PasswordReset:
        """Persist a new password reset"""
        self.session.add(password_reset)
        await self.session.flush()
        await self.session.refresh(password_reset)
        return password_reset

    async def find_by_user_id_and_token(
        self, user_id: UUID, token: str, now: Optional[datetime] = None
    ) -> Optional[PasswordReset]:
        """
        Get the reset owned by user_id whose token equals token.

        Candidates are loaded by owner (and, when now is given, limited to
        resets still active at now). Tokens are compared with
        hmac.compare_digest so the lookup time does not depend on how much
        of a guessed token is right.
        """
        stmt = select(PasswordReset).where(PasswordReset.user_id == user_id)
        if now is not None:
            stmt = stmt.where(PasswordReset.expires_at > now)
        result = await self.session.exec(stmt)
        match = None
        for password_reset in result.all():
            # No early exit: every candidate is compared
            if hmac.compare_digest(password_reset.token.encode(), token.encode()):
                match = password_reset
        return match

    async def get_active_by_user_id(
        self, user_id: UUID, now: datetime
    ) -> List[PasswordReset]:
        """Get resets for user_id that are not expired at now"""
        stmt = select(PasswordReset).where(
            PasswordReset.user_id == user_id,
            PasswordReset.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def update(self, password_reset: PasswordReset) -> PasswordReset:
        """Update existing password reset"""
        self.session.add(password_reset)
        await self.session.flush()
        await self.session.refresh(password_reset)
        return password_reset
