from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import PasswordReset


class IPasswordResetRepository(ABC):
    """PasswordReset repository interface - application layer"""

    @abstractmethod
    async def create(self, password_reset: PasswordReset) -> PasswordReset:
        """Persist a new password reset"""
        pass

    @abstractmethod
    async def find_by_user_id_and_token(
        self, user_id: UUID, token: str, now: Optional[datetime] = None
    ) -> Optional[PasswordReset]:
        """
        Get the reset owned by user_id whose token equals token.

        When now is given only resets still active at now are considered;
        without it expired resets are returned too.
        Token comparison must be constant-time.
        """
        pass

    @abstractmethod
    async def get_active_by_user_id(
        self, user_id: UUID, now: datetime
    ) -> List[PasswordReset]:
        """Get resets for user_id that are not expired at now"""
        pass

    @abstractmethod
    async def update(self, password_reset: PasswordReset) -> PasswordReset:
        """Update existing password reset"""
        pass
