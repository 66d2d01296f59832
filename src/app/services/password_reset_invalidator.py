from datetime import datetime
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import User


class PasswordResetInvalidator:
    """
    Deactivates every active password reset of a user.

    Runs inside the caller's unit of work; the caller commits.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def run(self, user: User, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        active = await self.uow.password_resets.get_active_by_user_id(user.id, now)
        for password_reset in active:
            password_reset.deactivate(now)
            await self.uow.password_resets.update(password_reset)
        return len(active)
