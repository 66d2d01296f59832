"""
Begin Password Reset Edit Use Case

Checks a reset link before the new-password form is shown.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return
from .dtos import EditPasswordResponse
from .guards import authorize_password_reset


class BeginPasswordResetEditUseCase:
    """
    Use case guarding entry to the new-password form.

    Read-only: nothing is changed, whatever the outcome.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, user_id: Optional[UUID], token: Optional[str]
    ) -> Result[EditPasswordResponse]:
        async with self.uow:
            authorized = await authorize_password_reset(
                self.uow, user_id, token, self.clock()
            )
            if authorized.is_err():
                return Return.err(authorized.error)

            match = authorized.value
            return Return.ok(
                EditPasswordResponse(
                    status="allowed",
                    user_id=str(match.user.id),
                    email=match.user.email,
                    password_reset_id=str(match.password_reset.id),
                    expires_at=match.password_reset.expires_at,
                )
            )
