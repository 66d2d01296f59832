"""
Request Password Reset Use Case

Creates a reset for the account behind an email and mails the link.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.services.mailer import Mailer
from src.app.services.password_reset_config import PasswordResetConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, PasswordReset
from src.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

SENT_MESSAGE = (
    "You will receive an email within the next few minutes. "
    "It contains instructions for changing your password."
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Lookup is by normalized (trimmed, case-insensitive) email
    - Each request creates a new reset; earlier ones stay valid
    - Reset expires after the configured time limit
    - No email enumeration (same response for known/unknown emails)
    - Email delivery is best effort and never changes the response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: PasswordResetConfig,
        mailer: Mailer,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.config = config
        self.mailer = mailer
        self.clock = clock

    def _response(self) -> Result[RequestPasswordResetResponse]:
        return Return.ok(RequestPasswordResetResponse(status="sent", message=SENT_MESSAGE))

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_normalized_email(email)

            if user is None:
                return self._response()

            password_reset = PasswordReset.issue(
                user.id, self.config.time_limit, now=self.clock()
            )
            await self.uow.password_resets.create(password_reset)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_requested",
                event_metadata={"password_reset_id": str(password_reset.id)},
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

        try:
            delivered = await self.mailer.send_password_change_notification(user, password_reset)
        except Exception:
            # Mail errors never change the response
            logger.exception(f"Password reset email for user {user.id} failed")
        else:
            if not delivered:
                logger.warning(f"Password reset email for user {user.id} was not delivered")

        return self._response()
