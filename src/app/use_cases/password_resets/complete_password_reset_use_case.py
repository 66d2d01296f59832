"""
Complete Password Reset Use Case

Sets the new password, invalidates every outstanding reset of the user and
signs the user in.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from uuid import UUID

from src.app.services.password_reset_config import PasswordResetConfig
from src.app.services.password_reset_invalidator import PasswordResetInvalidator
from src.app.services.password_updater import PasswordUpdater
from src.app.services.session_service import SessionService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent
from src.libs.result import Result, Return
from .dtos import CompletePasswordResetResponse
from .guards import authorize_password_reset

logger = logging.getLogger(__name__)


class CompletePasswordResetUseCase:
    """
    Use case for choosing a new password through a reset link.

    Business Rules:
    - Same guards as the edit step, re-checked at submission time
    - A rejected password changes nothing; the link stays usable
    - On success every active reset of the user is deactivated,
      including the one just used
    - User is signed in after the change
    - Everything is committed in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: PasswordResetConfig,
        password_updater: PasswordUpdater,
        session_service: SessionService,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.config = config
        self.password_updater = password_updater
        self.session_service = session_service
        self.clock = clock

    async def execute(
        self, user_id: Optional[UUID], token: Optional[str], new_password: str
    ) -> Result[CompletePasswordResetResponse]:
        """
        Errors:
            - FORBIDDEN: missing, unknown or expired reset link
            - BLANK_PASSWORD (or any other password updater error): the
              new password was rejected
        """
        async with self.uow:
            now = self.clock()
            authorized = await authorize_password_reset(self.uow, user_id, token, now)
            if authorized.is_err():
                return Return.err(authorized.error)

            match = authorized.value
            user = match.user

            updated = await self.password_updater.update_password(user, new_password)
            if updated.is_err():
                logger.info(f"New password rejected for user {user.id}: {updated.error.code}")
                return Return.err(updated.error)

            deactivated = await PasswordResetInvalidator(self.uow).run(user, now)

            audit_event = AuditEvent(
                user_id=user.id,
                action="password_reset_completed",
                event_metadata={
                    "password_reset_id": str(match.password_reset.id),
                    "resets_deactivated": deactivated,
                },
            )
            await self.uow.audit_events.create(audit_event)

            tokens = await self.session_service.establish_session(user)

            await self.uow.commit()

            return Return.ok(
                CompletePasswordResetResponse(
                    status="success",
                    redirect_url=self.config.redirect_url,
                    session_established=True,
                    session_id=tokens.session_id,
                    access_token=tokens.access_token,
                    refresh_token=tokens.refresh_token,
                )
            )
