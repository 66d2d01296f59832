"""
Guards shared by the edit and update steps of a password reset.

Each guard either passes or returns the FORBIDDEN error. They run in a
fixed order and the first failure wins. Every failure carries the same
user-facing message, whatever the underlying reason.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PasswordReset, User
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

FORBIDDEN = "FORBIDDEN"
FORBIDDEN_MESSAGE = "Please double check the URL or try submitting the form again."


@dataclass
class PasswordResetMatch:
    user: User
    password_reset: PasswordReset


def forbidden() -> Error:
    return Error(FORBIDDEN, FORBIDDEN_MESSAGE)


def forbid_missing_token(token: Optional[str]) -> Optional[Error]:
    if token is None or not str(token).strip():
        logger.info("Password reset rejected: missing token")
        return forbidden()
    return None


async def forbid_non_existent_user(
    uow: UnitOfWork, user_id: Optional[UUID], token: str, now: datetime
) -> Result[PasswordResetMatch]:
    if user_id is None:
        logger.info("Password reset rejected: no usable user id")
        return Return.err(forbidden())

    password_reset = await uow.password_resets.find_by_user_id_and_token(
        user_id, token, now=now
    )
    if password_reset is None or password_reset.is_expired(now):
        logger.info(f"Password reset rejected for user {user_id}: no active reset")
        return Return.err(forbidden())

    user = await uow.users.get_by_id(password_reset.user_id)
    if user is None:
        logger.info(f"Password reset rejected: user {user_id} not found")
        return Return.err(forbidden())

    return Return.ok(PasswordResetMatch(user=user, password_reset=password_reset))


async def authorize_password_reset(
    uow: UnitOfWork, user_id: Optional[UUID], token: Optional[str], now: datetime
) -> Result[PasswordResetMatch]:
    """Run the guards in order; must be called inside an open unit of work"""
    error = forbid_missing_token(token)
    if error is not None:
        return Return.err(error)

    return await forbid_non_existent_user(uow, user_id, token, now)
