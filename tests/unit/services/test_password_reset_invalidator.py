"""
Unit tests for PasswordResetInvalidator
"""
from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from src.app.services.password_reset_invalidator import PasswordResetInvalidator
from src.domain.entities import PasswordReset, User

T0 = datetime(2024, 1, 1, 12, 0, 0)


def make_user():
    return User(id=uuid4(), email="user@example.com", password_hash="hashed_password")


@pytest.mark.asyncio
async def test_deactivates_every_active_reset(mock_uow):
    user = make_user()
    resets = [
        PasswordReset.issue(user.id, timedelta(minutes=15), now=T0),
        PasswordReset.issue(user.id, timedelta(minutes=15), now=T0 + timedelta(minutes=1)),
    ]
    mock_uow.password_resets.get_active_by_user_id.return_value = resets
    now = T0 + timedelta(minutes=2)

    count = await PasswordResetInvalidator(mock_uow).run(user, now)

    assert count == 2
    mock_uow.password_resets.get_active_by_user_id.assert_called_once_with(user.id, now)
    assert mock_uow.password_resets.update.call_count == 2
    assert all(reset.is_expired(now) for reset in resets)


@pytest.mark.asyncio
async def test_no_active_resets_is_a_no_op(mock_uow):
    mock_uow.password_resets.get_active_by_user_id.return_value = []

    count = await PasswordResetInvalidator(mock_uow).run(make_user(), T0)

    assert count == 0
    mock_uow.password_resets.update.assert_not_called()
