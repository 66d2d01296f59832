"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.app.services.password_reset_config import PasswordResetConfig
from src.app.use_cases.password_resets import RequestPasswordResetUseCase
from src.domain.entities import User

NOW = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def config():
    return PasswordResetConfig(time_limit=timedelta(minutes=15))


@pytest.fixture
def mailer():
    mailer = MagicMock()
    mailer.send_password_change_notification = AsyncMock(return_value=True)
    return mailer


@pytest.fixture
def user():
    return User(id=uuid4(), email="user@example.com", password_hash="hashed_password")


def make_use_case(mock_uow, config, mailer):
    return RequestPasswordResetUseCase(mock_uow, config, mailer, clock=lambda: NOW)


@pytest.mark.asyncio
async def test_creates_reset_and_sends_email(mock_uow, config, mailer, user):
    mock_uow.users.get_by_normalized_email.return_value = user

    result = await make_use_case(mock_uow, config, mailer).execute("user@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"

    mock_uow.password_resets.create.assert_called_once()
    created = mock_uow.password_resets.create.call_args.args[0]
    assert created.user_id == user.id
    assert created.token
    assert created.created_at == NOW
    assert created.expires_at == NOW + timedelta(minutes=15)

    mock_uow.commit.assert_called_once()
    mailer.send_password_change_notification.assert_called_once_with(user, created)


@pytest.mark.asyncio
async def test_lookup_uses_submitted_email(mock_uow, config, mailer, user):
    mock_uow.users.get_by_normalized_email.return_value = user

    await make_use_case(mock_uow, config, mailer).execute("  USER@Example.com ")

    mock_uow.users.get_by_normalized_email.assert_called_once_with("  USER@Example.com ")


@pytest.mark.asyncio
async def test_unknown_email_creates_nothing_and_sends_nothing(mock_uow, config, mailer):
    mock_uow.users.get_by_normalized_email.return_value = None

    result = await make_use_case(mock_uow, config, mailer).execute("nobody@example.com")

    assert result.is_ok()
    mock_uow.password_resets.create.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()
    mailer.send_password_change_notification.assert_not_called()


@pytest.mark.asyncio
async def test_known_and_unknown_emails_get_identical_responses(mock_uow, config, mailer, user):
    async def get_user(email):
        return user if email == "user@example.com" else None

    mock_uow.users.get_by_normalized_email.side_effect = get_user
    use_case = make_use_case(mock_uow, config, mailer)

    known = await use_case.execute("user@example.com")
    unknown = await use_case.execute("nobody@example.com")

    assert known.value == unknown.value


@pytest.mark.asyncio
async def test_mail_failure_is_not_surfaced(mock_uow, config, mailer, user):
    mock_uow.users.get_by_normalized_email.return_value = user
    mailer.send_password_change_notification.return_value = False

    result = await make_use_case(mock_uow, config, mailer).execute("user@example.com")

    assert result.is_ok()
    assert result.value.status == "sent"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_mailer_exception_gives_same_response_as_unknown_email(
    mock_uow, config, mailer, user
):
    async def get_user(email):
        return user if email == "user@example.com" else None

    mock_uow.users.get_by_normalized_email.side_effect = get_user
    mailer.send_password_change_notification.side_effect = RuntimeError("smtp down")
    use_case = make_use_case(mock_uow, config, mailer)

    known = await use_case.execute("user@example.com")
    unknown = await use_case.execute("nobody@example.com")

    assert known.is_ok()
    assert known.value == unknown.value
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_each_request_creates_a_new_reset(mock_uow, config, mailer, user):
    mock_uow.users.get_by_normalized_email.return_value = user
    use_case = make_use_case(mock_uow, config, mailer)

    await use_case.execute("user@example.com")
    await use_case.execute("user@example.com")

    assert mock_uow.password_resets.create.call_count == 2
    first = mock_uow.password_resets.create.call_args_list[0].args[0]
    second = mock_uow.password_resets.create.call_args_list[1].args[0]
    assert first.token != second.token


@pytest.mark.asyncio
async def test_audit_event_does_not_contain_token(mock_uow, config, mailer, user):
    mock_uow.users.get_by_normalized_email.return_value = user

    await make_use_case(mock_uow, config, mailer).execute("user@example.com")

    created = mock_uow.password_resets.create.call_args.args[0]
    audit_event = mock_uow.audit_events.create.call_args.args[0]
    assert audit_event.action == "password_reset_requested"
    assert audit_event.user_id == user.id
    assert audit_event.event_metadata == {"password_reset_id": str(created.id)}
