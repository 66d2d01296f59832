import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_normalized_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.update = AsyncMock(side_effect=lambda user: user)

    uow.password_resets = MagicMock()
    uow.password_resets.create = AsyncMock(side_effect=lambda reset: reset)
    uow.password_resets.find_by_user_id_and_token = AsyncMock()
    uow.password_resets.get_active_by_user_id = AsyncMock(return_value=[])
    uow.password_resets.update = AsyncMock(side_effect=lambda reset: reset)

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)

    return uow
