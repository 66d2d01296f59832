"""
Integration tests for requesting a password reset

- A reset is created and mailed for a known email
- Unknown emails get the same response and no email
"""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.mailer import Mailer
from src.depends import get_mailer
from src.domain.entities import AuditEvent, PasswordReset
from tests.integration.factories import create_user


@pytest.mark.asyncio
async def test_request_creates_reset_and_mails_link(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_user(db_session, email="reset@example.com")
    user_id = user.id

    response = await client.post("/passwords", json={"email": "reset@example.com"})

    assert response.status_code == 200
    assert response.json()["status"] == "sent"

    result = await db_session.exec(select(PasswordReset).where(PasswordReset.user_id == user_id))
    resets = result.all()
    assert len(resets) == 1
    assert resets[0].token
    assert resets[0].expires_at > resets[0].created_at

    assert mailer.sent == [(user_id, resets[0].token)]

    result = await db_session.exec(select(AuditEvent).where(AuditEvent.user_id == user_id))
    assert [event.action for event in result.all()] == ["password_reset_requested"]


@pytest.mark.asyncio
async def test_request_matches_email_case_insensitively(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_user(db_session, email="mixed@example.com")
    user_id = user.id

    response = await client.post("/passwords", json={"email": "MIXED@Example.COM"})

    assert response.status_code == 200
    assert len(mailer.sent) == 1
    assert mailer.sent[0][0] == user_id


@pytest.mark.asyncio
async def test_unknown_email_gets_same_response(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    await create_user(db_session, email="known@example.com")

    known = await client.post("/passwords", json={"email": "known@example.com"})
    unknown = await client.post("/passwords", json={"email": "unknown@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_repeated_requests_keep_earlier_resets_active(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_user(db_session, email="twice@example.com")
    user_id = str(user.id)

    await client.post("/passwords", json={"email": "twice@example.com"})
    await client.post("/passwords", json={"email": "twice@example.com"})

    first_token, second_token = mailer.sent[0][1], mailer.sent[1][1]
    assert first_token != second_token

    for token in (first_token, second_token):
        response = await client.get(
            "/passwords/edit", params={"user_id": user_id, "token": token}
        )
        assert response.status_code == 200


@pytest.mark.asyncio
async def test_invalid_email_format_rejected(client: AsyncClient, mailer):
    response = await client.post("/passwords", json={"email": "not-an-email"})

    assert response.status_code == 422
    assert mailer.sent == []


@pytest.mark.asyncio
async def test_new_form(client: AsyncClient):
    response = await client.get("/passwords/new")

    assert response.status_code == 200
    assert response.json()["fields"] == ["email"]


class FailingMailer(Mailer):
    async def send_password_change_notification(self, user, password_reset) -> bool:
        raise RuntimeError("mail transport unavailable")


@pytest.mark.asyncio
async def test_mailer_crash_does_not_reveal_known_email(
    app, client: AsyncClient, db_session: AsyncSession
):
    user = await create_user(db_session, email="known@example.com")
    user_id = user.id
    app.dependency_overrides[get_mailer] = lambda: FailingMailer()

    known = await client.post("/passwords", json={"email": "known@example.com"})
    unknown = await client.post("/passwords", json={"email": "unknown@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()

    result = await db_session.exec(select(PasswordReset).where(PasswordReset.user_id == user_id))
    assert len(result.all()) == 1
