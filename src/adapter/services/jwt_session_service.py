import secrets
from datetime import timedelta

import bcrypt

from src.api.utils.jwt import generate_jwt
from src.app.services.session_service import SessionService, SessionTokens
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Session, User

SESSION_LIFETIME = timedelta(days=30)


class JwtSessionService(SessionService):
    """
    Signs users in with a JWT access token and a refresh-token session.

    The session row is written through the unit of work; the caller commits.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def establish_session(self, user: User) -> SessionTokens:
        refresh_token = secrets.token_urlsafe(32)
        refresh_token_hash = bcrypt.hashpw(refresh_token.encode(), bcrypt.gensalt(12))

        session = Session(
            user_id=user.id,
            refresh_token_hash=refresh_token_hash.decode(),
            expires_at=utcnow() + SESSION_LIFETIME,
        )
        await self.uow.sessions.create(session)

        return SessionTokens(
            session_id=str(session.id),
            access_token=generate_jwt(user.id, session.id),
            refresh_token=refresh_token,
        )
