from abc import ABC, abstractmethod

from pydantic import BaseModel

from src.domain.entities import User


class SessionTokens(BaseModel):
    """Credentials handed to a freshly signed-in user"""

    session_id: str
    access_token: str
    refresh_token: str


class SessionService(ABC):
    """Signs a user in"""

    @abstractmethod
    async def establish_session(self, user: User) -> SessionTokens:
        pass
