from abc import ABC, abstractmethod

from src.domain.entities import User
from src.libs.result import Result


class PasswordUpdater(ABC):
    """Validates, hashes and stores a user's new password"""

    @abstractmethod
    async def update_password(self, user: User, new_password: str) -> Result[None]:
        """
        Returns:
            Result with None if the password was stored, or Error if the
            password was rejected (nothing is stored in that case)
        """
        pass
