from abc import ABC, abstractmethod

from src.domain.entities import PasswordReset, User


class Mailer(ABC):
    """Delivers password reset emails"""

    @abstractmethod
    async def send_password_change_notification(
        self, user: User, password_reset: PasswordReset
    ) -> bool:
        """
        Send the reset link to the user.

        Returns:
            True if the email was handed off, False otherwise. Delivery
            problems are reported through the return value, not raised.
        """
        pass
