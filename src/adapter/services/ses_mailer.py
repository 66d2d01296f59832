"""
Email delivery for password reset links via AWS SES.

In development mode emails are logged instead of sent. The reset token is
never written to the log.
"""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.app.services.mailer import Mailer
from src.app.services.password_reset_config import PasswordResetConfig
from src.domain.entities import PasswordReset, User

logger = logging.getLogger(__name__)

SUBJECT = "Change your password"


class SesMailer(Mailer):
    """Sends password reset emails through AWS SES"""

    def __init__(
        self,
        reset_config: PasswordResetConfig,
        from_email: str,
        region: str = "us-east-1",
        development_mode: bool = True,
        ses_client=None,
    ):
        self.reset_config = reset_config
        self.from_email = from_email
        self.development_mode = development_mode
        self.ses_client = ses_client
        if self.ses_client is None and not self.development_mode:
            self.ses_client = boto3.client("ses", region_name=region)

    def render(self, user: User, password_reset: PasswordReset) -> str:
        link = self.reset_config.edit_url(user.id, password_reset.token)
        return (
            "Someone, hopefully you, requested we send you a link to change "
            "your password:\n\n"
            f"{link}\n\n"
            "If you didn't request this, ignore this email. Your password "
            "has not been changed."
        )

    async def send_password_change_notification(
        self, user: User, password_reset: PasswordReset
    ) -> bool:
        if self.development_mode:
            logger.info(
                f"Password reset email (development mode, not sent) to user {user.id}"
            )
            return True

        try:
            # boto3 is blocking; keep it off the event loop
            response = await asyncio.to_thread(
                self.ses_client.send_email,
                Source=self.from_email,
                Destination={"ToAddresses": [user.email]},
                Message={
                    "Subject": {"Data": SUBJECT, "Charset": "UTF-8"},
                    "Body": {
                        "Text": {
                            "Data": self.render(user, password_reset),
                            "Charset": "UTF-8",
                        }
                    },
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to send password reset email to user {user.id}: {e}")
            return False

        logger.info(
            f"Password reset email sent to user {user.id}, "
            f"MessageId: {response.get('MessageId')}"
        )
        return True
