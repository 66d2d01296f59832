"""
Password Reset Configuration

Settings the reset flow needs, passed in explicitly at construction.
"""

from datetime import timedelta

from pydantic import BaseModel, Field


class PasswordResetConfig(BaseModel):
    """Value object holding password reset settings"""

    time_limit: timedelta = Field(default=timedelta(minutes=15))
    redirect_url: str = Field(default="/")
    user_id_parameter: str = Field(default="user_id")
    reset_url_base: str = Field(default="http://localhost:8000")

    @classmethod
    def from_application_config(cls, config) -> "PasswordResetConfig":
        return cls(
            time_limit=timedelta(minutes=config.PASSWORD_RESET_TIME_LIMIT_MINUTES),
            redirect_url=config.PASSWORD_RESET_REDIRECT_URL,
            user_id_parameter=config.USER_ID_PARAMETER,
            reset_url_base=config.PASSWORD_RESET_URL_BASE,
        )

    def edit_url(self, user_id, token: str) -> str:
        """Link embedded in the reset email"""
        return (
            f"{self.reset_url_base.rstrip('/')}/passwords/edit"
            f"?{self.user_id_parameter}={user_id}&token={token}"
        )
