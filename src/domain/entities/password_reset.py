"""
PasswordReset Entity

One outstanding password recovery request.
"""

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from src.domain.token import generate_token


class PasswordReset(SQLModel, table=True):
    """
    PasswordReset entity - a single-use, time-limited reset token.

    Business Rules:
    - Token is assigned once at creation and never changes
    - expires_at = created_at + configured time limit
    - Expiry is inclusive: a record is expired at exactly expires_at
    - Several records may be active for the same user at once
    - Deactivation moves expires_at to "now"; it never extends it
    - Records are never deleted here (retention is handled elsewhere)
    """

    __tablename__ = "password_resets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token: str = Field(max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_user_token", "user_id", "token"),
        Index("idx_password_reset_expires_at", "expires_at"),
    )

    @classmethod
    def issue(
        cls, user_id: UUID, time_limit: timedelta, now: Optional[datetime] = None
    ) -> "PasswordReset":
        """Build a new reset for user_id with a fresh token"""
        created_at = now or utcnow()
        return cls(
            user_id=user_id,
            token=generate_token(),
            created_at=created_at,
            expires_at=created_at + time_limit,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at

    def deactivate(self, now: Optional[datetime] = None) -> None:
        now = now or utcnow()
        # Already expired records keep their (earlier) expiry
        if not self.is_expired(now):
            self.expires_at = now
