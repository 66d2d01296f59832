"""
Password Reset Use Case DTOs (Data Transfer Objects)

Response classes for the password reset flow.
"""

from datetime import datetime

from pydantic import BaseModel


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case (same for every email)"""

    status: str
    message: str


class EditPasswordResponse(BaseModel):
    """Response when a reset link may be used to choose a new password"""

    status: str
    user_id: str
    email: str
    password_reset_id: str
    expires_at: datetime


class CompletePasswordResetResponse(BaseModel):
    """Response for a successful password change"""

    status: str
    redirect_url: str
    session_established: bool
    session_id: str
    access_token: str
    refresh_token: str
