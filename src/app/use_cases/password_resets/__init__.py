"""
Password Reset Use Cases

Request a reset link, check it, and use it to set a new password.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .begin_password_reset_edit_use_case import BeginPasswordResetEditUseCase
from .complete_password_reset_use_case import CompletePasswordResetUseCase
from .guards import FORBIDDEN, FORBIDDEN_MESSAGE, PasswordResetMatch, authorize_password_reset
from .dtos import (
    RequestPasswordResetResponse,
    EditPasswordResponse,
    CompletePasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "BeginPasswordResetEditUseCase",
    "CompletePasswordResetUseCase",
    # Guards
    "FORBIDDEN",
    "FORBIDDEN_MESSAGE",
    "PasswordResetMatch",
    "authorize_password_reset",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "EditPasswordResponse",
    "CompletePasswordResetResponse",
]
