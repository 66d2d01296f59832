"""
Password Reset Service Domain Entities

Each entity in its own file.
"""

from .user import User, normalize_email
from .password_reset import PasswordReset
from .session import Session
from .audit_event import AuditEvent

__all__ = [
    "User",
    "PasswordReset",
    "Session",
    "AuditEvent",
    "normalize_email",
]
