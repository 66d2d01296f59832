from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, session_id: UUID) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        session_id: Session UUID the token belongs to

    Returns:
        JWT token string (HS256, 15-minute expiry)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": str(user_id),
        "session_id": str(session_id),
        "exp": now + timedelta(minutes=15),
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"]
        )
        return payload
    except JWTError:
        return None
