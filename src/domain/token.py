"""
Reset token generation

Tokens are opaque, URL-safe and drawn from the OS entropy source.
"""

import secrets

# 32 bytes = 256 bits of entropy
TOKEN_BYTES = 32


def generate_token(nbytes: int = TOKEN_BYTES) -> str:
    """
    Generate an unguessable token for a password reset link.

    Errors from the entropy source are not caught: without a secure source
    there is no safe token to hand out.
    """
    return secrets.token_urlsafe(nbytes)
