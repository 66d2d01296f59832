"""
Use Cases

- password_resets/: Password recovery flow
"""

from .password_resets import (
    RequestPasswordResetUseCase,
    BeginPasswordResetEditUseCase,
    CompletePasswordResetUseCase,
)

__all__ = [
    "RequestPasswordResetUseCase",
    "BeginPasswordResetEditUseCase",
    "CompletePasswordResetUseCase",
]
