"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    SecretProviderError,
)

__all__ = [
    "InfrastructureError",
    "SecretProviderError",
]
