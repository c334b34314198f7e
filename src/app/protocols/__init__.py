"""Protocolos e contratos do core da aplicação."""

from .private_key_provider import PrivateKeyProviderProtocol

__all__ = [
    "PrivateKeyProviderProtocol",
]
