"""Exceções de domínio para falhas de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class SecretProviderError(InfrastructureError):
    """Falha ao acessar o provedor de segredos (não confundir com ausência)."""
