"""Correlation id por requisição, propagado para os logs.

Usa ContextVar para ser thread/async-safe. O middleware HTTP abre um escopo
por request; código fora de request (testes, scripts) pode usar
`correlation_scope()` diretamente.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

CORRELATION_HEADER = "x-correlation-id"

_MAX_INBOUND_LENGTH = 128

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ("" fora de escopo)."""
    return _correlation_id.get()


def generate_correlation_id() -> str:
    """Gera um novo correlation_id (UUID v4)."""
    return str(uuid.uuid4())


def sanitize_correlation_id(raw_value: str | None) -> str:
    """Aceita o id recebido do cliente se for curto e imprimível."""
    value = (raw_value or "").strip()
    if not value or len(value) > _MAX_INBOUND_LENGTH or not value.isprintable():
        return generate_correlation_id()
    return value


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Define o correlation_id durante o bloco e restaura o anterior ao sair."""
    value = sanitize_correlation_id(correlation_id)
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
