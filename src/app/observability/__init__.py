"""Observabilidade: correlation_id para logs estruturados.

Uso:
    from app.observability import correlation_scope, get_correlation_id
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    sanitize_correlation_id,
)
from app.observability.middleware import CorrelationIdMiddleware

__all__ = [
    "CORRELATION_HEADER",
    "CorrelationIdMiddleware",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "sanitize_correlation_id",
]
