"""Instalação do handler raiz com formatter JSON e filtros de contexto/redação."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveDataFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "zapflow_gateway"

# Bibliotecas verbosas limitadas a WARNING mesmo com LOG_LEVEL=DEBUG
NOISY_LOGGERS = ("google.auth", "google.api_core", "urllib3", "grpc")


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    *,
    json_output: bool = True,
) -> None:
    """Substitui os handlers do root logger por um único StreamHandler.

    Chamada uma vez pelo bootstrap. Chamadas repetidas não duplicam saída.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case-insensitive).
        service_name: Valor do campo `service` em todo record.
        correlation_id_getter: Fonte do `correlation_id` (ContextVar do request).
        json_output: False usa o formato texto de desenvolvimento.

    Raises:
        ValueError: Nível desconhecido.
    """
    resolved = level.upper()
    if resolved not in VALID_LOG_LEVELS:
        allowed = ", ".join(sorted(VALID_LOG_LEVELS))
        raise ValueError(f"Nível de log inválido: {level}. Válidos: {allowed}")

    handler = logging.StreamHandler()
    handler.setLevel(resolved)
    handler.setFormatter(create_json_formatter() if json_output else create_text_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveDataFilter())

    root = logging.getLogger()
    root.setLevel(resolved)
    root.handlers = [handler]

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger padrão; contexto vem dos filtros do handler raiz."""
    return logging.getLogger(name)
