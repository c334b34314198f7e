"""Formatters de log: JSON para Cloud Logging, texto para desenvolvimento.

O JSON usa `severity` e `timestamp` porque são os nomes que o agente do
Cloud Run reconhece ao ingerir stdout.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Presentes em todo record (correlation_id/service vêm dos filtros)
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "severity",
    "name": "logger",
}

_ISO_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"
_TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(correlation_id)s] %(name)s: %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Uma linha JSON por record; chaves de `extra` entram no topo.

        {"timestamp": "2026-02-10T09:00:00+0000", "severity": "WARNING",
         "logger": "api.routes.whatsapp.flows", "message": "flow_decryption_failed",
         "correlation_id": "abc-123", "service": "zapflow_gateway",
         "error_type": "FlowAuthenticationError"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS),
        rename_fields=FIELD_RENAME_MAP,
        datefmt=_ISO_DATEFMT,
    )


def create_text_formatter() -> logging.Formatter:
    return logging.Formatter(_TEXT_FORMAT)
