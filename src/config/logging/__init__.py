"""Logging estruturado (python-json-logger) do ZapFlow Gateway.

Todo record carrega `correlation_id` e `service`; campos com material
criptográfico passados via `extra` saem como `[redacted]`.

    configure_logging(level="INFO", service_name="zapflow_gateway")
    logger = get_logger(__name__)
    logger.warning("flow_decryption_failed", extra={"error_type": "FlowKeyError"})
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import REDACTED, CorrelationIdFilter, SensitiveDataFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
    create_text_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REDACTED",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "SensitiveDataFilter",
    "configure_logging",
    "create_json_formatter",
    "create_text_formatter",
    "get_logger",
]
