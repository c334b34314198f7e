"""Testes para config.logging.

Cobre: configure_logging, filtros de correlação e redação, formatters.
"""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REDACTED,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    SensitiveDataFilter,
    configure_logging,
    create_json_formatter,
    create_text_formatter,
    get_logger,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), ("ERROR", logging.ERROR)],
    )
    def test_configure_logging_sets_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_configure_logging_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_configure_logging_installs_both_filters(self) -> None:
        configure_logging(correlation_id_getter=lambda: "corr-1")
        filters = logging.getLogger().handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveDataFilter) for f in filters)

    def test_text_output_uses_plain_formatter(self) -> None:
        configure_logging(json_output=False)
        formatter = logging.getLogger().handlers[0].formatter
        assert type(formatter) is logging.Formatter

    def test_noisy_libraries_capped_at_warning(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("google.auth").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "zapflow_gateway"

    def test_get_logger_same_name_returns_same_instance(self) -> None:
        assert get_logger("same.module") is get_logger("same.module")


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_filter_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("my_service", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "my_service"

    def test_filter_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record(correlation_id="explicit-id")
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        record = _record()
        CorrelationIdFilter("service_name", None).filter(record)
        assert record.correlation_id == ""


class TestSensitiveDataFilter:
    """Material criptográfico nunca sai em claro."""

    def test_redacts_key_material(self) -> None:
        record = _record(aes_key=b"\x00" * 16, private_key_pem="-----BEGIN", error_type="X")
        assert SensitiveDataFilter().filter(record) is True
        assert record.aes_key == REDACTED
        assert record.private_key_pem == REDACTED
        assert record.error_type == "X"

    def test_json_output_never_contains_key_bytes(self) -> None:
        record = _record("flow_decryption_failed", aes_key="c2VjcmV0LWtleQ==")
        record.correlation_id = "abc"
        record.service = "svc"
        SensitiveDataFilter().filter(record)
        output = create_json_formatter().format(record)
        assert "c2VjcmV0LWtleQ==" not in output
        assert json.loads(output)["aes_key"] == REDACTED


class TestFormatters:
    """Testes para formatters e constantes."""

    def test_field_rename_map_content(self) -> None:
        assert FIELD_RENAME_MAP == {"asctime": "timestamp", "levelname": "severity", "name": "logger"}
        assert "correlation_id" in REQUIRED_LOG_FIELDS

    def test_json_formatter_renames_fields(self) -> None:
        record = _record("Test message", correlation_id="abc-123", service="test_service")
        payload = json.loads(create_json_formatter().format(record))
        assert payload["message"] == "Test message"
        assert payload["logger"] == "test.logger"
        assert payload["severity"] == "INFO"
        assert "timestamp" in payload
        assert "asctime" not in payload
        assert payload["correlation_id"] == "abc-123"

    def test_text_formatter_includes_correlation_id(self) -> None:
        record = _record("hello", correlation_id="abc-123")
        assert "[abc-123]" in create_text_formatter().format(record)
