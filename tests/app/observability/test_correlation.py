"""Testes de correlation_id (ContextVar + middleware)."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.observability import (
    CORRELATION_HEADER,
    CorrelationIdMiddleware,
    correlation_scope,
    get_correlation_id,
    sanitize_correlation_id,
)


def test_scope_sets_and_restores() -> None:
    assert get_correlation_id() == ""
    with correlation_scope("req-1") as value:
        assert value == "req-1"
        assert get_correlation_id() == "req-1"
    assert get_correlation_id() == ""


@pytest.mark.parametrize("raw", [None, "", "x" * 200, "bad\nvalue"])
def test_sanitize_generates_new_id_for_unusable_input(raw: str | None) -> None:
    value = sanitize_correlation_id(raw)
    assert value != raw
    assert len(value) == 36


def test_middleware_echoes_header() -> None:
    app = FastAPI()
    app.add_middleware(CorrelationIdMiddleware)

    @app.get("/probe")
    async def probe() -> dict[str, str]:
        return {"seen": get_correlation_id()}

    client = TestClient(app)
    response = client.get("/probe", headers={CORRELATION_HEADER: "abc-123"})

    assert response.headers[CORRELATION_HEADER] == "abc-123"
    assert response.json() == {"seen": "abc-123"}

    generated = client.get("/probe")
    assert generated.json()["seen"] == generated.headers[CORRELATION_HEADER]
