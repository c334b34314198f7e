"""Fixtures compartilhadas da suíte do ZapFlow Gateway."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app import bootstrap
from config.settings import get_base_settings, get_whatsapp_settings

_CACHED_FACTORIES = (
    get_base_settings,
    get_whatsapp_settings,
    bootstrap.get_private_key_provider,
    bootstrap.get_flow_router,
)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Cada teste lê env de novo; monkeypatch de env não vaza entre testes."""
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
    yield
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
