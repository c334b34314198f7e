"""Settings do ZapFlow Gateway, carregadas de variáveis de ambiente.

Cada módulo expõe um dataclass imutável, um getter cacheado e
`validate() -> list[str]`; o bootstrap agrega os erros no startup.
"""

from __future__ import annotations

from config.settings.base import BaseSettings, Environment, get_base_settings
from config.settings.whatsapp import (
    FLOW_PRIVATE_KEY_SETTING,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    "FLOW_PRIVATE_KEY_SETTING",
    "BaseSettings",
    "Environment",
    "WhatsAppSettings",
    "get_base_settings",
    "get_whatsapp_settings",
]
