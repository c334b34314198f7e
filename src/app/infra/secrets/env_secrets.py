"""Environment Secrets: provedor de secrets via variáveis de ambiente.

Fallback para desenvolvimento local. Em staging/production prefira o
GCPSecretProvider.

Convenções:
- `whatsapp_flow_private_key` → env `WHATSAPP_FLOW_PRIVATE_KEY`
- `WHATSAPP_FLOW_PRIVATE_KEY_FILE` aponta para um arquivo PEM (alternativa)
- `\\n` literais (comum em painéis de env) viram quebras de linha reais
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from app.protocols.private_key_provider import PrivateKeyProviderProtocol
from utils.errors import SecretProviderError

logger = logging.getLogger(__name__)


class EnvSecretProvider(PrivateKeyProviderProtocol):
    """Provedor de secrets usando variáveis de ambiente.

    Args:
        prefix: Prefixo para variáveis de ambiente (default: "")
    """

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix.upper().rstrip("_") + "_" if prefix else ""

    def _env_key(self, key: str) -> str:
        """Converte nome de secret para variável de ambiente."""
        # whatsapp-flow-private-key -> WHATSAPP_FLOW_PRIVATE_KEY
        env_key = key.upper().replace("-", "_")
        return f"{self._prefix}{env_key}"

    def get(self, key: str, default: str | None = None) -> str | None:
        """Obtém secret de variável de ambiente (ou do arquivo em <KEY>_FILE).

        Raises:
            SecretProviderError: Se <KEY>_FILE aponta para arquivo ilegível
        """
        env_key = self._env_key(key)
        value = os.getenv(env_key)
        if value:
            return value

        file_path = os.getenv(f"{env_key}_FILE")
        if file_path:
            try:
                return Path(file_path).read_text(encoding="utf-8")
            except OSError as exc:
                raise SecretProviderError(f"Falha ao ler {env_key}_FILE: {exc}") from exc

        logger.debug("env_secret_not_found", extra={"key": key, "env_key": env_key})
        return default

    async def get_private_key(self, name: str) -> str | None:
        """Obtém PEM da chave privada; None se não configurada."""
        value = self.get(name)
        if value is None or not value.strip():
            return None
        return value.replace("\\n", "\n")
