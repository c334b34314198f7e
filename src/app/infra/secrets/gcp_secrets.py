"""GCP Secret Manager: provedor de secrets para staging/production.

Referência de nomes: `whatsapp_flow_private_key` + ambiente `production`
→ secret `whatsapp-flow-private-key-production`.
"""

from __future__ import annotations

import asyncio
import logging
import os
from functools import lru_cache
from typing import TYPE_CHECKING

from app.protocols.private_key_provider import PrivateKeyProviderProtocol
from utils.errors import SecretProviderError

if TYPE_CHECKING:
    from google.cloud.secretmanager import SecretManagerServiceClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_client() -> SecretManagerServiceClient:
    """Obtém cliente do Secret Manager (singleton via lru_cache)."""
    from google.cloud import secretmanager

    return secretmanager.SecretManagerServiceClient()


def get_secret(
    secret_id: str,
    project_id: str,
    version: str = "latest",
) -> str | None:
    """Obtém valor de secret do GCP Secret Manager.

    Sem cache: uma rotação de chave precisa valer na próxima request.

    Returns:
        Valor do secret, ou None se o secret/versão não existe

    Raises:
        SecretProviderError: Falha de acesso (permissão, rede, projeto)
    """
    from google.api_core import exceptions as gcp_exceptions

    name = f"projects/{project_id}/secrets/{secret_id}/versions/{version}"
    try:
        response = _get_client().access_secret_version(request={"name": name})
    except gcp_exceptions.NotFound:
        logger.info("secret_not_found", extra={"secret_id": secret_id})
        return None
    except gcp_exceptions.GoogleAPIError as exc:
        logger.error(
            "secret_load_error",
            extra={"secret_id": secret_id, "error_type": type(exc).__name__},
        )
        raise SecretProviderError(f"Falha ao acessar secret {secret_id}") from exc

    logger.debug("secret_loaded", extra={"secret_id": secret_id})
    return response.payload.data.decode("UTF-8")


class GCPSecretProvider(PrivateKeyProviderProtocol):
    """Provedor de secrets usando GCP Secret Manager.

    Args:
        project_id: ID do projeto GCP
        environment: Ambiente (staging/production) para sufixo de secrets
    """

    def __init__(
        self,
        project_id: str | None = None,
        environment: str = "",
    ) -> None:
        self._project_id = project_id or os.getenv("GCP_PROJECT", "")
        self._suffix = f"-{environment}" if environment else ""

    def secret_id(self, name: str) -> str:
        """Converte nome de setting em ID de secret com sufixo de ambiente."""
        return f"{name.lower().replace('_', '-')}{self._suffix}"

    async def get_private_key(self, name: str) -> str | None:
        """Obtém PEM da chave privada sem bloquear o event loop.

        Raises:
            SecretProviderError: Projeto não configurado ou falha de acesso
        """
        if not self._project_id:
            raise SecretProviderError("GCP_PROJECT não definido para o Secret Manager")
        value = await asyncio.to_thread(get_secret, self.secret_id(name), self._project_id)
        if value is None or not value.strip():
            return None
        return value
