"""Provedores da chave privada do endpoint de Flows.

`EnvSecretProvider` lê env/arquivo local; `GCPSecretProvider` lê o
Secret Manager. Ambos cumprem `PrivateKeyProvider`.
"""

from __future__ import annotations

from app.infra.secrets.env_secrets import EnvSecretProvider
from app.infra.secrets.gcp_secrets import GCPSecretProvider, get_secret

__all__ = ["EnvSecretProvider", "GCPSecretProvider", "get_secret"]
