"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_private_key_provider

    # Na inicialização do serviço
    initialize_app()

    # Obter dependências
    provider = get_private_key_provider()
    flow_router = get_flow_router()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.coordinators.whatsapp.flows import build_appointment_router
from app.infra.secrets import EnvSecretProvider, GCPSecretProvider
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_whatsapp_settings

if TYPE_CHECKING:
    from app.coordinators.whatsapp.flows import FlowActionRouter
    from app.protocols import PrivateKeyProviderProtocol

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa a aplicação com todas as configurações necessárias.

    Deve ser chamada uma vez no início do serviço.
    Configura logging estruturado JSON com correlation_id.
    """
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
        json_output=not settings.debug,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    errors: list[str] = [f"base: {error}" for error in base.validate()]
    errors.extend(f"whatsapp: {error}" for error in get_whatsapp_settings().validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Dependency Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_private_key_provider() -> PrivateKeyProviderProtocol:
    """Obtém provedor da chave privada de Flows (singleton).

    `WHATSAPP_FLOW_KEY_BACKEND=gcp` usa Secret Manager; qualquer outro valor
    lê de variáveis de ambiente.
    """
    backend = get_whatsapp_settings().flow_key_backend
    if backend == "gcp":
        base = get_base_settings()
        suffix = base.environment if base.is_strict else ""
        return GCPSecretProvider(project_id=base.gcp_project or None, environment=suffix)
    return EnvSecretProvider()


@lru_cache(maxsize=1)
def get_flow_router() -> FlowActionRouter:
    """Obtém roteador de ações do Flow de agendamento (singleton)."""
    return build_appointment_router(get_whatsapp_settings())
