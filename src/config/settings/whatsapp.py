"""Settings específicas de WhatsApp.

Configurações do endpoint de Flows e do contrato de templates.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Nome do setting que guarda a chave privada do endpoint de Flows
FLOW_PRIVATE_KEY_SETTING: str = "whatsapp_flow_private_key"

_KEY_BACKENDS = ("env", "gcp")


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        app_secret: App secret da Meta (assinatura X-Hub-Signature-256)
        flow_private_key_setting: Nome do setting/secret da chave privada
        flow_private_key_passphrase: Senha da chave privada (opcional)
        flow_key_backend: Provedor da chave privada (env|gcp)
        default_country_code: DDI aplicado a números nacionais
        appointment_days_ahead: Janela de datas ofertada no Flow de agendamento
        appointment_start_hour: Primeiro horário ofertado (inclusive)
        appointment_end_hour: Último horário ofertado (exclusivo)
        appointment_slot_minutes: Intervalo entre horários ofertados
    """

    # Credenciais (carregadas de env ou Secret Manager)
    app_secret: str = ""
    flow_private_key_setting: str = FLOW_PRIVATE_KEY_SETTING
    flow_private_key_passphrase: str = ""
    flow_key_backend: str = "env"

    # Contrato de templates
    default_country_code: str = "55"

    # Flow de agendamento
    appointment_days_ahead: int = 14
    appointment_start_hour: int = 9
    appointment_end_hour: int = 17
    appointment_slot_minutes: int = 60

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.flow_private_key_setting:
            errors.append("WHATSAPP_FLOW_PRIVATE_KEY_SETTING não pode ser vazio")

        if self.flow_key_backend not in _KEY_BACKENDS:
            errors.append("WHATSAPP_FLOW_KEY_BACKEND deve ser 'env' ou 'gcp'")

        if not self.default_country_code.isdigit():
            errors.append("WHATSAPP_DEFAULT_COUNTRY_CODE deve conter apenas dígitos")

        if self.appointment_days_ahead <= 0:
            errors.append("WHATSAPP_APPOINTMENT_DAYS_AHEAD deve ser > 0")

        if not 0 <= self.appointment_start_hour < self.appointment_end_hour <= 24:
            errors.append("Janela de horários do agendamento inválida")

        if not 0 < self.appointment_slot_minutes <= 240:
            errors.append("WHATSAPP_APPOINTMENT_SLOT_MINUTES deve estar entre 1 e 240")

        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        app_secret=os.getenv("WHATSAPP_APP_SECRET", ""),
        flow_private_key_setting=os.getenv(
            "WHATSAPP_FLOW_PRIVATE_KEY_SETTING", FLOW_PRIVATE_KEY_SETTING
        ),
        flow_private_key_passphrase=os.getenv("WHATSAPP_FLOW_PRIVATE_KEY_PASSPHRASE", ""),
        flow_key_backend=os.getenv("WHATSAPP_FLOW_KEY_BACKEND", "env").lower(),
        default_country_code=os.getenv("WHATSAPP_DEFAULT_COUNTRY_CODE", "55"),
        appointment_days_ahead=int(os.getenv("WHATSAPP_APPOINTMENT_DAYS_AHEAD", "14")),
        appointment_start_hour=int(os.getenv("WHATSAPP_APPOINTMENT_START_HOUR", "9")),
        appointment_end_hour=int(os.getenv("WHATSAPP_APPOINTMENT_END_HOUR", "17")),
        appointment_slot_minutes=int(os.getenv("WHATSAPP_APPOINTMENT_SLOT_MINUTES", "60")),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
