"""Protocolo do provedor da chave privada do endpoint de Flows.

Interface leve (ABC) dependida pela borda HTTP.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PrivateKeyProviderProtocol(ABC):
    """Lookup opaco chave → valor para segredos do endpoint.

    Método canônico:
    - get_private_key(name: str) -> str | None
      Retorna o PEM configurado sob `name`, ou None se ausente.
    """

    @abstractmethod
    async def get_private_key(self, name: str) -> str | None:
        """Obtém a chave privada PEM registrada sob `name`.

        Args:
            name: Identificador fixo do setting (ex.: whatsapp_flow_private_key)

        Returns:
            PEM como string ou None se não configurada.
        """
