"""Contrato de tela para o roteador de Flows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from .errors import FlowScreenDataError
from .models import FlowResponse


class FlowScreen(ABC):
    """Tela de um Flow, sem estado entre requests.

    Tudo que a tela precisa para renderizar (inclusive ao voltar com BACK)
    vem de `data`; nada é guardado no servidor.
    """

    name: ClassVar[str]
    required_fields: ClassVar[tuple[str, ...]] = ()

    @abstractmethod
    def render(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        """Monta o `data` desta tela a partir do estado recebido."""

    def exchange(self, data: Mapping[str, Any], flow_token: str | None) -> FlowResponse | None:
        """Trata `data["trigger"]` (refresh parcial); None avança de tela."""
        return None

    def complete(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        """Params de encerramento quando esta é a última tela."""
        return {"flow_token": flow_token or "", **data}

    def validate(self, data: Mapping[str, Any]) -> None:
        """Garante os campos exigidos para sair desta tela.

        Raises:
            FlowScreenDataError: Se algum campo obrigatório estiver vazio
        """
        missing = tuple(
            name for name in self.required_fields if not str(data.get(name) or "").strip()
        )
        if missing:
            raise FlowScreenDataError(self.name, missing)
