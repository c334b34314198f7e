"""Modelos de coordenação para WhatsApp Flows.

Responses são variantes fechadas; a borda HTTP trata cada uma pelo tipo.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from app.constants.whatsapp import FlowAction
from app.infra.crypto import create_error_response

from .errors import FlowRequestError

SUCCESS_SCREEN = "SUCCESS"


@dataclass(slots=True, frozen=True)
class FlowRequest:
    """Payload descriptografado de uma chamada ao endpoint de Flow."""

    action: FlowAction
    screen: str | None
    data: Mapping[str, Any]
    flow_token: str | None
    version: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> FlowRequest:
        """Valida e converte o JSON descriptografado.

        Raises:
            FlowRequestError: Ação ausente/desconhecida ou `data` não-objeto
        """
        raw_action = payload.get("action")
        try:
            action = FlowAction(str(raw_action))
        except ValueError as exc:
            raise FlowRequestError(f"Ação de Flow desconhecida: {raw_action!r}") from exc

        data = payload.get("data")
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise FlowRequestError("Campo 'data' deve ser um objeto")

        screen = payload.get("screen")
        flow_token = payload.get("flow_token")
        return cls(
            action=action,
            screen=str(screen) if screen else None,
            data=data,
            flow_token=str(flow_token) if flow_token else None,
            version=str(payload.get("version") or ""),
        )


@dataclass(slots=True, frozen=True)
class FlowHealthResponse:
    """Resposta ao ping de saúde da Meta."""

    def as_dict(self) -> dict[str, Any]:
        return {"data": {"status": "active"}}


@dataclass(slots=True, frozen=True)
class FlowScreenResponse:
    """Próxima tela (ou refresh parcial da tela atual)."""

    screen: str
    data: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {"screen": self.screen, "data": dict(self.data)}


@dataclass(slots=True, frozen=True)
class FlowCompletionResponse:
    """Encerra o Flow devolvendo `params` para a conversa."""

    params: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "screen": SUCCESS_SCREEN,
            "data": {"extension_message_response": {"params": dict(self.params)}},
        }


@dataclass(slots=True, frozen=True)
class FlowErrorResponse:
    """Erro de negócio entregue ao cliente dentro do canal criptografado."""

    message: str

    def as_dict(self) -> dict[str, Any]:
        return create_error_response(self.message)


FlowResponse = FlowHealthResponse | FlowScreenResponse | FlowCompletionResponse | FlowErrorResponse
