"""Máquina de estados do endpoint de data exchange.

Mapeia (action, screen, data) para a próxima response:
- ping → saúde
- INIT → primeira tela
- data_exchange → refresh por trigger, próxima tela ou encerramento
- BACK → tela anterior reconstruída só a partir de `data`
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.constants.whatsapp import FlowAction

from .models import (
    FlowCompletionResponse,
    FlowErrorResponse,
    FlowHealthResponse,
    FlowRequest,
    FlowResponse,
    FlowScreenResponse,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .screens import FlowScreen

logger = logging.getLogger(__name__)


class FlowActionRouter:
    """Roteia ações de Flow para telas registradas em ordem de navegação."""

    def __init__(self, screens: Sequence[FlowScreen]) -> None:
        if not screens:
            raise ValueError("FlowActionRouter exige ao menos uma tela")
        names = [screen.name for screen in screens]
        if len(set(names)) != len(names):
            raise ValueError(f"Telas duplicadas: {names}")
        self._screens = tuple(screens)
        self._index = {name: position for position, name in enumerate(names)}

    @property
    def screen_names(self) -> tuple[str, ...]:
        return tuple(screen.name for screen in self._screens)

    def handle(self, request: FlowRequest) -> FlowResponse:
        """Resolve a response para a request.

        Exceções de tela (ex.: FlowScreenDataError) propagam; a borda HTTP
        converte em response de erro.
        """
        if request.action is FlowAction.PING:
            return FlowHealthResponse()

        if request.action is FlowAction.INIT:
            first = self._screens[0]
            return FlowScreenResponse(first.name, first.render(request.data, request.flow_token))

        position = self._index.get(request.screen or "")
        if position is None:
            logger.warning(
                "flow_unknown_screen",
                extra={"component": "flow_router", "action": str(request.action)},
            )
            return FlowErrorResponse(f"Tela desconhecida: {request.screen}")

        if request.action is FlowAction.BACK:
            previous = self._screens[max(position - 1, 0)]
            return FlowScreenResponse(
                previous.name, previous.render(request.data, request.flow_token)
            )

        return self._exchange(position, request)

    def _exchange(self, position: int, request: FlowRequest) -> FlowResponse:
        screen = self._screens[position]
        refreshed = screen.exchange(request.data, request.flow_token)
        if refreshed is not None:
            return refreshed

        screen.validate(request.data)
        if position + 1 == len(self._screens):
            return FlowCompletionResponse(screen.complete(request.data, request.flow_token))

        following = self._screens[position + 1]
        return FlowScreenResponse(following.name, following.render(request.data, request.flow_token))
