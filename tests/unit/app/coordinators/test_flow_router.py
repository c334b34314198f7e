"""Testes do roteador de ações de Flow (máquina de estados sem estado)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from app.constants.whatsapp import FlowAction
from app.coordinators.whatsapp.flows import (
    FlowActionRouter,
    FlowCompletionResponse,
    FlowErrorResponse,
    FlowHealthResponse,
    FlowRequest,
    FlowRequestError,
    FlowScreen,
    FlowScreenDataError,
    FlowScreenResponse,
)


class _EchoScreen(FlowScreen):
    def __init__(self, name: str, required: tuple[str, ...] = ()) -> None:
        self.name = name
        self.required_fields = required

    def render(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        return {"from": self.name, "echo": dict(data)}


def _router() -> FlowActionRouter:
    return FlowActionRouter(
        [_EchoScreen("FIRST", ("a",)), _EchoScreen("SECOND"), _EchoScreen("LAST")]
    )


def _request(action: str, screen: str | None = None, **data: Any) -> FlowRequest:
    return FlowRequest.from_payload(
        {"action": action, "screen": screen, "data": data, "flow_token": "tok", "version": "3.0"}
    )


class TestFlowRequest:
    def test_from_payload_parses_fields(self) -> None:
        request = _request("data_exchange", "FIRST", a="1")
        assert request.action is FlowAction.DATA_EXCHANGE
        assert request.screen == "FIRST"
        assert request.data == {"a": "1"}
        assert request.flow_token == "tok"

    def test_missing_data_becomes_empty(self) -> None:
        request = FlowRequest.from_payload({"action": "INIT"})
        assert request.data == {}
        assert request.screen is None

    def test_unknown_action_raises(self) -> None:
        with pytest.raises(FlowRequestError, match="desconhecida"):
            FlowRequest.from_payload({"action": "navigate"})

    def test_non_object_data_raises(self) -> None:
        with pytest.raises(FlowRequestError):
            FlowRequest.from_payload({"action": "INIT", "data": ["x"]})


class TestFlowActionRouter:
    def test_ping_returns_health(self) -> None:
        response = _router().handle(_request("ping"))
        assert isinstance(response, FlowHealthResponse)
        assert response.as_dict() == {"data": {"status": "active"}}

    def test_init_renders_first_screen(self) -> None:
        response = _router().handle(_request("INIT"))
        assert isinstance(response, FlowScreenResponse)
        assert response.screen == "FIRST"

    def test_data_exchange_advances_to_next_screen(self) -> None:
        response = _router().handle(_request("data_exchange", "FIRST", a="x"))
        assert response == FlowScreenResponse("SECOND", {"from": "SECOND", "echo": {"a": "x"}})

    def test_data_exchange_on_last_screen_completes(self) -> None:
        response = _router().handle(_request("data_exchange", "LAST", a="x"))
        assert isinstance(response, FlowCompletionResponse)
        assert response.as_dict() == {
            "screen": "SUCCESS",
            "data": {"extension_message_response": {"params": {"flow_token": "tok", "a": "x"}}},
        }

    def test_missing_required_field_raises(self) -> None:
        with pytest.raises(FlowScreenDataError) as exc_info:
            _router().handle(_request("data_exchange", "FIRST", a="  "))
        assert exc_info.value.missing == ("a",)

    def test_back_rebuilds_previous_screen_from_data(self) -> None:
        response = _router().handle(_request("BACK", "LAST", a="kept"))
        assert response == FlowScreenResponse("SECOND", {"from": "SECOND", "echo": {"a": "kept"}})

    def test_back_on_first_screen_stays(self) -> None:
        response = _router().handle(_request("BACK", "FIRST"))
        assert isinstance(response, FlowScreenResponse)
        assert response.screen == "FIRST"

    def test_unknown_screen_returns_error(self) -> None:
        response = _router().handle(_request("data_exchange", "NOPE"))
        assert isinstance(response, FlowErrorResponse)
        assert response.as_dict()["data"]["status"] == "error"

    def test_is_deterministic(self) -> None:
        router = _router()
        request = _request("data_exchange", "FIRST", a="x")
        assert router.handle(request) == router.handle(request)

    def test_rejects_empty_and_duplicate_screens(self) -> None:
        with pytest.raises(ValueError):
            FlowActionRouter([])
        with pytest.raises(ValueError, match="duplicadas"):
            FlowActionRouter([_EchoScreen("A"), _EchoScreen("A")])

    def test_screen_names_keep_order(self) -> None:
        assert _router().screen_names == ("FIRST", "SECOND", "LAST")
