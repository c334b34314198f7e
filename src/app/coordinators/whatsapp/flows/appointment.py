"""Flow de agendamento: APPOINTMENT → DETAILS → SUMMARY → SUCCESS."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.services.appointment_availability import (
    format_date_label,
    get_available_dates,
    get_available_times,
)

from .models import FlowErrorResponse, FlowResponse, FlowScreenResponse
from .router import FlowActionRouter
from .screens import FlowScreen

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings

DEFAULT_SERVICES: dict[str, str] = {
    "consultoria": "Consultoria",
    "demonstracao": "Demonstracao do produto",
    "implantacao": "Implantacao",
    "suporte": "Suporte tecnico",
}

_SELECTION_FIELDS = ("service", "date", "time")
_CONTACT_FIELDS = ("name", "email", "phone", "notes")


def _carry(data: Mapping[str, Any], fields: tuple[str, ...]) -> dict[str, str]:
    return {name: str(data.get(name) or "") for name in fields}


class AppointmentScreen(FlowScreen):
    """Escolha de serviço, data e horário com listas dependentes."""

    name = "APPOINTMENT"
    required_fields = _SELECTION_FIELDS

    def __init__(
        self,
        *,
        services: Mapping[str, str],
        days_ahead: int,
        start_hour: int,
        end_hour: int,
        slot_minutes: int = 60,
        clock: Callable[[], datetime],
    ) -> None:
        self._services = dict(services)
        self._days_ahead = days_ahead
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._slot_minutes = slot_minutes
        self._clock = clock

    def _dates(self) -> list[dict[str, object]]:
        return get_available_dates(days_ahead=self._days_ahead, now=self._clock())

    def _times(self) -> list[dict[str, object]]:
        return get_available_times(
            start_hour=self._start_hour,
            end_hour=self._end_hour,
            slot_minutes=self._slot_minutes,
        )

    def render(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        selected = _carry(data, _SELECTION_FIELDS)
        dates = self._dates() if selected["service"] else []
        times = self._times() if selected["service"] and selected["date"] else []
        return {
            "service": [{"id": key, "title": label} for key, label in self._services.items()],
            "date": dates,
            "is_date_enabled": bool(dates),
            "time": times,
            "is_time_enabled": bool(times),
            "selected": selected,
        }

    def exchange(self, data: Mapping[str, Any], flow_token: str | None) -> FlowResponse | None:
        trigger = str(data.get("trigger") or "")
        if not trigger:
            return None
        if trigger == "service_selected":
            if str(data.get("service") or "") not in self._services:
                return FlowErrorResponse("Servico invalido")
            dates = self._dates()
            return FlowScreenResponse(
                self.name,
                {
                    "date": dates,
                    "is_date_enabled": bool(dates),
                    "time": [],
                    "is_time_enabled": False,
                },
            )
        if trigger == "date_selected":
            times = self._times()
            return FlowScreenResponse(
                self.name,
                {"time": times, "is_time_enabled": bool(times)},
            )
        return FlowErrorResponse(f"Acao desconhecida na tela {self.name}: {trigger}")


class DetailsScreen(FlowScreen):
    """Dados de contato do solicitante."""

    name = "DETAILS"
    required_fields = ("name", "email")

    def render(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        return {**_carry(data, _SELECTION_FIELDS), **_carry(data, _CONTACT_FIELDS)}


class SummaryScreen(FlowScreen):
    """Resumo para confirmação; confirmar encerra o Flow."""

    name = "SUMMARY"

    def __init__(self, *, services: Mapping[str, str]) -> None:
        self._services = dict(services)

    def render(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        state = {**_carry(data, _SELECTION_FIELDS), **_carry(data, _CONTACT_FIELDS)}
        service_label = self._services.get(state["service"], state["service"])
        summary = f"{service_label}\n{format_date_label(state['date'])} as {state['time']}"
        details = [
            f"Nome: {state['name'] or 'N/A'}",
            f"Email: {state['email'] or 'N/A'}",
            f"Telefone: {state['phone'] or 'N/A'}",
        ]
        if state["notes"].strip():
            details.append(f"Observacoes: {state['notes'].strip()}")
        return {**state, "summary_text": summary, "details_text": "\n".join(details)}

    def complete(self, data: Mapping[str, Any], flow_token: str | None) -> dict[str, Any]:
        return {
            "flow_token": flow_token or "",
            **_carry(data, _SELECTION_FIELDS),
            **_carry(data, _CONTACT_FIELDS),
        }


def build_appointment_router(
    settings: WhatsAppSettings,
    *,
    services: Mapping[str, str] | None = None,
    clock: Callable[[], datetime] | None = None,
) -> FlowActionRouter:
    """Monta o roteador do Flow de agendamento a partir das settings."""
    catalogue = dict(services or DEFAULT_SERVICES)
    return FlowActionRouter(
        [
            AppointmentScreen(
                services=catalogue,
                days_ahead=settings.appointment_days_ahead,
                start_hour=settings.appointment_start_hour,
                end_hour=settings.appointment_end_hour,
                slot_minutes=settings.appointment_slot_minutes,
                clock=clock or (lambda: datetime.now(tz=UTC)),
            ),
            DetailsScreen(),
            SummaryScreen(services=catalogue),
        ]
    )
