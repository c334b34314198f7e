"""Opções de data e horário exibidas no Flow de agendamento.

As listas seguem o formato de dropdown do WhatsApp Flows
(`id`, `title`, `enabled`). Não há agenda externa: as datas são os
próximos dias úteis e os horários são slots fixos do expediente.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta

_WEEKDAYS = ("Seg", "Ter", "Qua", "Qui", "Sex", "Sab", "Dom")
_MONTHS = ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez")
_SATURDAY = 5
_DATE_ID_FORMAT = "%Y-%m-%d"

DropdownOption = dict[str, object]


def _option(option_id: str, title: str) -> DropdownOption:
    return {"id": option_id, "title": title, "enabled": True}


def _label(day: date) -> str:
    return f"{_WEEKDAYS[day.weekday()]}, {day.day:02d} de {_MONTHS[day.month - 1]}"


def _business_days(start: date, days_ahead: int) -> Iterator[date]:
    for offset in range(1, days_ahead + 1):
        day = start + timedelta(days=offset)
        if day.weekday() < _SATURDAY:
            yield day


def get_available_dates(
    *,
    days_ahead: int = 14,
    now: datetime | None = None,
) -> list[DropdownOption]:
    """Dias úteis da janela `(hoje, hoje + days_ahead]`; hoje nunca entra."""
    if days_ahead <= 0:
        return []
    today = (now or datetime.now(tz=UTC)).date()
    return [
        _option(day.strftime(_DATE_ID_FORMAT), _label(day))
        for day in _business_days(today, days_ahead)
    ]


def get_available_times(
    *,
    start_hour: int = 9,
    end_hour: int = 17,
    slot_minutes: int = 60,
) -> list[DropdownOption]:
    """Slots do expediente; `end_hour` é exclusivo (9-17 gera 09:00 até 16:00)."""
    if end_hour <= start_hour or slot_minutes <= 0:
        return []
    options: list[DropdownOption] = []
    minute = start_hour * 60
    while minute < end_hour * 60:
        hhmm = f"{minute // 60:02d}:{minute % 60:02d}"
        options.append(_option(hhmm, hhmm))
        minute += slot_minutes
    return options


def format_date_label(date_id: str) -> str:
    """Rótulo legível para um id de data; ids inválidos voltam sem alteração."""
    try:
        day = datetime.strptime(date_id, _DATE_ID_FORMAT).date()
    except ValueError:
        return date_id
    return _label(day)
