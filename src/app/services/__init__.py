"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.appointment_availability import (
    format_date_label,
    get_available_dates,
    get_available_times,
)

__all__ = [
    "format_date_label",
    "get_available_dates",
    "get_available_times",
]
