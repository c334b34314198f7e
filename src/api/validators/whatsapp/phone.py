"""Normalização de telefone para o formato E.164 (+<dígitos>)."""

from __future__ import annotations

import re

_ALLOWED_CHARS = re.compile(r"[\d\s()+\-.]+")
_NON_DIGITS = re.compile(r"\D")

MIN_DIGITS = 8
MAX_DIGITS = 15  # limite E.164
_NATIONAL_LENGTHS = (10, 11)  # DDD + número (fixo/celular)


def normalize_phone(raw_phone: str | None, default_country_code: str = "55") -> str | None:
    """Normaliza telefone para +<DDI><número>.

    - remove espaços, parênteses, hífens e pontos
    - prefixo internacional "00" vira "+"
    - números nacionais (10/11 dígitos, sem "+") recebem `default_country_code`

    Returns:
        Telefone normalizado ou None se não normalizável.
    """
    value = (raw_phone or "").strip()
    if not value or not _ALLOWED_CHARS.fullmatch(value):
        return None

    international = value.startswith("+")
    digits = _NON_DIGITS.sub("", value)
    if not international and digits.startswith("00"):
        digits = digits[2:]
        international = True

    if not international and len(digits) in _NATIONAL_LENGTHS and default_country_code:
        digits = f"{default_country_code}{digits}"

    if not MIN_DIGITS <= len(digits) <= MAX_DIGITS or digits.startswith("0"):
        return None
    return f"+{digits}"
