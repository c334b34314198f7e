"""Testes da normalização de telefone para E.164."""

from __future__ import annotations

import pytest

from api.validators.whatsapp import normalize_phone


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("+5511999999999", "+5511999999999"),
        ("+55 (11) 99999-9999", "+5511999999999"),
        ("11999999999", "+5511999999999"),
        ("1133334444", "+551133334444"),
        ("0044 20 7946 0958", "+442079460958"),
        ("+1.415.555.2671", "+14155552671"),
    ],
)
def test_normalize_phone_valid(raw: str, expected: str) -> None:
    assert normalize_phone(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "abc", "+55 11 9999x9999", "1234567", "+1234567890123456", "+0123456789"],
)
def test_normalize_phone_invalid(raw: str | None) -> None:
    assert normalize_phone(raw) is None


def test_normalize_phone_custom_country_code() -> None:
    assert normalize_phone("912345678", "351") == "+912345678"
    assert normalize_phone("2199998888", "351") == "+3512199998888"
