"""Precheck de contato x template antes do envio.

Decide se um contato tem todos os dados exigidos pelos placeholders de um
template. Nunca levanta exceção para problemas de contrato: devolve
`PrecheckSkipped` estruturado, para que envios em lote sigam com os demais
contatos e a UI saiba exatamente o que corrigir.

Resolução de cada entrada informada pelo chamador:
- `{{nome}}`, `{{telefone}}`, `{{email}}` (e aliases em inglês) → campos do contato
- `{{qualquer_outro}}` → `custom_fields`
- `{{N}}` → `positional_values[<componente>][N-1]`
- texto sem placeholders → literal
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

from api.connectors.whatsapp.templates import (
    PLACEHOLDER_PATTERN,
    ContactRecord,
    HeaderLocation,
    ParameterToken,
    TemplateDefinition,
    TemplateTokens,
    TokenLocation,
    extract_template_tokens,
    find_positional_problem,
)
from api.validators.whatsapp.phone import normalize_phone
from app.constants.whatsapp import ParameterFormat
from config.settings import get_whatsapp_settings

_CONTACT_FIELD_ALIASES: dict[str, str] = {
    "name": "name",
    "nome": "name",
    "phone": "phone",
    "telefone": "phone",
    "whatsapp": "phone",
    "email": "email",
    "e_mail": "email",
}


class SkipCode(StrEnum):
    """Motivos estruturados de exclusão do contato do envio."""

    MISSING_REQUIRED_PARAM = "MISSING_REQUIRED_PARAM"
    INVALID_PHONE = "INVALID_PHONE"
    INVALID_TEMPLATE_PARAMS = "INVALID_TEMPLATE_PARAMS"


@dataclass(frozen=True, slots=True)
class ParamValue:
    """Valor resolvido para um slot de parâmetro."""

    key: str
    text: str


@dataclass(frozen=True, slots=True)
class MissingToken:
    """Slot sem valor utilizável (`raw` = token como informado)."""

    where: TokenLocation
    key: str
    raw: str


@dataclass(frozen=True, slots=True)
class TemplateValues:
    """Valores prontos para o builder de payload."""

    header: list[ParamValue] = field(default_factory=list)
    body: list[ParamValue] = field(default_factory=list)
    footer: list[ParamValue] = field(default_factory=list)
    buttons: dict[int, list[ParamValue]] = field(default_factory=dict)
    header_location: HeaderLocation | None = None


@dataclass(frozen=True, slots=True)
class TemplateTokenInput:
    """Entradas configuradas pelo chamador para cada componente."""

    header: Sequence[str] = ()
    body: Sequence[str] = ()
    footer: Sequence[str] = ()
    buttons: Mapping[int, Sequence[str]] = field(default_factory=dict)
    header_location: HeaderLocation | Mapping[str, Any] | None = None
    positional_values: Mapping[str, Sequence[str]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PrecheckOk:
    normalized_phone: str
    values: TemplateValues
    ok: Literal[True] = True


@dataclass(frozen=True, slots=True)
class PrecheckSkipped:
    skip_code: SkipCode
    reason: str
    missing: list[MissingToken] = field(default_factory=list)
    ok: Literal[False] = False


PrecheckResult = PrecheckOk | PrecheckSkipped


def precheck_contact_for_template(
    contact: ContactRecord,
    template: TemplateDefinition,
    tokens: TemplateTokenInput,
    *,
    default_country_code: str | None = None,
) -> PrecheckResult:
    """Valida se o contato preenche todos os placeholders do template.

    Args:
        contact: Contato destinatário
        template: Definição do template
        tokens: Entradas configuradas por componente
        default_country_code: DDI aplicado a números nacionais; None usa
            `WHATSAPP_DEFAULT_COUNTRY_CODE` das settings

    Returns:
        PrecheckOk com telefone normalizado e valores, ou PrecheckSkipped.
    """
    if default_country_code is None:
        default_country_code = get_whatsapp_settings().default_country_code
    normalized_phone = normalize_phone(contact.phone, default_country_code)
    if normalized_phone is None:
        return PrecheckSkipped(
            skip_code=SkipCode.INVALID_PHONE,
            reason="Telefone ausente ou não normalizável",
        )

    declared = extract_template_tokens(template)
    problem = _find_declaration_problem(template.parameter_format, declared)
    if problem:
        return PrecheckSkipped(skip_code=SkipCode.INVALID_TEMPLATE_PARAMS, reason=problem)

    surplus = _find_surplus_entries(tokens, declared)
    if surplus:
        return PrecheckSkipped(skip_code=SkipCode.INVALID_TEMPLATE_PARAMS, reason=surplus)

    header_location = _coerce_location(tokens.header_location)
    if header_location is None and tokens.header_location is not None:
        return PrecheckSkipped(
            skip_code=SkipCode.INVALID_TEMPLATE_PARAMS,
            reason="header_location precisa ser um objeto com latitude, longitude, name e address",
        )

    missing: list[MissingToken] = []
    resolver = _Resolver(contact, tokens.positional_values)
    named = template.parameter_format is ParameterFormat.NAMED

    header = _resolve_slots("header", tokens.header, declared.header, resolver, named, missing)
    body = _resolve_slots("body", tokens.body, declared.body, resolver, named, missing)
    footer = _resolve_slots("footer", tokens.footer, [], resolver, named, missing)
    buttons: dict[int, list[ParamValue]] = {}
    for index in sorted(set(declared.buttons) | set(tokens.buttons)):
        buttons[index] = _resolve_slots(
            "button",
            tokens.buttons.get(index, ()),
            declared.buttons.get(index, []),
            resolver,
            named,
            missing,
        )

    if header_location is not None:
        missing.extend(
            MissingToken(where="header", key=name, raw=f"location.{name}")
            for name in header_location.missing_fields()
        )

    if missing:
        return PrecheckSkipped(
            skip_code=SkipCode.MISSING_REQUIRED_PARAM,
            reason=_describe_missing(missing),
            missing=missing,
        )

    return PrecheckOk(
        normalized_phone=normalized_phone,
        values=TemplateValues(
            header=header,
            body=body,
            footer=footer,
            buttons=buttons,
            header_location=header_location,
        ),
    )


class _Resolver:
    """Resolve placeholders contra contato e valores posicionais."""

    def __init__(
        self,
        contact: ContactRecord,
        positional_values: Mapping[str, Sequence[str]],
    ) -> None:
        self._contact = contact
        self._positional = positional_values

    def lookup(self, key: str, where: str) -> str | None:
        if key.isdigit():
            values = self._positional.get(where, ())
            position = int(key) - 1
            raw = values[position] if 0 <= position < len(values) else None
        else:
            raw = self._field(key)
        text = "" if raw is None else str(raw).strip()
        return text or None

    def _field(self, key: str) -> Any:
        lowered = key.lower()
        attribute = _CONTACT_FIELD_ALIASES.get(lowered)
        if attribute:
            return getattr(self._contact, attribute)
        custom = self._contact.custom_fields
        if key in custom:
            return custom[key]
        return next((value for name, value in custom.items() if name.lower() == lowered), None)

    def resolve(self, entry: str, where: str) -> str | None:
        """Substitui todos os placeholders; None se algum não resolver."""
        unresolved = False

        def _replace(match: re.Match[str]) -> str:
            nonlocal unresolved
            value = self.lookup(match.group(1), where)
            if value is None:
                unresolved = True
                return ""
            return value

        text = PLACEHOLDER_PATTERN.sub(_replace, str(entry))
        if unresolved or not text.strip():
            return None
        return text.strip()


def _unique_in_order(declared: list[ParameterToken]) -> list[ParameterToken]:
    seen: set[str] = set()
    unique: list[ParameterToken] = []
    for token in declared:
        if token.key not in seen:
            seen.add(token.key)
            unique.append(token)
    return unique


def _resolve_slots(
    where: TokenLocation,
    supplied: Sequence[str],
    declared: list[ParameterToken],
    resolver: _Resolver,
    named: bool,
    missing: list[MissingToken],
) -> list[ParamValue]:
    slots = _unique_in_order(declared)
    values: list[ParamValue] = []
    for position in range(max(len(supplied), len(slots))):
        slot = slots[position] if position < len(slots) else None
        key = slot.key if named and slot else str(position + 1)
        if position >= len(supplied):
            missing.append(MissingToken(where=where, key=key, raw=slot.raw if slot else ""))
            continue
        entry = supplied[position]
        text = resolver.resolve(entry, where) if entry is not None else None
        if text is None:
            missing.append(MissingToken(where=where, key=key, raw=str(entry or "")))
            continue
        values.append(ParamValue(key=key, text=text))
    return values


def _find_declaration_problem(
    parameter_format: ParameterFormat,
    declared: TemplateTokens,
) -> str | None:
    groups = [declared.header, declared.body, *declared.buttons.values()]
    if parameter_format is ParameterFormat.POSITIONAL:
        for group in groups:
            problem = find_positional_problem(group)
            if problem:
                return problem
        return None
    for group in groups:
        positional = [token.raw for token in group if token.is_positional]
        if positional:
            return (
                f"{group[0].where}: placeholders posicionais em template nomeado "
                f"({', '.join(positional)})"
            )
    return None


def _find_surplus_entries(tokens: TemplateTokenInput, declared: TemplateTokens) -> str | None:
    """Mais entradas que placeholders declarados: a Meta rejeitaria o envio.

    Componentes sem placeholders (header de mídia, botão FLOW) não limitam.
    """
    groups: list[tuple[str, Sequence[str], list[ParameterToken]]] = [
        ("header", tokens.header, declared.header),
        ("body", tokens.body, declared.body),
    ]
    groups.extend(
        (f"button:{index}", entries, declared.buttons.get(index, []))
        for index, entries in sorted(tokens.buttons.items())
    )
    for where, entries, slots in groups:
        expected = len(_unique_in_order(slots))
        if expected and len(entries) > expected:
            return f"{where}: {len(entries)} entradas para {expected} placeholder(s) declarado(s)"
    return None


def _coerce_location(location: object) -> HeaderLocation | None:
    """None também para entradas que não são objeto de localização."""
    if isinstance(location, HeaderLocation):
        return location
    if not isinstance(location, Mapping):
        return None
    return HeaderLocation.model_validate(dict(location))


def _describe_missing(missing: list[MissingToken]) -> str:
    first = missing[0]
    reason = f'Parâmetro obrigatório sem valor: {first.where}:{first.key} raw="{first.raw}"'
    if len(missing) > 1:
        reason += f" (+{len(missing) - 1} outros)"
    return reason
