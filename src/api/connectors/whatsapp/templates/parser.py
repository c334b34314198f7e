"""Extração de placeholders e parser de resposta da API Meta para templates."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from app.constants.whatsapp import ButtonType, ComponentType

from .models import ParameterToken, TemplateDefinition, TokenLocation

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


@dataclass(frozen=True, slots=True)
class TemplateTokens:
    """Placeholders declarados no template, por componente."""

    header: list[ParameterToken] = field(default_factory=list)
    body: list[ParameterToken] = field(default_factory=list)
    buttons: dict[int, list[ParameterToken]] = field(default_factory=dict)


def extract_placeholders(text: str | None, where: TokenLocation) -> list[ParameterToken]:
    """Lista placeholders na ordem em que aparecem no texto."""
    if not text:
        return []
    return [
        ParameterToken(where=where, key=match.group(1), raw=match.group(0))
        for match in PLACEHOLDER_PATTERN.finditer(text)
    ]


def extract_template_tokens(template: TemplateDefinition) -> TemplateTokens:
    """Extrai placeholders de header (TEXT), body e botões URL."""
    header = template.header
    body = template.component(ComponentType.BODY)
    buttons = {
        index: extract_placeholders(button.url, "button")
        for index, button in enumerate(template.buttons)
        if button.type == ButtonType.URL and PLACEHOLDER_PATTERN.search(button.url or "")
    }
    return TemplateTokens(
        header=extract_placeholders(header.text if header else None, "header"),
        body=extract_placeholders(body.text if body else None, "body"),
        buttons=buttons,
    )


def find_positional_problem(tokens: list[ParameterToken]) -> str | None:
    """Valida que chaves posicionais formam a sequência 1..n sem lacunas.

    Returns:
        Descrição do problema ou None se a sequência é válida.
    """
    if not tokens:
        return None
    named = [token.raw for token in tokens if not token.is_positional]
    if named:
        where = tokens[0].where
        return f"{where}: placeholders nomeados em template posicional ({', '.join(named)})"
    keys = sorted({int(token.key) for token in tokens})
    expected = list(range(1, len(keys) + 1))
    if keys != expected:
        where = tokens[0].where
        return f"{where}: sequência posicional inválida {keys}, esperado {expected}"
    return None


def parse_template_response(data: dict[str, Any]) -> TemplateDefinition:
    """Converte item de /message_templates da Graph API em TemplateDefinition."""
    return TemplateDefinition.model_validate(
        {
            "name": data.get("name", ""),
            "language": data.get("language", "pt_BR"),
            "parameter_format": data.get("parameter_format", "POSITIONAL"),
            "category": data.get("category"),
            "status": data.get("status"),
            "components": data.get("components", []),
        }
    )
