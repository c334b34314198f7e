"""Modelos e utilitários para templates WhatsApp."""

from .models import (
    ContactRecord,
    HeaderLocation,
    ParameterToken,
    TemplateButton,
    TemplateCategory,
    TemplateComponent,
    TemplateDefinition,
    TemplateStatus,
    TokenLocation,
)
from .parser import (
    PLACEHOLDER_PATTERN,
    TemplateTokens,
    extract_placeholders,
    extract_template_tokens,
    find_positional_problem,
    parse_template_response,
)

__all__ = [
    "PLACEHOLDER_PATTERN",
    "ContactRecord",
    "HeaderLocation",
    "ParameterToken",
    "TemplateButton",
    "TemplateCategory",
    "TemplateComponent",
    "TemplateDefinition",
    "TemplateStatus",
    "TemplateTokens",
    "TokenLocation",
    "extract_placeholders",
    "extract_template_tokens",
    "find_positional_problem",
    "parse_template_response",
]
