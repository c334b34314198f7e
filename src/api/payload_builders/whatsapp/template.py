"""Builder para mensagens de template.

Monta o corpo exato de `POST /{phone_number_id}/messages` com `type=template`.
Os nomes e o aninhamento seguem a Cloud API; nada aqui é interpretado
localmente.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.whatsapp import (
    MEDIA_HEADER_FORMATS,
    ButtonType,
    HeaderFormat,
    ParameterFormat,
)

if TYPE_CHECKING:
    from api.connectors.whatsapp.templates import TemplateDefinition
    from api.validators.whatsapp import ParamValue, TemplateValues


class TemplatePayloadError(ValueError):
    """Entrada do builder viola o contrato (erro de programação do chamador)."""


def build_meta_template_payload(
    *,
    to: str,
    template_name: str,
    language: str,
    parameter_format: ParameterFormat | str,
    values: TemplateValues,
    template: TemplateDefinition,
    flow_token: str | None = None,
) -> dict[str, Any]:
    """Constrói payload de template conforme API Meta.

    Args:
        to: Destinatário normalizado (E.164)
        template_name: Nome aprovado do template
        language: Código de idioma (ex: pt_BR)
        parameter_format: positional ou named
        values: Valores resolvidos pelo precheck
        template: Definição do template (não é alterada)
        flow_token: Token para botão FLOW (opcional)

    Returns:
        Payload completo pronto para envio

    Raises:
        TemplatePayloadError: Header LOCATION incompleto ou mídia sem dados
    """
    named = ParameterFormat(str(parameter_format).lower()) is ParameterFormat.NAMED
    components: list[dict[str, Any]] = []

    header = _build_header(template, values, named)
    if header is not None:
        components.append(header)

    if values.body:
        components.append({"type": "body", "parameters": _text_parameters(values.body, named)})

    components.extend(_build_buttons(template, values, named, flow_token))

    template_obj: dict[str, Any] = {
        "name": template_name,
        "language": {"code": language},
    }
    if components:
        template_obj["components"] = components

    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to,
        "type": "template",
        "template": template_obj,
    }


def _text_parameters(params: list[ParamValue], named: bool) -> list[dict[str, str]]:
    parameters: list[dict[str, str]] = []
    for param in params:
        item = {"type": "text", "text": param.text}
        if named:
            item["parameter_name"] = param.key
        parameters.append(item)
    return parameters


def _build_header(
    template: TemplateDefinition,
    values: TemplateValues,
    named: bool,
) -> dict[str, Any] | None:
    header = template.header
    header_format = (header.format if header else None) or HeaderFormat.TEXT

    if header is not None and header_format is HeaderFormat.LOCATION:
        location = values.header_location
        if location is None:
            raise TemplatePayloadError(
                f"Template '{template.name}' tem header LOCATION, mas não há dados de "
                "localização (header_location) para preencher"
            )
        incomplete = location.missing_fields()
        if incomplete:
            raise TemplatePayloadError(
                f"Template '{template.name}' tem header LOCATION com campos vazios: "
                f"{', '.join(incomplete)}"
            )
        return {
            "type": "header",
            "parameters": [{"type": "location", "location": location.as_payload()}],
        }

    if header is not None and header_format in MEDIA_HEADER_FORMATS:
        if not values.header:
            raise TemplatePayloadError(
                f"Template '{template.name}' tem header {header_format}, mas não há mídia "
                "(link ou id) para preencher"
            )
        media_type = header_format.lower()
        return {
            "type": "header",
            "parameters": [{"type": media_type, media_type: _media_reference(values.header[0].text)}],
        }

    if values.header:
        return {"type": "header", "parameters": _text_parameters(values.header, named)}
    return None


def _media_reference(value: str) -> dict[str, str]:
    if value.startswith(("https://", "http://")):
        return {"link": value}
    return {"id": value}


def _build_buttons(
    template: TemplateDefinition,
    values: TemplateValues,
    named: bool,
    flow_token: str | None,
) -> list[dict[str, Any]]:
    components: list[dict[str, Any]] = []
    for index, button in enumerate(template.buttons):
        if button.type == ButtonType.URL and values.buttons.get(index):
            components.append(
                {
                    "type": "button",
                    "sub_type": "url",
                    "index": str(index),
                    "parameters": _text_parameters(values.buttons[index], named=False),
                }
            )
        elif button.type == ButtonType.FLOW and flow_token:
            components.append(
                {
                    "type": "button",
                    "sub_type": "flow",
                    "index": str(index),
                    "parameters": [
                        {
                            "type": "action",
                            "action": {"flow_token": flow_token, "flow_action_data": {}},
                        }
                    ],
                }
            )
    return components
