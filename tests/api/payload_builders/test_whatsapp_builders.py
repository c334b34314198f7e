"""Testes do builder de payload de template Meta."""

from __future__ import annotations

import pytest

from api.connectors.whatsapp.templates import HeaderLocation, TemplateDefinition
from api.payload_builders.whatsapp import TemplatePayloadError, build_meta_template_payload
from api.validators.whatsapp import ParamValue, TemplateValues

LOCATION = HeaderLocation(
    latitude="-23.5505",
    longitude="-46.6333",
    name="Loja São Paulo",
    address="Av. Paulista, 1000",
)


def _template(*components: dict[str, object], parameter_format: str = "POSITIONAL") -> TemplateDefinition:
    return TemplateDefinition.model_validate(
        {"name": "aviso", "parameter_format": parameter_format, "components": list(components)}
    )


def _build(template: TemplateDefinition, values: TemplateValues, **kwargs: object) -> dict:
    return build_meta_template_payload(
        to="+5511999999999",
        template_name=template.name,
        language="pt_BR",
        parameter_format=template.parameter_format,
        values=values,
        template=template,
        **kwargs,  # type: ignore[arg-type]
    )


def test_body_parameters_in_order() -> None:
    template = _template({"type": "BODY", "text": "Olá {{1}}, pedido {{2}}"})
    values = TemplateValues(body=[ParamValue("1", "João"), ParamValue("2", "4521")])

    payload = _build(template, values)

    assert payload["messaging_product"] == "whatsapp"
    assert payload["recipient_type"] == "individual"
    assert payload["to"] == "+5511999999999"
    assert payload["type"] == "template"
    assert payload["template"]["name"] == "aviso"
    assert payload["template"]["language"] == {"code": "pt_BR"}
    assert payload["template"]["components"] == [
        {
            "type": "body",
            "parameters": [{"type": "text", "text": "João"}, {"type": "text", "text": "4521"}],
        }
    ]


def test_named_parameters_carry_parameter_name() -> None:
    template = _template({"type": "BODY", "text": "Olá {{first_name}}"}, parameter_format="NAMED")
    payload = _build(template, TemplateValues(body=[ParamValue("first_name", "João")]))

    assert payload["template"]["components"][0]["parameters"] == [
        {"type": "text", "text": "João", "parameter_name": "first_name"}
    ]


def test_location_header_payload() -> None:
    template = _template({"type": "HEADER", "format": "LOCATION"}, {"type": "BODY", "text": "Oi"})

    payload = _build(template, TemplateValues(header_location=LOCATION))

    assert payload["template"]["components"][0] == {
        "type": "header",
        "parameters": [
            {
                "type": "location",
                "location": {
                    "latitude": "-23.5505",
                    "longitude": "-46.6333",
                    "name": "Loja São Paulo",
                    "address": "Av. Paulista, 1000",
                },
            }
        ],
    }


def test_location_header_without_data_raises() -> None:
    template = _template({"type": "HEADER", "format": "LOCATION"}, {"type": "BODY", "text": "Oi"})

    with pytest.raises(TemplatePayloadError, match="não há dados de localização"):
        _build(template, TemplateValues())


@pytest.mark.parametrize(
    ("location", "named_fields"),
    [
        (HeaderLocation(latitude="-23.5"), "longitude, name, address"),
        (LOCATION.model_copy(update={"address": "   "}), "address"),
    ],
)
def test_incomplete_location_header_raises(location: HeaderLocation, named_fields: str) -> None:
    template = _template({"type": "HEADER", "format": "LOCATION"}, {"type": "BODY", "text": "Oi"})

    with pytest.raises(TemplatePayloadError, match=f"campos vazios: {named_fields}"):
        _build(template, TemplateValues(header_location=location))


@pytest.mark.parametrize(
    ("value", "reference"),
    [
        ("https://cdn.example.com/banner.png", {"link": "https://cdn.example.com/banner.png"}),
        ("1234567890", {"id": "1234567890"}),
    ],
)
def test_media_header_uses_link_or_id(value: str, reference: dict[str, str]) -> None:
    template = _template({"type": "HEADER", "format": "IMAGE"})

    payload = _build(template, TemplateValues(header=[ParamValue("1", value)]))

    assert payload["template"]["components"] == [
        {"type": "header", "parameters": [{"type": "image", "image": reference}]}
    ]


def test_media_header_without_value_raises() -> None:
    with pytest.raises(TemplatePayloadError):
        _build(_template({"type": "HEADER", "format": "DOCUMENT"}), TemplateValues())


def test_footer_values_are_never_emitted() -> None:
    template = _template({"type": "BODY", "text": "Oi"}, {"type": "FOOTER", "text": "Equipe {{1}}"})
    payload = _build(template, TemplateValues(footer=[ParamValue("1", "Zap")]))

    assert "components" not in payload["template"]


def test_url_and_flow_buttons() -> None:
    template = _template(
        {"type": "BODY", "text": "Oi"},
        {
            "type": "BUTTONS",
            "buttons": [
                {"type": "URL", "text": "Ver", "url": "https://x.com/p/{{1}}"},
                {"type": "FLOW", "text": "Agendar"},
            ],
        },
    )
    values = TemplateValues(buttons={0: [ParamValue("1", "4521")]})

    payload = _build(template, values, flow_token="flow-123")

    assert payload["template"]["components"] == [
        {
            "type": "button",
            "sub_type": "url",
            "index": "0",
            "parameters": [{"type": "text", "text": "4521"}],
        },
        {
            "type": "button",
            "sub_type": "flow",
            "index": "1",
            "parameters": [
                {"type": "action", "action": {"flow_token": "flow-123", "flow_action_data": {}}}
            ],
        },
    ]


def test_template_is_not_mutated() -> None:
    template = _template({"type": "HEADER", "format": "LOCATION"})
    before = template.model_dump()

    _build(template, TemplateValues(header_location=LOCATION))

    assert template.model_dump() == before
