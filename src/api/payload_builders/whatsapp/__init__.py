"""Builders de payload para API Meta/WhatsApp."""

from api.payload_builders.whatsapp.template import (
    TemplatePayloadError,
    build_meta_template_payload,
)

__all__ = [
    "TemplatePayloadError",
    "build_meta_template_payload",
]
