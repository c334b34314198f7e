"""Validadores de contrato para mensagens WhatsApp/Meta.

Uso:
    from api.validators.whatsapp import (
        TemplateTokenInput,
        precheck_contact_for_template,
    )

    result = precheck_contact_for_template(contact, template, TemplateTokenInput(body=["{{nome}}"]))
    if not result.ok:
        logger.info("contact_skipped", extra={"skip_code": result.skip_code})
"""

from api.validators.whatsapp.phone import normalize_phone
from api.validators.whatsapp.template_contract import (
    MissingToken,
    ParamValue,
    PrecheckOk,
    PrecheckResult,
    PrecheckSkipped,
    SkipCode,
    TemplateTokenInput,
    TemplateValues,
    precheck_contact_for_template,
)

__all__ = [
    "MissingToken",
    "ParamValue",
    "PrecheckOk",
    "PrecheckResult",
    "PrecheckSkipped",
    "SkipCode",
    "TemplateTokenInput",
    "TemplateValues",
    "normalize_phone",
    "precheck_contact_for_template",
]
