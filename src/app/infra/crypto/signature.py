"""Validação de assinatura HMAC-SHA256 do endpoint de Flows."""

from __future__ import annotations

import hashlib
import hmac

_SIGNATURE_PREFIX = "sha256="


def validate_flow_signature(payload: bytes, signature: str, secret: bytes) -> bool:
    """Valida header X-Hub-Signature-256 enviado pela Meta.

    Args:
        payload: Corpo bruto da requisição
        signature: Valor do header (formato "sha256=<hex>")
        secret: App secret em bytes

    Returns:
        True se assinatura válida
    """
    signature = signature.strip()
    if not signature.lower().startswith(_SIGNATURE_PREFIX):
        return False

    expected = signature[len(_SIGNATURE_PREFIX):].lower()
    computed = hmac.new(secret, payload, hashlib.sha256).hexdigest()
    return hmac.compare_digest(computed, expected)
