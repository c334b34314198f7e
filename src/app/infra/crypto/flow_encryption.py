"""Criptografia para endpoint de WhatsApp Flows (data exchange)."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import IV_SIZE, TAG_SIZE
from .errors import (
    FlowAuthenticationError,
    FlowEncryptionError,
    FlowPayloadError,
)
from .keys import decode_base64, decrypt_aes_key, load_private_key


@dataclass(frozen=True, slots=True)
class EncryptedFlowRequest:
    """Envelope recebido da Meta (campos em base64)."""

    encrypted_flow_data_b64: str
    encrypted_aes_key_b64: str
    initial_vector_b64: str


@dataclass(frozen=True, slots=True)
class DecryptedFlowRequest:
    """Payload descriptografado + material para resposta criptografada.

    A chave AES e o IV valem só para o par request/response atual.
    """

    payload: dict[str, Any]
    aes_key: bytes = field(repr=False)
    iv: bytes = field(repr=False)


def decrypt_flow_request(
    request: EncryptedFlowRequest,
    private_key_pem: str,
    private_key_passphrase: str | None = None,
) -> DecryptedFlowRequest:
    """Descriptografa request do endpoint de Flow.

    O formato esperado pela Meta é:
    - `encrypted_aes_key`: chave AES criptografada com RSA-OAEP (base64)
    - `initial_vector`: IV AES-GCM (base64)
    - `encrypted_flow_data`: ciphertext + auth tag concatenados (base64)

    Raises:
        FlowKeyError: Chave privada inválida ou envelope RSA não abre
        FlowAuthenticationError: Tag GCM inválida ou IV inutilizável
        FlowPayloadError: base64, framing ou JSON inválidos
    """
    iv = decode_base64(request.initial_vector_b64, field="initial_vector")
    flow_data = decode_base64(request.encrypted_flow_data_b64, field="encrypted_flow_data")
    encrypted_aes_key = decode_base64(request.encrypted_aes_key_b64, field="encrypted_aes_key")

    if len(flow_data) <= TAG_SIZE:
        raise FlowPayloadError(f"Flow data too short: {len(flow_data)} bytes")

    private_key = load_private_key(private_key_pem, private_key_passphrase)
    aes_key = decrypt_aes_key(private_key, encrypted_aes_key)

    if len(iv) != IV_SIZE:
        raise FlowAuthenticationError(f"Invalid IV length: {len(iv)} bytes")

    try:
        plaintext = AESGCM(aes_key).decrypt(iv, flow_data, None)
    except InvalidTag as exc:
        raise FlowAuthenticationError("Flow payload authentication failed") from exc
    except ValueError as exc:
        # chave AES de tamanho não suportado pelo AESGCM
        raise FlowAuthenticationError(f"Flow payload decryption failed: {exc}") from exc

    try:
        payload = json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise FlowPayloadError(f"Flow payload is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise FlowPayloadError("Flow payload must be a JSON object")

    return DecryptedFlowRequest(payload=payload, aes_key=aes_key, iv=iv)


def flip_iv(iv: bytes) -> bytes:
    """Inverte todos os bits do IV (exigência do protocolo de Flows)."""
    return bytes(byte ^ 0xFF for byte in iv)


def encrypt_flow_response(
    *,
    response: dict[str, Any],
    aes_key: bytes,
    iv: bytes,
) -> str:
    """Criptografa resposta para Flow e retorna plaintext base64.

    A Meta espera a resposta criptografada com IV invertido (XOR 0xFF),
    retornada como texto simples contendo base64(ciphertext + tag).
    """
    if not isinstance(response, dict):
        raise FlowEncryptionError("response must be a dict")

    try:
        plaintext = json.dumps(response, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
        encrypted = AESGCM(aes_key).encrypt(flip_iv(iv), plaintext, None)
    except (TypeError, ValueError) as exc:
        raise FlowEncryptionError(f"Flow response encryption failed: {exc}") from exc
    return base64.b64encode(encrypted).decode("utf-8")


def create_error_response(message: str) -> dict[str, Any]:
    """Response terminal de erro no formato aceito pelo cliente de Flows."""
    return {"data": {"status": "error", "error_message": message}}
