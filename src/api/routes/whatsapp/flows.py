"""Endpoint de data-exchange para WhatsApp Flows.

Borda HTTP fina: valida envelope e assinatura, descriptografa, delega ao
roteador de ações e devolve a resposta criptografada em texto base64.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.bootstrap import get_flow_router, get_private_key_provider
from app.coordinators.whatsapp.flows import (
    FlowHealthResponse,
    FlowRequest,
    FlowRequestError,
    FlowScreenDataError,
)
from app.infra.crypto import (
    EncryptedFlowRequest,
    FlowDecryptionError,
    FlowEncryptionError,
    create_error_response,
    decrypt_flow_request,
    encrypt_flow_response,
    validate_flow_signature,
)
from config.settings import get_whatsapp_settings
from utils.errors import SecretProviderError

logger = logging.getLogger(__name__)

router = APIRouter()

_REQUIRED_FIELDS = ("encrypted_flow_data", "encrypted_aes_key", "initial_vector")
_INTERNAL_ERROR_MESSAGE = "Não foi possível processar a solicitação. Tente novamente."


@router.get("/flows/endpoint")
async def flow_endpoint_status() -> JSONResponse:
    """Indica se o endpoint tem chave privada configurada."""
    try:
        private_key = await _load_private_key()
    except SecretProviderError as exc:
        logger.warning(
            "flow_private_key_unavailable",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        private_key = None

    if private_key:
        content = {"status": "ready", "message": "Flow endpoint configurado"}
    else:
        content = {"status": "not_configured", "message": "Chave privada do Flow ausente"}
    return JSONResponse(content=content, status_code=200)


@router.post("/flows/endpoint")
async def handle_flow_endpoint(request: Request) -> Response:
    """Recebe payload criptografado da Meta e retorna plaintext base64."""
    settings = get_whatsapp_settings()
    raw_body = await request.body()

    encrypted = _parse_encrypted_body(raw_body)
    if encrypted is None:
        return _error(400, "Malformed request")

    if settings.app_secret:
        signature = request.headers.get("x-hub-signature-256", "")
        if not validate_flow_signature(raw_body, signature, settings.app_secret.encode("utf-8")):
            logger.warning(
                "flow_signature_invalid",
                extra={"component": "flow_endpoint", "action": "validate_signature"},
            )
            return _error(401, "Signature verification failed")

    try:
        private_key = await _load_private_key()
    except SecretProviderError as exc:
        logger.error(
            "flow_private_key_unavailable",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        private_key = None
    if not private_key:
        logger.error(
            "flow_endpoint_misconfigured",
            extra={"component": "flow_endpoint", "missing": "flow_private_key"},
        )
        return _error(500, "Flow endpoint misconfigured")

    try:
        decrypted = decrypt_flow_request(
            encrypted,
            private_key,
            settings.flow_private_key_passphrase or None,
        )
    except FlowDecryptionError as exc:
        logger.warning(
            "flow_decryption_failed",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        return _error(421, "Decryption failed")

    response_payload = _dispatch(decrypted.payload)
    if response_payload is None:
        return JSONResponse(content=FlowHealthResponse().as_dict(), status_code=200)

    try:
        encrypted_response = encrypt_flow_response(
            response=response_payload,
            aes_key=decrypted.aes_key,
            iv=decrypted.iv,
        )
    except FlowEncryptionError as exc:
        logger.error(
            "flow_encryption_failed",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        return _error(500, "Encryption failed")
    return PlainTextResponse(content=encrypted_response, status_code=200)


async def _load_private_key() -> str | None:
    name = get_whatsapp_settings().flow_private_key_setting
    return await get_private_key_provider().get_private_key(name)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


def _parse_encrypted_body(raw_body: bytes) -> EncryptedFlowRequest | None:
    try:
        payload = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(payload, dict):
        return None
    values = [payload.get(name) for name in _REQUIRED_FIELDS]
    if not all(isinstance(item, str) and item for item in values):
        return None
    encrypted_flow_data, encrypted_aes_key, initial_vector = values
    return EncryptedFlowRequest(
        encrypted_flow_data_b64=encrypted_flow_data,
        encrypted_aes_key_b64=encrypted_aes_key,
        initial_vector_b64=initial_vector,
    )


def _dispatch(payload: dict[str, Any]) -> dict[str, Any] | None:
    """Executa a ação; None indica ping (resposta sem criptografia)."""
    try:
        flow_request = FlowRequest.from_payload(payload)
        result = get_flow_router().handle(flow_request)
    except (FlowRequestError, FlowScreenDataError) as exc:
        logger.warning(
            "flow_request_invalid",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        return create_error_response(str(exc))
    except Exception as exc:
        logger.error(
            "flow_handler_failed",
            extra={"component": "flow_endpoint", "error_type": type(exc).__name__},
        )
        return create_error_response(_INTERNAL_ERROR_MESSAGE)

    if isinstance(result, FlowHealthResponse):
        return None
    logger.info(
        "flow_action_handled",
        extra={
            "component": "flow_endpoint",
            "action": str(flow_request.action),
            "screen": flow_request.screen,
        },
    )
    return result.as_dict()
