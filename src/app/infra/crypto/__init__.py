"""Módulo de criptografia para WhatsApp Flows.

Este módulo contém a implementação de criptografia RSA/AES para
WhatsApp Flows (descriptografia de requests, criptografia de responses).

Localizado em app/infra/ para manter boundaries corretas:
- app/ não importa de api/ (exceto via bootstrap)
- Este módulo pode ser usado por coordinators em app/
"""

from .constants import IV_SIZE, TAG_SIZE
from .errors import (
    FlowAuthenticationError,
    FlowCryptoError,
    FlowDecryptionError,
    FlowEncryptionError,
    FlowKeyError,
    FlowPayloadError,
)
from .flow_encryption import (
    DecryptedFlowRequest,
    EncryptedFlowRequest,
    create_error_response,
    decrypt_flow_request,
    encrypt_flow_response,
    flip_iv,
)
from .keys import decrypt_aes_key, load_private_key
from .signature import validate_flow_signature

__all__ = [
    "IV_SIZE",
    "TAG_SIZE",
    "DecryptedFlowRequest",
    "EncryptedFlowRequest",
    "FlowAuthenticationError",
    "FlowCryptoError",
    "FlowDecryptionError",
    "FlowEncryptionError",
    "FlowKeyError",
    "FlowPayloadError",
    "create_error_response",
    "decrypt_aes_key",
    "decrypt_flow_request",
    "encrypt_flow_response",
    "flip_iv",
    "load_private_key",
    "validate_flow_signature",
]
