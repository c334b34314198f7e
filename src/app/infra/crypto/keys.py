"""Operações de chave RSA e AES para Flows."""

from __future__ import annotations

import base64
import binascii
import re
from typing import Any

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.hashes import SHA256

from .constants import AES_KEY_SIZES_ALLOWED
from .errors import FlowKeyError, FlowPayloadError

_URLSAFE_B64 = re.compile(r"[A-Za-z0-9_\-]+={0,2}")

_OAEP = padding.OAEP(
    mgf=padding.MGF1(algorithm=SHA256()),
    algorithm=SHA256(),
    label=None,
)


def decode_base64(raw_value: str, *, field: str) -> bytes:
    """Decodifica base64 padrão, tolerando padding ausente.

    Fallback urlsafe apenas para entradas compostas por caracteres urlsafe,
    evitando decodificação permissiva de lixo como '%%%invalid'.

    Raises:
        FlowPayloadError: Se o valor não for base64 válido
    """
    value = raw_value.strip()
    padded = value + ("=" * (-len(value) % 4))
    try:
        return base64.b64decode(padded, validate=True)
    except (ValueError, binascii.Error):
        if not _URLSAFE_B64.fullmatch(value):
            raise FlowPayloadError(f"Invalid base64 in {field}: invalid characters") from None
        try:
            return base64.urlsafe_b64decode(padded)
        except (ValueError, binascii.Error) as exc:
            raise FlowPayloadError(f"Invalid base64 in {field}: {exc}") from exc


def load_private_key(private_key_pem: str, passphrase: str | None = None) -> rsa.RSAPrivateKey:
    """Carrega chave privada RSA em formato PEM.

    Args:
        private_key_pem: Chave privada em formato PEM
        passphrase: Senha da chave (opcional)

    Returns:
        Chave privada RSA

    Raises:
        FlowKeyError: Se chave inválida ou não RSA
    """
    passphrase_bytes = passphrase.encode() if passphrase and passphrase.strip() else None

    def _load(password: bytes | None) -> Any:
        return serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"),
            password=password,
        )

    try:
        key = _load(passphrase_bytes)
    except (ValueError, TypeError) as exc:
        # Permite fallback quando a chave não está criptografada, mas uma
        # passphrase foi injetada por configuração.
        if passphrase_bytes and "not encrypted" in str(exc).lower():
            try:
                key = _load(None)
            except (ValueError, TypeError) as retry_exc:
                raise FlowKeyError(f"Invalid private key: {retry_exc}") from retry_exc
        else:
            raise FlowKeyError(f"Invalid private key: {exc}") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise FlowKeyError("Private key must be RSA")
    return key


def decrypt_aes_key(private_key: rsa.RSAPrivateKey, encrypted_aes_key: bytes) -> bytes:
    """Descriptografa chave AES criptografada com RSA-OAEP (SHA-256).

    Args:
        private_key: Chave privada RSA
        encrypted_aes_key: Chave AES criptografada (bytes brutos)

    Returns:
        Chave AES bruta (128/192/256 bits)

    Raises:
        FlowKeyError: Se a chave privada não abrir o envelope
    """
    try:
        aes_key = private_key.decrypt(encrypted_aes_key, _OAEP)
    except ValueError as exc:
        raise FlowKeyError(f"AES key decryption failed: {exc}") from exc

    if len(aes_key) not in AES_KEY_SIZES_ALLOWED:
        raise FlowKeyError(f"Invalid AES key size: {len(aes_key)}")

    return aes_key
