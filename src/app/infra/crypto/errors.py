"""Erros de criptografia para WhatsApp Flows.

Definido em app/infra para manter boundaries corretas.

Hierarquia:
- FlowCryptoError
  - FlowDecryptionError: qualquer falha ao abrir a request (HTTP 421)
    - FlowKeyError: chave privada inválida ou incapaz de abrir a chave AES
    - FlowAuthenticationError: tag GCM não confere (adulteração ou IV errado)
    - FlowPayloadError: base64/framing/JSON inválidos
  - FlowEncryptionError: falha ao selar a response

As subclasses de FlowDecryptionError existem apenas para diagnóstico interno;
a borda HTTP responde igual para todas.
"""


class FlowCryptoError(Exception):
    """Erro em operação criptográfica de Flow."""


class FlowDecryptionError(FlowCryptoError):
    """Request de Flow não pôde ser descriptografada."""


class FlowKeyError(FlowDecryptionError):
    """Chave privada inválida ou chave AES não recuperável."""


class FlowAuthenticationError(FlowDecryptionError):
    """Falha de autenticação AES-GCM."""


class FlowPayloadError(FlowDecryptionError):
    """Payload mal formado (base64, tamanho ou JSON)."""


class FlowEncryptionError(FlowCryptoError):
    """Response de Flow não pôde ser criptografada."""
