"""Constantes criptográficas para WhatsApp Flows."""

AES_KEY_SIZES_ALLOWED = (16, 24, 32)  # 128/192/256 bits
IV_SIZE = 16  # a Meta sempre envia 128 bits; outro tamanho é IV adulterado
TAG_SIZE = 16  # 128 bits
