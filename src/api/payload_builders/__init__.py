"""Montagem de payloads de envio para a Graph API (`whatsapp/`)."""

__all__: list[str] = []
