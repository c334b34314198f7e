"""Modelos e parsers de objetos da Graph API (templates, contatos)."""

__all__: list[str] = []
