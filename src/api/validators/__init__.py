"""Prechecks executados antes de montar payloads para a Meta.

`whatsapp/` valida telefone E.164 e o contrato contato x template.
"""

__all__: list[str] = []
