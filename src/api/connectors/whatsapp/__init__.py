"""Conector WhatsApp - adapter de borda para Meta Graph API.

Responsabilidades:
- Modelos de template (definição, contato, localização)
- Extração de placeholders e parsing de templates sincronizados da Graph API
"""

__all__: list[str] = []
