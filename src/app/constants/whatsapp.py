"""Enums de domínio para WhatsApp Flows e templates."""

from __future__ import annotations

from enum import StrEnum


class FlowAction(StrEnum):
    """Ações enviadas pela Meta ao endpoint de data exchange."""

    PING = "ping"
    INIT = "INIT"
    DATA_EXCHANGE = "data_exchange"
    BACK = "BACK"


class ParameterFormat(StrEnum):
    """Formato de placeholders do template ({{1}} vs {{nome}})."""

    POSITIONAL = "positional"
    NAMED = "named"


class ComponentType(StrEnum):
    """Tipos de componente de template conforme Meta."""

    HEADER = "HEADER"
    BODY = "BODY"
    FOOTER = "FOOTER"
    BUTTONS = "BUTTONS"


class HeaderFormat(StrEnum):
    """Formatos de header de template."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"
    LOCATION = "LOCATION"


class ButtonType(StrEnum):
    """Tipos de botão de template relevantes para parâmetros."""

    URL = "URL"
    QUICK_REPLY = "QUICK_REPLY"
    PHONE_NUMBER = "PHONE_NUMBER"
    COPY_CODE = "COPY_CODE"
    FLOW = "FLOW"


MEDIA_HEADER_FORMATS = frozenset({HeaderFormat.IMAGE, HeaderFormat.VIDEO, HeaderFormat.DOCUMENT})
