"""Modelos de template WhatsApp e dos dados de contato que o preenchem."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from app.constants.whatsapp import ComponentType, HeaderFormat, ParameterFormat

TokenLocation = Literal["header", "body", "footer", "button"]


class TemplateCategory(StrEnum):
    """Categorias de template conforme Meta."""

    MARKETING = "MARKETING"
    UTILITY = "UTILITY"
    AUTHENTICATION = "AUTHENTICATION"


class TemplateStatus(StrEnum):
    """Status de aprovação de template."""

    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    PAUSED = "PAUSED"
    DISABLED = "DISABLED"


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


LocationField = Annotated[str, BeforeValidator(_as_text)]


class TemplateButton(BaseModel):
    """Botão declarado no componente BUTTONS."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Annotated[str, BeforeValidator(_upper)]
    text: str = ""
    url: str | None = None


class TemplateComponent(BaseModel):
    """Componente de template (HEADER, BODY, FOOTER, BUTTONS)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Annotated[ComponentType, BeforeValidator(_upper)]
    format: Annotated[HeaderFormat | None, BeforeValidator(_upper)] = None
    text: str | None = None
    buttons: list[TemplateButton] = Field(default_factory=list)


class TemplateDefinition(BaseModel):
    """Template como armazenado/sincronizado; somente leitura no core."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: str
    language: str = "pt_BR"
    parameter_format: Annotated[ParameterFormat, BeforeValidator(_lower)] = Field(
        ParameterFormat.POSITIONAL, alias="parameterFormat"
    )
    category: TemplateCategory | None = None
    status: TemplateStatus | None = None
    components: list[TemplateComponent] = Field(default_factory=list)

    def component(self, component_type: ComponentType) -> TemplateComponent | None:
        """Primeiro componente do tipo informado, se houver."""
        return next((c for c in self.components if c.type == component_type), None)

    @property
    def header(self) -> TemplateComponent | None:
        return self.component(ComponentType.HEADER)

    @property
    def buttons(self) -> list[TemplateButton]:
        component = self.component(ComponentType.BUTTONS)
        return list(component.buttons) if component else []


class ContactRecord(BaseModel):
    """Contato destinatário (somente leitura)."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    contact_id: str = Field("", alias="contactId")
    name: str | None = None
    phone: str = ""
    email: str | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)


class HeaderLocation(BaseModel):
    """Dados de localização para header LOCATION.

    Campos vazios são aceitos na construção; o precheck decide se faltam.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    latitude: LocationField = ""
    longitude: LocationField = ""
    name: LocationField = ""
    address: LocationField = ""

    def missing_fields(self) -> list[str]:
        """Campos vazios ou só com espaços, na ordem do contrato."""
        return [
            name
            for name in ("latitude", "longitude", "name", "address")
            if not getattr(self, name).strip()
        ]

    def as_payload(self) -> dict[str, str]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "name": self.name,
            "address": self.address,
        }


@dataclass(frozen=True, slots=True)
class ParameterToken:
    """Ocorrência de placeholder no texto de um componente.

    `raw` guarda o texto literal ({{...}}) para diagnóstico.
    """

    where: TokenLocation
    key: str
    raw: str

    @property
    def is_positional(self) -> bool:
        return self.key.isdigit()
