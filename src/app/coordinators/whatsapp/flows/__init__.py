"""Coordenação do endpoint de data exchange de WhatsApp Flows."""

from .appointment import DEFAULT_SERVICES, build_appointment_router
from .errors import FlowRequestError, FlowScreenDataError
from .models import (
    FlowCompletionResponse,
    FlowErrorResponse,
    FlowHealthResponse,
    FlowRequest,
    FlowResponse,
    FlowScreenResponse,
)
from .router import FlowActionRouter
from .screens import FlowScreen

__all__ = [
    "DEFAULT_SERVICES",
    "FlowActionRouter",
    "FlowCompletionResponse",
    "FlowErrorResponse",
    "FlowHealthResponse",
    "FlowRequest",
    "FlowRequestError",
    "FlowResponse",
    "FlowScreen",
    "FlowScreenDataError",
    "FlowScreenResponse",
    "build_appointment_router",
]
