"""Montagem das rotas HTTP do gateway."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.whatsapp.router import router as whatsapp_router

WHATSAPP_PREFIX = "/webhook/whatsapp"


def create_api_router() -> APIRouter:
    """`/health` e `/ready` na raiz; Flows sob `/webhook/whatsapp`."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(whatsapp_router, prefix=WHATSAPP_PREFIX, tags=["whatsapp"])
    return api_router
