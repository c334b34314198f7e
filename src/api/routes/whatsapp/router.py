"""Rotas do canal WhatsApp."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.whatsapp.flows import router as flows_router

router = APIRouter()
router.include_router(flows_router)
