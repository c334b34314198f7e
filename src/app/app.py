"""Aplicação ASGI do ZapFlow Gateway.

`uvicorn app.app:app --port 8080` em produção (Cloud Run define PORT);
`zapflow-gateway` sobe o mesmo app com reload para desenvolvimento.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.observability import CorrelationIdMiddleware
from config.logging import get_logger
from config.settings import BaseSettings, get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Logging precisa estar pronto antes do primeiro logger.info
initialize_app()

logger = get_logger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Valida settings no startup; staging/production não sobem com config inválida."""
    validate_runtime_settings()
    logger.info("app_started", extra={"version": APP_VERSION})
    yield
    logger.info("app_stopped")


def _docs_urls(settings: BaseSettings) -> dict[str, str | None]:
    if settings.is_production:
        return {"docs_url": None, "redoc_url": None, "openapi_url": None}
    return {"docs_url": "/docs", "redoc_url": "/redoc", "openapi_url": "/openapi.json"}


def create_app(settings: BaseSettings | None = None) -> FastAPI:
    """Monta o FastAPI com middlewares e rotas."""
    settings = settings or get_base_settings()
    fastapi_app = FastAPI(
        title="ZapFlow Gateway",
        description="Endpoint de WhatsApp Flows e contrato de templates",
        version=APP_VERSION,
        lifespan=lifespan,
        **_docs_urls(settings),
    )

    # Meta chama apenas GET (health check) e POST (data exchange)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    fastapi_app.add_middleware(CorrelationIdMiddleware)
    fastapi_app.include_router(create_api_router())

    logger.info(
        "app_configured",
        extra={"environment": settings.environment, "docs": not settings.is_production},
    )
    return fastapi_app


app = create_app()


def main() -> None:
    """Sobe o servidor local com reload."""
    import uvicorn

    port = get_base_settings().port
    logger.info("dev_server_starting", extra={"port": port})
    uvicorn.run("app.app:app", host="0.0.0.0", port=port, reload=True)


if __name__ == "__main__":
    main()
