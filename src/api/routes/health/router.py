"""Liveness (`/health`) e readiness (`/ready`) para o Cloud Run.

Pronto significa: settings válidas e chave privada do Flow acessível no
provedor configurado. Sem a chave nenhum request de Flow é decifrável.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.bootstrap import get_private_key_provider
from config.settings import get_base_settings, get_whatsapp_settings

logger = logging.getLogger(__name__)

router = APIRouter()

KEY_CHECK_TIMEOUT_SECONDS = 3.0


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    status: Literal["ok", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> DependencyCheck:
        return cls(status="failed", error=error)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def _now() -> str:
    return datetime.now(UTC).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Processo vivo; não toca dependências."""
    return HealthResponse(status="healthy", service=get_base_settings().service_name, timestamp=_now())


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    checks = {
        "settings": _check_settings(),
        "flow_private_key": await _check_flow_private_key(),
    }
    ready = all(check.status == "ok" for check in checks.values())
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "timestamp": _now(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_settings() -> DependencyCheck:
    errors = get_base_settings().validate() + get_whatsapp_settings().validate()
    if errors:
        return DependencyCheck.failed(f"{len(errors)} setting(s) inválido(s)")
    return DependencyCheck(status="ok")


async def _check_flow_private_key() -> DependencyCheck:
    name = get_whatsapp_settings().flow_private_key_setting
    started_at = time.perf_counter()
    try:
        pem = await asyncio.wait_for(
            get_private_key_provider().get_private_key(name),
            timeout=KEY_CHECK_TIMEOUT_SECONDS,
        )
    except TimeoutError:
        return DependencyCheck.failed("timeout")
    except Exception as exc:
        logger.warning("readiness_flow_key_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck.failed(type(exc).__name__)
    if not pem:
        return DependencyCheck.failed("not_configured")
    elapsed_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(elapsed_ms, 2))
