"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (Flows, health)
- Validação inicial de request (envelope, assinatura)
- Delegação para coordinators
- Respostas HTTP apropriadas

Estrutura:
- routes/whatsapp/: endpoint de data-exchange de Flows
- routes/health/: health checks e readiness

Agregação:
- router.py: registra todos os routers no app principal
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
