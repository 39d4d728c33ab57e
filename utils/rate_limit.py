# utils/rate_limit.py
# -*- coding: utf-8 -*-
"""
Rate Limiting da API da livraria.

SECURITY: Protege o login contra brute-force.

Uso:
    from utils.rate_limit import limiter, LIMITS

    # No main.py
    app.state.limiter = limiter

    # Nos routers
    @router.post("/login")
    @limiter.limit(LIMITS["login"])
    def login(request: Request, ...):
        ...
"""

import os

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from utils.logging_config import get_logger

logger = get_logger(__name__)

# ==================================================
# CONFIGURAÇÃO
# ==================================================

def get_real_ip(request: Request) -> str:
    """
    Obtém IP real do cliente, considerando headers de proxy.

    Prioridade:
    1. X-Forwarded-For (primeiro IP da lista)
    2. X-Real-IP
    3. IP direto da conexão
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_LOGIN = os.getenv("RATE_LIMIT_LOGIN", "5/minute")
RATE_LIMIT_REPORT = os.getenv("RATE_LIMIT_REPORT", "20/minute")

# Storage: memória por padrão, Redis em produção (redis://...)
RATE_LIMIT_STORAGE = os.getenv("RATE_LIMIT_STORAGE", "memory://")

limiter = Limiter(
    key_func=get_real_ip,
    enabled=RATE_LIMIT_ENABLED,
    storage_uri=RATE_LIMIT_STORAGE,
)

LIMITS = {
    "login": RATE_LIMIT_LOGIN,
    "relatorio": RATE_LIMIT_REPORT,
}


# ==================================================
# HANDLER
# ==================================================

async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para rate limit excedido, no envelope de erro padrão.
    """
    exc_detail = getattr(exc, "detail", str(exc))
    logger.warning(
        "rate_limit_excedido",
        ip=get_real_ip(request),
        path=request.url.path,
        limite=str(exc_detail),
    )

    return JSONResponse(
        status_code=429,
        content={
            "codigoErro": 429,
            "mensagemErro": "Limite de requisições excedido. Tente novamente em alguns minutos.",
        },
        headers={"Retry-After": "60"},
    )
