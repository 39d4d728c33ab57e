# middleware/request_logging.py
"""
Middleware de log das solicitações HTTP.

Registra uma linha por requisição ("SOLICITAÇÃO DE DADOS") com método,
caminho, query string, cliente, status e duração. O header Authorization
nunca é registrado.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from utils.logging_config import get_logger

logger = get_logger(__name__)

IGNORED_ROUTES = {
    "/favicon.ico",
    "/docs",
    "/openapi.json",
    "/redoc",
}

HEADERS_OCULTOS = {"authorization", "cookie"}


def headers_seguros(request: Request) -> dict:
    """Headers da requisição sem credenciais."""
    return {
        nome: valor
        for nome, valor in request.headers.items()
        if nome.lower() not in HEADERS_OCULTOS
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = str(request.url.path)
        if self._should_ignore(path):
            return await call_next(request)

        start_time = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(
                "SOLICITAÇÃO DE DADOS",
                method=request.method,
                path=path,
                query=request.url.query or None,
                client=request.client.host if request.client else None,
                status_code=status_code,
                duration_ms=duration_ms,
                headers=headers_seguros(request),
            )

    def _should_ignore(self, path: str) -> bool:
        return any(path.startswith(ignored) for ignored in IGNORED_ROUTES)
