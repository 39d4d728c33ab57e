# middleware/__init__.py
"""
Middlewares da API da livraria.
"""

from middleware.request_id import RequestIDMiddleware, get_request_id, REQUEST_ID_HEADER
from middleware.request_logging import RequestLoggingMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "get_request_id",
    "REQUEST_ID_HEADER",
]
