# quickbite/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: RequestContextMiddleware
===============================================================================

Primer middleware de aplicación (solo CORS va por fuera):
   - Adopta el X-Request-Id entrante si es razonable, si no genera uno.
   - Publica request_id/method/path para los logs del request.
   - Al terminar: header X-Request-Id, línea de log y métricas HTTP.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Responsabilidades:
  - Correlación de logs por request
  - clear_context() siempre, haya o no excepción

Colaboradores:
  - quickbite/context.py
  - crosscutting/metrics.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger
from .metrics import record_request_metrics

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128

# R: probes y scraping no generan una línea de log por request.
UNLOGGED_PATHS = frozenset({"/healthz", "/metrics"})


def resolve_request_id(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH and candidate.isprintable():
        return candidate
    return uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        path = request.url.path
        request.state.request_id = request_id
        set_request_context(request_id=request_id, method=request.method, path=path)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request abortado por excepción")
            raise
        else:
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            elapsed = time.perf_counter() - started
            record_request_metrics(path, request.method, status, elapsed)
            if path not in UNLOGGED_PATHS:
                logger.info(
                    "Request finalizado",
                    extra={"status_code": status, "duration_ms": int(elapsed * 1000)},
                )
            clear_context()
