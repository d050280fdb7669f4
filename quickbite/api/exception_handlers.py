"""
===============================================================================
TARJETA CRC — api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones no capturadas por los routers a RFC7807.
  - Loguear con request_id + error_id para correlación.
  - No filtrar detalles de storage ni stacktraces en producción.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, handlers base
  - crosscutting.exceptions: QuickBiteError / DatabaseError
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    request_validation_handler,
)
from ..crosscutting.exceptions import DatabaseError, QuickBiteError
from ..crosscutting.logger import logger


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_internal_error(
    request: Request,
    *,
    exc: QuickBiteError,
    code: ErrorCode,
    status_code: int,
    detail: str,
) -> JSONResponse:
    request_id = _request_id_from(request)
    logger.error(
        "Error interno",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": request_id,
        },
    )
    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=detail,
        errors=[exc.public_payload()],
    )
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return await _handle_internal_error(
        request,
        exc=exc,
        code=ErrorCode.DATABASE_ERROR,
        status_code=503,
        detail="Servicio de datos no disponible.",
    )


async def quickbite_error_handler(request: Request, exc: QuickBiteError) -> JSONResponse:
    return await _handle_internal_error(
        request,
        exc=exc,
        code=ErrorCode.INTERNAL_ERROR,
        status_code=500,
        detail="Error interno.",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id_from(request)
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error_type": type(exc).__name__},
    )
    detail = "Error interno." if get_settings().is_production() else str(exc)
    return await app_exception_handler(
        request, AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)
    )


def register_exception_handlers(app) -> None:
    """Exception genérica va al final: es el fallback."""
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(QuickBiteError, quickbite_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
