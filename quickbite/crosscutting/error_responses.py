# quickbite/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Errores HTTP como Problem Details (RFC 7807)
===============================================================================

Todo error que sale de la API tiene la misma forma:

    {"type", "title", "status", "detail", "code", "instance",
     "request_id"?, "errors"?}

`code` es estable (los clientes distinguen TOKEN_EXPIRED de
TOKEN_MALFORMED sin parsear texto) y `errors` lleva detalles del caso,
ej. [{"field": "username"}] o [{"restaurant_count": 2}].

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ErrorCode + ProblemDetail + AppHTTPException + send_problem

Responsabilidades:
  - Catálogo de códigos
  - Factories por status (401/403/404/409/422/500)
  - Handlers FastAPI y emisor ASGI para los middlewares que responden
    antes del routing (identity.gate, identity.policy)

Colaboradores:
  - crosscutting/middleware.py (request_id en request.state)
  - api/exception_handlers.py, api/error_mapping.py
===============================================================================
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

ErrorItems = list[dict[str, Any]]


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_MALFORMED = "TOKEN_MALFORMED"
    TOKEN_UNSUPPORTED = "TOKEN_UNSUPPORTED"
    TOKEN_BAD_SIGNATURE = "TOKEN_BAD_SIGNATURE"
    TOKEN_INVALID_PREFIX = "TOKEN_INVALID_PREFIX"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_IDENTITY = "DUPLICATE_IDENTITY"
    USER_HAS_DEPENDENTS = "USER_HAS_DEPENDENTS"

    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ProblemDetail(BaseModel):
    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    request_id: str | None = None
    errors: ErrorItems | None = None

    @classmethod
    def build(
        cls,
        *,
        status: int,
        code: ErrorCode,
        detail: str,
        instance: str | None = None,
        request_id: str | None = None,
        errors: ErrorItems | None = None,
    ) -> "ProblemDetail":
        return cls(
            type=f"about:blank/{code.value.lower()}",
            title=code.value.replace("_", " ").capitalize(),
            status=status,
            detail=detail,
            code=code,
            instance=instance,
            request_id=request_id,
            errors=errors or None,
        )

    def body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def _documented(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ProblemDetail,
        "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
    }


# R: responses= de los APIRouter (documentación OpenAPI).
OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: _documented("Sin autenticación o token inválido"),
    403: _documented("Rol insuficiente"),
    404: _documented("Recurso inexistente"),
    409: _documented("Conflicto de identidad o dependencias"),
    422: _documented("Datos inválidos"),
    "default": _documented("Error"),
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable y detalles opcionales (errors[])."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: ErrorItems | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def unauthorized(
    detail: str = "Autenticación requerida.", code: ErrorCode = ErrorCode.UNAUTHORIZED
) -> AppHTTPException:
    return AppHTTPException(401, code, detail)


def forbidden(detail: str = "Acceso denegado.") -> AppHTTPException:
    return AppHTTPException(403, ErrorCode.FORBIDDEN, detail)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def conflict(detail: str, code: ErrorCode, errors: ErrorItems | None = None) -> AppHTTPException:
    return AppHTTPException(409, code, detail, errors)


def validation_error(detail: str, errors: ErrorItems | None = None) -> AppHTTPException:
    return AppHTTPException(422, ErrorCode.VALIDATION_ERROR, detail, errors)


def internal_error(detail: str = "Error interno.") -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# ASGI crudo
# ---------------------------------------------------------------------------
async def send_problem(
    send,
    *,
    status: int,
    code: ErrorCode,
    detail: str,
    instance: str,
    request_id: str | None = None,
) -> None:
    """Responde problem+json directamente por `send` (sin pasar por FastAPI)."""
    payload = ProblemDetail.build(
        status=status, code=code, detail=detail, instance=instance, request_id=request_id
    ).body()
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

    headers = [
        (b"content-type", PROBLEM_JSON_MEDIA_TYPE.encode("ascii")),
        (b"content-length", str(len(body)).encode("ascii")),
    ]
    if status == 401:
        headers.append((b"www-authenticate", b"Bearer"))

    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body})


# ---------------------------------------------------------------------------
# Handlers FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(request: Request, exc: AppHTTPException) -> JSONResponse:
    problem = ProblemDetail.build(
        status=exc.status_code,
        code=exc.code,
        detail=str(exc.detail),
        instance=request.url.path,
        request_id=getattr(request.state, "request_id", None),
        errors=exc.errors,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=problem.body(),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query inválidos (pydantic) -> 422 con un item por campo."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())[1:]) or None,
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return await app_exception_handler(
        request, validation_error("Datos de entrada inválidos.", errors)
    )
