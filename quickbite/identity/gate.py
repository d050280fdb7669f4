"""
===============================================================================
TARJETA CRC — identity/gate.py
===============================================================================

Módulo:
    AuthenticationGate (middleware ASGI)

Responsabilidades:
    - Leer el header Authorization (uno solo) de cada request HTTP.
    - Sin header o vacío -> request anónimo (identity=None) y continuar.
    - Con header -> TokenCodec.parse:
        * éxito: instalar Identity en scope["state"]["identity"]
          (visible como request.state.identity) y continuar.
        * falla: cortar el request con 401 problem+json y code por tipo de
          falla. No se llega al routing ni a ningún caso de uso.

Colaboradores:
    - identity.token_codec.TokenCodec
    - crosscutting.error_responses.send_problem
    - crosscutting.metrics.record_auth_rejection

Notas:
    - Single-pass: sin lookups a DB, sin reintentos. Los roles del token
      valen hasta su expiración aunque cambien en storage.
    - La identidad viaja explícita en el scope del request; no hay estado
      global mutable.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from ..crosscutting.error_responses import ErrorCode, send_problem
from ..crosscutting.metrics import record_auth_rejection
from .errors import (
    TokenBadSignature,
    TokenError,
    TokenExpired,
    TokenMalformed,
    TokenMissingPrefix,
    TokenUnsupported,
)
from .principal import Identity
from .token_codec import TokenCodec

AUTHORIZATION_HEADER: bytes = b"authorization"
IDENTITY_STATE_KEY: str = "identity"

_ERROR_CODES: dict[type[TokenError], ErrorCode] = {
    TokenExpired: ErrorCode.TOKEN_EXPIRED,
    TokenMalformed: ErrorCode.TOKEN_MALFORMED,
    TokenUnsupported: ErrorCode.TOKEN_UNSUPPORTED,
    TokenBadSignature: ErrorCode.TOKEN_BAD_SIGNATURE,
    TokenMissingPrefix: ErrorCode.TOKEN_INVALID_PREFIX,
}


def error_code_for(error: TokenError) -> ErrorCode:
    return _ERROR_CODES.get(type(error), ErrorCode.UNAUTHORIZED)


def identity_from_scope(scope) -> Identity | None:
    return (scope.get("state") or {}).get(IDENTITY_STATE_KEY)


class AuthenticationGate:
    """
    Middleware ASGI puro (no BaseHTTPMiddleware) para poder responder
    antes de que la app procese el request.
    """

    def __init__(
        self,
        app,
        codec: TokenCodec | None = None,
        codec_factory: Callable[[], TokenCodec] | None = None,
    ) -> None:
        self.app = app
        if codec is None:
            if codec_factory is None:
                from ..container import get_token_codec

                codec_factory = get_token_codec
            codec = codec_factory()
        self._codec = codec

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        state[IDENTITY_STATE_KEY] = None

        header_value = self._read_authorization(scope)
        if not header_value.strip():
            await self.app(scope, receive, send)
            return

        try:
            identity = self._codec.parse(header_value)
        except TokenError as exc:
            record_auth_rejection(exc.reason)
            await send_problem(
                send,
                status=401,
                code=error_code_for(exc),
                detail=exc.message,
                instance=scope.get("path", ""),
                request_id=state.get("request_id"),
            )
            return

        state[IDENTITY_STATE_KEY] = identity
        await self.app(scope, receive, send)

    @staticmethod
    def _read_authorization(scope) -> str:
        for key, value in scope.get("headers", []):
            if key.lower() == AUTHORIZATION_HEADER:
                return value.decode("latin-1")
        return ""
