"""
===============================================================================
TARJETA CRC — identity/errors.py
===============================================================================

Módulo:
    Fallas tipadas de autenticación / autorización

Responsabilidades:
    - Taxonomía cerrada para que el gate y la API elijan el status HTTP de
      forma determinística (sin inspeccionar mensajes).
    - Cada falla de token expone `reason` (estable, apto para métricas).

Colaboradores:
    - identity.token_codec (levanta TokenError)
    - identity.gate (TokenError -> 401 con code por tipo)
    - identity.sessions (InvalidCredentials / AccountDisabled / Forbidden)

Notas:
    - Los mensajes nunca incluyen el token, el password ni el secreto.
===============================================================================
"""

from __future__ import annotations


class AuthError(Exception):
    """Base de fallas de identidad."""

    reason: str = "auth_error"
    message: str = "Autenticación inválida."

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidCredentials(AuthError):
    """Usuario inexistente o password incorrecto (mismo resultado externo)."""

    reason = "invalid_credentials"
    message = "Credenciales inválidas."


class AccountDisabled(AuthError):
    reason = "account_disabled"
    message = "La cuenta está deshabilitada."


class Unauthenticated(AuthError):
    reason = "unauthenticated"
    message = "Autenticación requerida."


class Forbidden(AuthError):
    reason = "forbidden"
    message = "Rol insuficiente."


# ---------------------------------------------------------------------------
# Fallas de token (TokenCodec.parse / issue)
# ---------------------------------------------------------------------------


class TokenError(AuthError):
    reason = "token_invalid"
    message = "Token inválido."


class TokenExpired(TokenError):
    reason = "token_expired"
    message = "Token expirado."


class TokenMalformed(TokenError):
    reason = "token_malformed"
    message = "Token mal formado."


class TokenUnsupported(TokenError):
    reason = "token_unsupported"
    message = "Formato de token no soportado."


class TokenBadSignature(TokenError):
    reason = "token_bad_signature"
    message = "Firma de token inválida."


class TokenMissingPrefix(TokenError):
    reason = "token_invalid_prefix"
    message = "Falta el prefijo del token o es inválido."


class TokenIssueError(TokenError, ValueError):
    """Parámetros inválidos al emitir (subject vacío, secreto vacío, etc.)."""

    reason = "token_issue_error"
    message = "No se pudo emitir el token."
