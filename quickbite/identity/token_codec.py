"""
===============================================================================
TARJETA CRC — identity/token_codec.py
===============================================================================

Módulo:
    TokenCodec (JWT HS256 con prefijo de esquema)

Responsabilidades:
    - Emitir tokens firmados: "<prefix> <jwt>" con claims sub, iat, exp y
      authorities (lista de "ROLE_<NOMBRE>").
    - Parsear y validar: prefijo exacto, firma, expiración, formato.
    - Clasificar cada falla en un tipo distinguible (TokenExpired,
      TokenMalformed, TokenUnsupported, TokenBadSignature, TokenMissingPrefix).
    - Leer authorities descartando en silencio valores desconocidos.

Colaboradores:
    - PyJWT (encode/decode)
    - crosscutting.config.TokenSettings (prefix, secret, expiration_ms)
    - identity.principal.Identity
    - identity.roles (authorities canónicas)

Decisiones de diseño:
    - Funciones puras de (input, secreto, reloj): sin estado mutable.
    - Authorities desconocidas NO abortan el parse: desaparecen de la
      Identity resultante (se loguea warning sin el token).
    - Claim authorities ausente o no-lista -> sin authorities.
    - Nunca se loguea el token ni el secreto.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, NoReturn

import jwt

from ..crosscutting.config import TokenSettings
from ..crosscutting.logger import logger
from .errors import (
    TokenBadSignature,
    TokenError,
    TokenExpired,
    TokenIssueError,
    TokenMalformed,
    TokenMissingPrefix,
    TokenUnsupported,
)
from .principal import Identity
from .roles import Role, authorities_for

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_AUTHORITIES: str = "authorities"

_SUPPORTED_TYP: str = "JWT"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    def __init__(
        self,
        settings: TokenSettings,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        prefix = (settings.prefix or "").strip()
        if not prefix:
            raise TokenIssueError("El prefijo de token no puede estar vacío.")
        if not settings.secret:
            raise TokenIssueError("El secreto de firma no puede estar vacío.")
        if settings.expiration_ms <= 0:
            raise TokenIssueError("La expiración del token debe ser positiva.")

        self._prefix = prefix
        self._key = settings.secret.encode("utf-8")
        self._lifetime = timedelta(milliseconds=settings.expiration_ms)
        self._clock = clock or _utcnow

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    # -----------------------------------------------------------------------
    # Emisión
    # -----------------------------------------------------------------------

    def issue(
        self,
        subject: str,
        roles: Iterable[Role | str] | None,
        issued_at: datetime,
        expires_at: datetime,
    ) -> str:
        """Token firmado con el prefijo configurado y un único espacio."""
        if not isinstance(subject, str) or not subject.strip():
            raise TokenIssueError("El subject del token no puede estar vacío.")
        if expires_at <= issued_at:
            raise TokenIssueError("expires_at debe ser posterior a issued_at.")

        payload: dict[str, object] = {
            CLAIM_SUB: subject,
            CLAIM_IAT: int(issued_at.timestamp()),
            CLAIM_EXP: int(expires_at.timestamp()),
            CLAIM_AUTHORITIES: authorities_for(roles),
        }
        compact = jwt.encode(payload, self._key, algorithm=JWT_ALGORITHM)
        return f"{self._prefix} {compact}"

    def issue_for(
        self, subject: str, roles: Iterable[Role | str] | None
    ) -> tuple[str, datetime]:
        """Emite con el reloj y la vida útil configurados. Retorna (token, exp)."""
        now = self._clock()
        expires_at = now + self._lifetime
        return self.issue(subject, roles, now, expires_at), expires_at

    # -----------------------------------------------------------------------
    # Parse / validación
    # -----------------------------------------------------------------------

    def parse(self, token: str) -> Identity:
        expected = f"{self._prefix} "
        if not isinstance(token, str) or not token.startswith(expected):
            self._reject(TokenMissingPrefix())

        compact = token[len(expected) :]

        try:
            header = jwt.get_unverified_header(compact)
        except jwt.DecodeError:
            self._reject(TokenMalformed())

        typ = header.get("typ")
        if typ is not None and str(typ).upper() != _SUPPORTED_TYP:
            self._reject(TokenUnsupported())

        try:
            payload = jwt.decode(
                compact,
                self._key,
                algorithms=[JWT_ALGORITHM],
                options={"require": [CLAIM_SUB, CLAIM_IAT, CLAIM_EXP]},
            )
        except jwt.ExpiredSignatureError:
            self._reject(TokenExpired())
        except jwt.InvalidSignatureError:
            self._reject(TokenBadSignature())
        except jwt.InvalidAlgorithmError:
            self._reject(TokenUnsupported())
        except jwt.InvalidTokenError:
            self._reject(TokenMalformed())

        subject = payload.get(CLAIM_SUB)
        if not isinstance(subject, str) or not subject.strip():
            self._reject(TokenMalformed())

        return Identity(
            subject=subject,
            authorities=self._read_authorities(payload.get(CLAIM_AUTHORITIES)),
            issued_at=self._read_instant(payload[CLAIM_IAT]),
            expires_at=self._read_instant(payload[CLAIM_EXP]),
        )

    def _read_instant(self, raw: object) -> datetime:
        # R: PyJWT acepta iat/exp numéricos en string ("123").
        try:
            return datetime.fromtimestamp(int(raw), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            self._reject(TokenMalformed())

    @staticmethod
    def _read_authorities(raw: object) -> frozenset[str]:
        if not isinstance(raw, list):
            return frozenset()

        kept: set[str] = set()
        for value in raw:
            role = Role.from_authority(value)
            if role is None:
                logger.warning(
                    "Authority desconocida descartada",
                    extra={"authority": str(value)[:64]},
                )
                continue
            kept.add(role.authority)
        return frozenset(kept)

    @staticmethod
    def _reject(error: TokenError) -> NoReturn:
        logger.warning("Token rechazado", extra={"reason": error.reason})
        raise error
