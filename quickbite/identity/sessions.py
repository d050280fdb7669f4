"""
===============================================================================
TARJETA CRC — identity/sessions.py
===============================================================================

Módulo:
    SessionManager (fachada de identidad para los casos de uso)

Responsabilidades:
    - verify_login(username, password) -> Identity | InvalidCredentials /
      AccountDisabled.
    - issue_session(username, roles) -> (token, expires_at).
    - Re-exportar require_role(identity, allowed) para checks puntuales.

Colaboradores:
    - domain.repositories.UserRepository (find_by_username)
    - identity.credentials.CredentialVerifier
    - identity.token_codec.TokenCodec

Reglas:
    - Usuario inexistente y password incorrecto producen la MISMA falla
      (InvalidCredentials). Para usuario inexistente igual se ejecuta una
      verificación contra un digest descartable, así el tiempo de respuesta
      no delata si el username existe.
    - AccountDisabled solo se informa cuando el password ya coincidió.
===============================================================================
"""

from __future__ import annotations

import secrets
import threading
from datetime import datetime
from typing import Iterable

from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.repositories import UserRepository
from .credentials import CredentialVerifier
from .errors import AccountDisabled, InvalidCredentials
from .policy import require_role
from .principal import Identity
from .roles import Role
from .token_codec import TokenCodec

__all__ = ["SessionManager", "require_role"]


class SessionManager:
    def __init__(
        self,
        users: UserRepository,
        verifier: CredentialVerifier,
        codec: TokenCodec,
    ) -> None:
        self._users = users
        self._verifier = verifier
        self._codec = codec
        self._dummy_digest: str | None = None
        self._dummy_lock = threading.Lock()

    def _dummy(self) -> str:
        with self._dummy_lock:
            if self._dummy_digest is None:
                self._dummy_digest = self._verifier.hash(secrets.token_urlsafe(16))
            return self._dummy_digest

    def authenticate(self, username: str, password: str) -> User:
        """
        Resuelve y verifica el usuario.

        Raises:
            InvalidCredentials: username desconocido o password incorrecto.
            AccountDisabled: credenciales correctas pero cuenta deshabilitada.
        """
        user = self._users.find_by_username(username) if username else None
        if user is None:
            self._verifier.matches(password or "", self._dummy())
            logger.warning("Login rechazado", extra={"reason": InvalidCredentials.reason})
            raise InvalidCredentials()

        if not self._verifier.matches(password, user.password_hash):
            logger.warning("Login rechazado", extra={"reason": InvalidCredentials.reason})
            raise InvalidCredentials()

        if not user.enabled:
            logger.warning("Login rechazado", extra={"reason": AccountDisabled.reason})
            raise AccountDisabled()

        return user

    def verify_login(self, username: str, password: str) -> Identity:
        user = self.authenticate(username, password)
        return Identity.from_roles(user.username, user.roles)

    def issue_session(
        self, username: str, roles: Iterable[Role | str]
    ) -> tuple[str, datetime]:
        return self._codec.issue_for(username, roles)
