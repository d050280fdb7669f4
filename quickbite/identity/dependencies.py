"""
===============================================================================
TARJETA CRC — identity/dependencies.py
===============================================================================

Módulo:
    Dependencias FastAPI de identidad

Responsabilidades:
    - get_identity: leer la Identity que instaló el AuthenticationGate
      (request.state.identity), o None si el request es anónimo.
    - require_identity: exigir autenticación (401).
    - require_roles(*roles): exigir rol any-of (401 / 403) a nivel ruta.

Colaboradores:
    - identity.policy.require_role
    - crosscutting.error_responses (unauthorized / forbidden)
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Request

from ..crosscutting.error_responses import forbidden, unauthorized
from .errors import Forbidden, Unauthenticated
from .gate import IDENTITY_STATE_KEY
from .policy import require_role
from .principal import Identity
from .roles import Role


def get_identity(request: Request) -> Identity | None:
    return getattr(request.state, IDENTITY_STATE_KEY, None)


def require_identity(request: Request) -> Identity:
    identity = get_identity(request)
    if identity is None:
        raise unauthorized(Unauthenticated.message)
    return identity


def require_roles(*roles: Role) -> Callable[[Request], Identity]:
    """Dependency FastAPI: la Identity debe tener al menos uno de los roles."""
    allowed = tuple(roles)

    def dependency(request: Request) -> Identity:
        try:
            return require_role(get_identity(request), allowed)
        except Unauthenticated as exc:
            raise unauthorized(exc.message) from exc
        except Forbidden as exc:
            raise forbidden(exc.message) from exc

    return dependency


def require_admin() -> Callable[[Request], Identity]:
    return require_roles(Role.ADMIN)
