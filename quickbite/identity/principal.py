"""
===============================================================================
TARJETA CRC — identity/principal.py
===============================================================================

Módulo:
    Identity (sujeto autenticado por request)

Responsabilidades:
    - Representar subject + authorities reconstruidos de un token.
    - Exponer roles derivados y checks any-of.

Notas:
    - Es una proyección del User al momento de emitir el token: puede quedar
      desactualizada respecto de la DB hasta que el token expire.
    - Inmutable (frozen) para viajar explícita en request.state.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from .roles import Role


@dataclass(frozen=True, slots=True)
class Identity:
    subject: str
    authorities: frozenset[str] = field(default_factory=frozenset)
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def from_roles(
        cls,
        subject: str,
        roles: Iterable[Role],
        *,
        issued_at: datetime | None = None,
        expires_at: datetime | None = None,
    ) -> "Identity":
        return cls(
            subject=subject,
            authorities=frozenset(role.authority for role in roles),
            issued_at=issued_at,
            expires_at=expires_at,
        )

    @property
    def roles(self) -> frozenset[Role]:
        resolved = (Role.from_authority(a) for a in self.authorities)
        return frozenset(role for role in resolved if role is not None)

    def has_any_role(self, allowed: Iterable[Role]) -> bool:
        return any(role.authority in self.authorities for role in allowed)
