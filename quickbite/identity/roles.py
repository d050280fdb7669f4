"""
===============================================================================
TARJETA CRC — identity/roles.py
===============================================================================

Módulo:
    Roles del sistema (dato de referencia)

Responsabilidades:
    - Enumeración cerrada USER / OWNER / ADMIN con id numérico estable.
    - Lookups por id, por nombre (case-insensitive) y por authority.
    - Forma canónica de authority: "ROLE_<NOMBRE>".

Colaboradores:
    - identity.token_codec: serializa/lee authorities.
    - identity.policy: reglas por rol.
    - domain.entities.User: set de roles del agregado.
    - infrastructure.repositories: tabla user_roles (role_id).
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

AUTHORITY_PREFIX: str = "ROLE_"


class Role(str, Enum):
    USER = "USER"
    OWNER = "OWNER"
    ADMIN = "ADMIN"

    @property
    def id(self) -> int:
        return _ROLE_IDS[self]

    @property
    def authority(self) -> str:
        return f"{AUTHORITY_PREFIX}{self.value}"

    @classmethod
    def from_id(cls, role_id: int) -> "Role":
        """Raises ValueError si el id no corresponde a ningún rol."""
        for role, known_id in _ROLE_IDS.items():
            if known_id == role_id:
                return role
        raise ValueError(f"Rol inexistente para id={role_id}")

    @classmethod
    def from_name(cls, name: str) -> "Role":
        """Raises ValueError si el nombre no corresponde a ningún rol."""
        normalized = (name or "").strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Rol inexistente: {name!r}") from None

    @classmethod
    def from_authority(cls, authority: object) -> Optional["Role"]:
        """
        Resuelve una authority canónica ("ROLE_ADMIN") a Role.

        Devuelve None para cualquier otra cosa (sin prefijo, desconocida,
        no-string). Nunca levanta.
        """
        if not isinstance(authority, str) or not authority.startswith(
            AUTHORITY_PREFIX
        ):
            return None
        try:
            return cls(authority[len(AUTHORITY_PREFIX) :])
        except ValueError:
            return None


_ROLE_IDS: dict[Role, int] = {
    Role.USER: 1,
    Role.OWNER: 2,
    Role.ADMIN: 3,
}


def to_authority(role: Role | str) -> Optional[str]:
    """
    Normaliza un rol (enum o nombre) a su authority canónica.

    - Role -> "ROLE_<NAME>"
    - "OWNER" -> "ROLE_OWNER"; "ROLE_OWNER" se respeta tal cual
    - None / blank -> None
    """
    if isinstance(role, Role):
        return role.authority
    if role is None:
        return None
    name = str(role).strip()
    if not name:
        return None
    if name.startswith(AUTHORITY_PREFIX):
        return name
    return f"{AUTHORITY_PREFIX}{name}"


def authorities_for(roles: Iterable[Role | str] | None) -> list[str]:
    """Authorities sin duplicados, en orden de aparición. None/vacío -> []."""
    out: list[str] = []
    for role in roles or ():
        authority = to_authority(role)
        if authority and authority not in out:
            out.append(authority)
    return out
