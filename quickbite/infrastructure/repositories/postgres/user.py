"""
===============================================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
===============================================================================
Class: PostgresUserRepository

Responsibilities:
  - Persistir el agregado User (users + addresses + user_roles) como unidad.
  - Sincronizar roles (borrar + insertar) en la misma transacción del alta
    o la actualización: nunca queda un usuario sin sus roles.
  - Borrado guardado: bloquea la fila del usuario (FOR UPDATE), cuenta
    restaurantes que lo referencian y solo borra si no hay ninguno.
  - Traducir UniqueViolation de username/email a DuplicateIdentity.

Collaborators:
  - psycopg (errores tipados), psycopg_pool.ConnectionPool
  - domain.entities.User / Address, identity.roles.Role
  - domain.errors.DuplicateIdentity / UserHasDependents
  - crosscutting.exceptions.DatabaseError

Notes:
  - Retorna None cuando no existe el recurso.
  - Role ids persistidos desconocidos -> DatabaseError (drift de datos).
  - Orden estable en listados: created_at DESC, id DESC.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from psycopg import errors as pg_errors

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....crosscutting.pagination import PageRequest
from ....domain.entities import User
from ....domain.errors import DuplicateIdentity, UserHasDependents
from ....identity.roles import Role
from .base import PostgresRepository

_USER_SELECT = """
    SELECT u.id, u.name, u.username, u.password, u.email, u.enabled,
           u.created_at, u.updated_at,
           a.street, a.city, a.state, a.zip_code,
           ARRAY(
               SELECT ur.role_id FROM user_roles ur
               WHERE ur.user_id = u.id ORDER BY ur.role_id
           ) AS role_ids
    FROM users u
    LEFT JOIN addresses a ON a.id = u.address_id
"""

_USER_ORDER_BY = "ORDER BY u.created_at DESC, u.id DESC"

_HAS_ROLE = """
    EXISTS (
        SELECT 1 FROM user_roles ur
        WHERE ur.user_id = u.id AND ur.role_id = %s
    )
"""


def _duplicate_field(exc: pg_errors.UniqueViolation) -> str:
    constraint = (getattr(exc.diag, "constraint_name", None) or "").lower()
    return "email" if "email" in constraint else "username"


class PostgresUserRepository(PostgresRepository):
    """R: Implementación PostgreSQL de UserRepository."""

    # =========================================================
    # Mapping
    # =========================================================
    def _row_to_user(self, row: tuple) -> User:
        (
            user_id,
            name,
            username,
            password_hash,
            email,
            enabled,
            created_at,
            updated_at,
            street,
            city,
            state,
            zip_code,
            role_ids,
        ) = row

        try:
            roles = {Role.from_id(role_id) for role_id in role_ids or ()}
        except ValueError as exc:
            raise DatabaseError(f"Rol inválido en base de datos: {role_ids}") from exc

        return User.reconstruct(
            id=user_id,
            name=name,
            email=email,
            username=username,
            password_hash=password_hash,
            address=self._row_to_address(street, city, state, zip_code),
            roles=roles,
            enabled=enabled,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _select_one(self, where: str, params: tuple, context_msg: str, extra: dict):
        row = self._fetchone(
            query=f"{_USER_SELECT} WHERE {where}",
            params=params,
            context_msg=context_msg,
            extra=extra,
        )
        return self._row_to_user(row) if row else None

    # =========================================================
    # Lecturas
    # =========================================================
    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._select_one(
            "u.id = %s",
            (user_id,),
            "PostgresUserRepository: find_by_id failed",
            {"user_id": user_id},
        )

    def find_by_username(self, username: str) -> Optional[User]:
        return self._select_one(
            "u.username = %s",
            (username,),
            "PostgresUserRepository: find_by_username failed",
            {"username": username},
        )

    def find_by_email(self, email: str) -> Optional[User]:
        return self._select_one(
            "u.email = %s",
            (email,),
            "PostgresUserRepository: find_by_email failed",
            {},
        )

    def find_all(self, page: PageRequest) -> List[User]:
        rows = self._fetchall(
            query=f"{_USER_SELECT} {_USER_ORDER_BY} LIMIT %s OFFSET %s",
            params=(page.size, page.offset),
            context_msg="PostgresUserRepository: find_all failed",
            extra={"page": page.page, "size": page.size},
        )
        return [self._row_to_user(r) for r in rows]

    def find_by_role(self, role: Role, page: PageRequest) -> List[User]:
        rows = self._fetchall(
            query=f"{_USER_SELECT} WHERE {_HAS_ROLE} {_USER_ORDER_BY} LIMIT %s OFFSET %s",
            params=(role.id, page.size, page.offset),
            context_msg="PostgresUserRepository: find_by_role failed",
            extra={"role": role.value},
        )
        return [self._row_to_user(r) for r in rows]

    def count(self) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM users",
            params=(),
            context_msg="PostgresUserRepository: count failed",
            extra={},
        )

    def count_by_role(self, role: Role) -> int:
        return self._count(
            query="SELECT COUNT(*) FROM user_roles WHERE role_id = %s",
            params=(role.id,),
            context_msg="PostgresUserRepository: count_by_role failed",
            extra={"role": role.value},
        )

    def exists_by_username(self, username: str) -> bool:
        row = self._fetchone(
            query="SELECT 1 FROM users WHERE username = %s",
            params=(username,),
            context_msg="PostgresUserRepository: exists_by_username failed",
            extra={"username": username},
        )
        return row is not None

    def exists_by_email(self, email: str) -> bool:
        row = self._fetchone(
            query="SELECT 1 FROM users WHERE email = %s",
            params=(email,),
            context_msg="PostgresUserRepository: exists_by_email failed",
            extra={},
        )
        return row is not None

    # =========================================================
    # Escrituras (transaccionales)
    # =========================================================
    def save(self, user: User) -> User:
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    if user.is_new():
                        stamp = self._insert(conn, user)
                    else:
                        stamp = (user.id, *self._update(conn, user))
                    self._sync_roles(conn, stamp[0], user.roles)
        except pg_errors.UniqueViolation as exc:
            field = _duplicate_field(exc)
            logger.info(
                "Alta/actualización rechazada por identidad duplicada",
                extra={"field": field},
            )
            raise DuplicateIdentity(field) from exc
        except DatabaseError:
            raise
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: save failed",
                extra={"user_id": user.id, "error": str(exc)},
            )
            raise DatabaseError(f"No se pudo guardar el usuario: {exc}") from exc
        # R: el agregado recibe id y timestamps solo tras el commit.
        user.id, user.created_at, user.updated_at = stamp
        return user

    def _insert(self, conn, user: User) -> tuple:
        address_id = self._save_address(conn, user.address, None)
        row = conn.execute(
            """
            INSERT INTO users (name, username, password, email, address_id, enabled)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at
            """,
            (
                user.name,
                user.username,
                user.password_hash,
                user.email,
                address_id,
                user.enabled,
            ),
        ).fetchone()
        return tuple(row)

    def _update(self, conn, user: User) -> tuple:
        current = conn.execute(
            "SELECT address_id FROM users WHERE id = %s FOR UPDATE", (user.id,)
        ).fetchone()
        if current is None:
            raise DatabaseError(f"Usuario {user.id} inexistente al actualizar.")

        old_address_id = current[0]
        address_id = self._save_address(conn, user.address, old_address_id)
        row = conn.execute(
            """
            UPDATE users
            SET name = %s, username = %s, password = %s, email = %s,
                address_id = %s, enabled = %s, updated_at = now()
            WHERE id = %s
            RETURNING created_at, updated_at
            """,
            (
                user.name,
                user.username,
                user.password_hash,
                user.email,
                address_id,
                user.enabled,
                user.id,
            ),
        ).fetchone()
        self._drop_orphan_address(conn, old_address_id, address_id)
        return tuple(row)

    @staticmethod
    def _sync_roles(conn, user_id: int, roles) -> None:
        conn.execute("DELETE FROM user_roles WHERE user_id = %s", (user_id,))
        conn.execute(
            "INSERT INTO user_roles (user_id, role_id) SELECT %s, unnest(%s::bigint[])",
            (user_id, sorted(role.id for role in roles)),
        )

    def delete(self, user_id: int) -> bool:
        try:
            with self._get_pool().connection() as conn:
                with conn.transaction():
                    current = conn.execute(
                        "SELECT address_id FROM users WHERE id = %s FOR UPDATE",
                        (user_id,),
                    ).fetchone()
                    if current is None:
                        return False

                    owned = conn.execute(
                        "SELECT COUNT(*) FROM restaurants WHERE owner_id = %s",
                        (user_id,),
                    ).fetchone()[0]
                    if owned > 0:
                        raise UserHasDependents(user_id, int(owned))

                    conn.execute("DELETE FROM user_roles WHERE user_id = %s", (user_id,))
                    conn.execute("DELETE FROM users WHERE id = %s", (user_id,))
                    if current[0] is not None:
                        conn.execute(
                            "DELETE FROM addresses WHERE id = %s", (current[0],)
                        )
        except UserHasDependents as exc:
            logger.info(
                "Borrado de usuario bloqueado por restaurantes",
                extra={"user_id": user_id, "count": exc.count},
            )
            raise
        except Exception as exc:
            logger.exception(
                "PostgresUserRepository: delete failed",
                extra={"user_id": user_id, "error": str(exc)},
            )
            raise DatabaseError(f"No se pudo borrar el usuario: {exc}") from exc
        return True
