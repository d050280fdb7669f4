"""
===============================================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
===============================================================================

Clase:
    PostgresRepository (base de los repositorios SQL)

Responsabilidades:
    - Resolver el pool (inyectado en tests o el global del proceso).
    - Ejecutar SELECTs con logging + DatabaseError consistentes.
    - Mapear columnas de dirección (street, city, state, zip_code) a Address.

Colaboradores:
    - infrastructure.db.pool.get_pool
    - crosscutting.exceptions.DatabaseError
    - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Address


class PostgresRepository:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _count(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        row = self._fetchone(
            query=query, params=params, context_msg=context_msg, extra=extra
        )
        return int(row[0]) if row else 0

    @staticmethod
    def _row_to_address(street, city, state, zip_code) -> Optional[Address]:
        if street is None:
            return None
        return Address(street=street, city=city, state=state, zip_code=zip_code)

    @staticmethod
    def _save_address(conn, address: Optional[Address], address_id: Optional[int]):
        """
        Inserta o actualiza la fila de addresses según el agregado.
        Devuelve el address_id resultante (None si no hay dirección).
        Se invoca dentro de la transacción del agregado.
        """
        if address is None:
            return None
        if address_id is None:
            row = conn.execute(
                """
                INSERT INTO addresses (street, city, state, zip_code)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (address.street, address.city, address.state, address.zip_code),
            ).fetchone()
            return row[0]
        conn.execute(
            """
            UPDATE addresses
            SET street = %s, city = %s, state = %s, zip_code = %s
            WHERE id = %s
            """,
            (address.street, address.city, address.state, address.zip_code, address_id),
        )
        return address_id

    @staticmethod
    def _drop_orphan_address(conn, old_id: Optional[int], new_id: Optional[int]) -> None:
        if old_id is not None and old_id != new_id:
            conn.execute("DELETE FROM addresses WHERE id = %s", (old_id,))
