"""
===============================================================================
TARJETA CRC — infrastructure/db/instrumentation.py
===============================================================================

Clases:
    - TimedConnection: proxy de psycopg.Connection que cronometra execute().
    - InstrumentedConnectionPool: proxy de psycopg_pool.ConnectionPool cuyo
      connection() entrega TimedConnection.

Responsabilidades:
    - Publicar quickbite_db_query_duration_seconds{kind} por statement.
    - WARNING para queries sobre el umbral, con el verbo SQL como único dato
      de la query (nunca parámetros).
    - Traducir fallas al adquirir conexión a DatabaseConnectionError.
    - Healthcheck opcional (SELECT 1) al adquirir.

Colaboradores:
    - crosscutting.metrics.observe_db_query_duration
    - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Iterator

from ...crosscutting.logger import logger
from ...crosscutting.metrics import observe_db_query_duration
from .errors import DatabaseConnectionError


def statement_kind(sql: Any) -> str:
    """Primer token del statement en mayúsculas (SELECT, UPDATE...)."""
    words = str(sql).split(maxsplit=1)
    return words[0].upper() if words else "UNKNOWN"


class TimedConnection:
    def __init__(self, conn, *, slow_query_seconds: float) -> None:
        self._conn = conn
        self._threshold = slow_query_seconds

    def execute(self, query, *args, **kwargs):
        started = time.perf_counter()
        try:
            return self._conn.execute(query, *args, **kwargs)
        finally:
            self._observe(statement_kind(query), time.perf_counter() - started)

    def _observe(self, kind: str, seconds: float) -> None:
        observe_db_query_duration(kind, seconds)
        if seconds >= self._threshold:
            logger.warning(
                "Query lenta", extra={"kind": kind, "duration_ms": int(seconds * 1000)}
            )

    def __getattr__(self, name: str):
        return getattr(self._conn, name)


class InstrumentedConnectionPool:
    """`with pool.connection() as conn:` sigue funcionando igual para los repos."""

    def __init__(
        self,
        pool,
        *,
        slow_query_seconds: float = 0.25,
        healthcheck: bool = False,
    ) -> None:
        self._pool = pool
        self._threshold = slow_query_seconds
        self._healthcheck = healthcheck

    @contextmanager
    def connection(self, *args, **kwargs) -> Iterator[TimedConnection]:
        checkout = self._pool.connection(*args, **kwargs)
        try:
            conn = checkout.__enter__()
        except Exception as exc:
            raise DatabaseConnectionError("No se pudo adquirir conexión DB.") from exc

        try:
            if self._healthcheck:
                self._ping(conn)
            yield TimedConnection(conn, slow_query_seconds=self._threshold)
        except BaseException as exc:
            if not checkout.__exit__(type(exc), exc, exc.__traceback__):
                raise
        else:
            checkout.__exit__(None, None, None)

    @staticmethod
    def _ping(conn) -> None:
        try:
            conn.execute("SELECT 1")
        except Exception as exc:
            raise DatabaseConnectionError("Conexión DB no saludable.") from exc

    def __getattr__(self, name: str):
        return getattr(self._pool, name)
