"""
===============================================================================
TARJETA CRC — infrastructure/db/pool.py
===============================================================================

Componente:
    Pool PostgreSQL del proceso (psycopg_pool), envuelto en
    InstrumentedConnectionPool.

Responsabilidades:
    - init_pool / get_pool / close_pool / reset_pool.
    - statement_timeout en cada conexión nueva.

Reglas:
    - Un solo pool por proceso: init doble -> PoolAlreadyInitializedError;
      get sin init -> PoolNotInitializedError.
    - close_pool es idempotente.
===============================================================================
"""

from __future__ import annotations

import threading

from psycopg_pool import ConnectionPool

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool


class _PoolHolder:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.pool: InstrumentedConnectionPool | None = None


_holder = _PoolHolder()


def _on_connect(conn) -> None:
    """Hook `configure` de psycopg_pool: corre una vez por conexión física."""
    timeout_ms = get_settings().db_statement_timeout_ms
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {int(timeout_ms)}")
        conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> InstrumentedConnectionPool:
    settings = get_settings()
    with _holder.lock:
        if _holder.pool is not None:
            raise PoolAlreadyInitializedError("Pool DB ya inicializado en este proceso.")

        raw = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_on_connect,
            open=True,
        )
        _holder.pool = InstrumentedConnectionPool(
            raw, slow_query_seconds=settings.db_slow_query_ms / 1000
        )

    logger.info("Pool DB abierto", extra={"min_size": min_size, "max_size": max_size})
    return _holder.pool


def get_pool() -> InstrumentedConnectionPool:
    pool = _holder.pool
    if pool is None:
        raise PoolNotInitializedError("Pool DB no inicializado (falta init_pool).")
    return pool


def _detach() -> InstrumentedConnectionPool | None:
    with _holder.lock:
        pool, _holder.pool = _holder.pool, None
    return pool


def close_pool() -> None:
    pool = _detach()
    if pool is not None:
        logger.info("Pool DB cerrado")
        pool.close()


def reset_pool() -> None:
    """Para tests: igual que close_pool pero sin log."""
    pool = _detach()
    if pool is not None:
        pool.close()
