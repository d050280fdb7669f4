# quickbite/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Errores internos de infraestructura
===============================================================================

Componente:
  QuickBiteError, DatabaseError

Responsabilidades:
  - Transportar un error_code estable y un error_id único por ocurrencia.
  - El error_id se loguea y se devuelve al cliente; el detalle técnico
    (SQL, constraints, driver) queda solo en logs.

Colaboradores:
  - api/exception_handlers.py (503 / 500)
  - infrastructure/repositories/postgres/* (levantan DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class QuickBiteError(Exception):
    error_code: str = "QUICKBITE_ERROR"

    def __init__(self, message: str, *, error_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.error_id = error_id or uuid4().hex

    def public_payload(self) -> dict[str, str]:
        return {"error_code": self.error_code, "error_id": self.error_id}


class DatabaseError(QuickBiteError):
    """Conexión, query, timeout o estado inconsistente en la base."""

    error_code = "DATABASE_ERROR"
