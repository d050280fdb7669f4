"""
===============================================================================
TARJETA CRC — infrastructure/db/errors.py
===============================================================================

Componente:
    Errores tipados del pool de conexiones

Responsabilidades:
    - Distinguir "no inicializado", "ya inicializado" y falla de conexión
      sin recurrir a RuntimeError genéricos.
===============================================================================
"""


class DatabasePoolError(Exception):
    """Base de errores del pool."""


class PoolAlreadyInitializedError(DatabasePoolError):
    pass


class PoolNotInitializedError(DatabasePoolError):
    pass


class DatabaseConnectionError(DatabasePoolError):
    """No se pudo adquirir o validar una conexión."""
