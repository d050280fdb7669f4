"""
===============================================================================
TARJETA CRC — domain/errors.py
===============================================================================

Módulo:
    Fallas tipadas del dominio

Responsabilidades:
    - ValidationFailed: invariante de entidad violada (campo + motivo).
    - DuplicateIdentity: username/email ya usados.
    - UserHasDependents: borrado bloqueado; transporta la cantidad exacta de
      restaurantes que referencian al usuario.
    - OwnerNotFound: el owner desapareció antes de persistir el restaurante.

Colaboradores:
    - domain.entities (ValidationFailed)
    - infrastructure.repositories (DuplicateIdentity / UserHasDependents /
      OwnerNotFound)
    - application.usecases (traducen a XResult con error code)
===============================================================================
"""

from __future__ import annotations


class DomainError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationFailed(DomainError):
    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class DuplicateIdentity(DomainError):
    def __init__(self, field: str, value: str | None = None):
        self.field = field
        self.value = value
        super().__init__(f"Ya existe un usuario con ese {field}.")


class UserHasDependents(DomainError):
    def __init__(self, user_id: int, count: int):
        self.user_id = user_id
        self.count = count
        super().__init__(
            f"No se puede eliminar el usuario: es dueño de {count} restaurante(s)."
        )


class OwnerNotFound(DomainError):
    def __init__(self, owner_id: int):
        self.owner_id = owner_id
        super().__init__(f"Usuario {owner_id} no encontrado.")
