"""Chequeo previo de username/email únicos (el repo vuelve a validarlo al guardar)."""

from __future__ import annotations

from ....domain.errors import DuplicateIdentity
from ....domain.repositories import UserRepository


def ensure_unique_identity(
    users: UserRepository,
    *,
    username: str | None = None,
    email: str | None = None,
) -> None:
    """Raises DuplicateIdentity con el campo en conflicto."""
    if username is not None and users.exists_by_username(username):
        raise DuplicateIdentity("username", username)
    if email is not None and users.exists_by_email(email):
        raise DuplicateIdentity("email", email)
