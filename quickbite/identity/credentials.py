"""
===============================================================================
TARJETA CRC — identity/credentials.py
===============================================================================

Módulo:
    CredentialVerifier (Argon2)

Responsabilidades:
    - Hashear passwords con Argon2id (salt aleatorio por hash, costo alto).
    - Comparar password vs digest sin levantar nunca hacia el caller:
      digest inválido / vacío / de otro esquema -> False.

Colaboradores:
    - argon2.PasswordHasher
    - identity.sessions (login / change password)
    - application.usecases.users (alta de usuarios)

Notas:
    - Sin estado mutable compartido: seguro para llamadas concurrentes.
    - No loguea passwords ni digests.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class CredentialVerifier:
    def __init__(self, hasher: PasswordHasher | None = None) -> None:
        self._hasher = hasher or PasswordHasher()

    def hash(self, plaintext: str) -> str:
        """Digest autocontenido (incluye parámetros y salt)."""
        return self._hasher.hash(plaintext)

    def matches(self, plaintext: str, digest: str | None) -> bool:
        if not isinstance(plaintext, str) or not isinstance(digest, str) or not digest:
            return False
        try:
            return self._hasher.verify(digest, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
