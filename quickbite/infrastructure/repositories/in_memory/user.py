"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Implementar UserRepository sobre InMemoryStore.
  - Replicar las reglas del repo Postgres que afectan a los casos de uso:
      - username/email únicos (DuplicateIdentity)
      - borrado bloqueado si el usuario es dueño de restaurantes
  - Devolver copias: el caller nunca comparte estado con la "tabla".
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from ....crosscutting.logger import logger
from ....crosscutting.pagination import PageRequest
from ....domain.entities import User
from ....domain.errors import DuplicateIdentity, UserHasDependents
from ....identity.roles import Role
from .store import InMemoryStore, newest_first, paginate


def _copy(user: User) -> User:
    return replace(user)


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    def _find_first(self, predicate) -> Optional[User]:
        with self._store.lock:
            for user in self._store.users.values():
                if predicate(user):
                    return _copy(user)
        return None

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._store.lock:
            user = self._store.users.get(user_id)
            return _copy(user) if user else None

    def find_by_username(self, username: str) -> Optional[User]:
        return self._find_first(lambda u: u.username == username)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find_first(lambda u: u.email == email)

    def find_all(self, page: PageRequest) -> List[User]:
        with self._store.lock:
            users = newest_first(self._store.users.values())
            return [_copy(u) for u in paginate(users, page)]

    def find_by_role(self, role: Role, page: PageRequest) -> List[User]:
        with self._store.lock:
            users = newest_first(u for u in self._store.users.values() if role in u.roles)
            return [_copy(u) for u in paginate(users, page)]

    def count(self) -> int:
        with self._store.lock:
            return len(self._store.users)

    def count_by_role(self, role: Role) -> int:
        with self._store.lock:
            return sum(1 for u in self._store.users.values() if role in u.roles)

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def save(self, user: User) -> User:
        with self._store.lock:
            for other in self._store.users.values():
                if other.id == user.id:
                    continue
                if other.username == user.username:
                    raise DuplicateIdentity("username")
                if other.email == user.email:
                    raise DuplicateIdentity("email")

            now = self._store.now()
            if user.is_new():
                user.id = self._store.next_id("users")
                user.created_at = now
            elif user.id not in self._store.users:
                raise KeyError(f"Usuario {user.id} inexistente al actualizar.")
            user.updated_at = now
            self._store.users[user.id] = _copy(user)
            return user

    def delete(self, user_id: int) -> bool:
        with self._store.lock:
            if user_id not in self._store.users:
                return False
            owned = sum(
                1 for r in self._store.restaurants.values() if r.owner_id == user_id
            )
            if owned > 0:
                logger.info(
                    "Borrado de usuario bloqueado por restaurantes",
                    extra={"user_id": user_id, "count": owned},
                )
                raise UserHasDependents(user_id, owned)
            del self._store.users[user_id]
            return True
