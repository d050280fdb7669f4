"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio (agregados User / Restaurant, MenuItem, Address)

Responsabilidades:
    - Validar invariantes de campo al construir (ValidationFailed).
    - Exponer mutaciones solo vía métodos de dominio (update_*, roles,
      enable/disable, open/close...), que revalidan y tocan updated_at.
    - Factories create_new (alta) y reconstruct (persistencia).

Colaboradores:
    - identity.roles.Role
    - domain.errors.ValidationFailed

Notas:
    - User guarda solo el hash del password; la política de largo mínimo se
      aplica al texto plano con validate_plain_password() antes de hashear.
    - Un User siempre tiene al menos un rol (USER por defecto).
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from ..identity.roles import Role
from .errors import ValidationFailed

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 4
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MIN_RATING = 0.0
MAX_RATING = 5.0
MAX_PRICE = Decimal("999999.99")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def validate_plain_password(password: Optional[str]) -> str:
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationFailed(
            f"El password debe tener al menos {PASSWORD_MIN_LENGTH} caracteres.",
            field="password",
        )
    return password


@dataclass(frozen=True, slots=True)
class Address:
    street: str
    city: str
    state: str
    zip_code: str

    def __post_init__(self) -> None:
        for field_name in ("street", "city", "state", "zip_code"):
            if _is_blank(getattr(self, field_name)):
                raise ValidationFailed(
                    f"La dirección requiere {field_name}.", field=field_name
                )


# =============================================================================
# User
# =============================================================================


@dataclass
class User:
    name: str
    email: str
    username: str
    password_hash: str
    address: Optional[Address] = None
    roles: set[Role] = field(default_factory=lambda: {Role.USER})
    enabled: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        self.roles = set(self.roles or ()) or {Role.USER}
        self._validate()

    @classmethod
    def create_new(
        cls,
        *,
        name: str,
        email: str,
        username: str,
        password_hash: str,
        address: Optional[Address] = None,
    ) -> "User":
        """Alta por auto-registro: siempre rol USER y habilitado."""
        return cls(
            name=name,
            email=email,
            username=username,
            password_hash=password_hash,
            address=address,
            roles={Role.USER},
            enabled=True,
        )

    @classmethod
    def reconstruct(
        cls,
        *,
        id: Optional[int],
        name: str,
        email: str,
        username: str,
        password_hash: str,
        address: Optional[Address],
        roles: Iterable[Role],
        enabled: bool,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> "User":
        return cls(
            id=id,
            name=name,
            email=email,
            username=username,
            password_hash=password_hash,
            address=address,
            roles=set(roles),
            enabled=enabled,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _validate(self) -> None:
        username = (self.username or "").strip()
        if not username:
            raise ValidationFailed("El username no puede estar vacío.", field="username")
        if not USERNAME_MIN_LENGTH <= len(self.username) <= USERNAME_MAX_LENGTH:
            raise ValidationFailed(
                f"El username debe tener entre {USERNAME_MIN_LENGTH} y "
                f"{USERNAME_MAX_LENGTH} caracteres.",
                field="username",
            )
        if not self.email or not EMAIL_PATTERN.match(self.email):
            raise ValidationFailed("Formato de email inválido.", field="email")
        if _is_blank(self.name):
            raise ValidationFailed("El nombre no puede estar vacío.", field="name")
        if _is_blank(self.password_hash):
            raise ValidationFailed("El password no puede estar vacío.", field="password")

    def _touch(self) -> None:
        self.updated_at = _utcnow()

    # -----------------------------------------------------------------------
    # Operaciones de dominio
    # -----------------------------------------------------------------------

    def update_profile(
        self,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        username: Optional[str] = None,
        address: Optional[Address] = None,
    ) -> None:
        """Campos None/blank se mantienen. Revalida antes de aplicar."""
        new_name = self.name if _is_blank(name) else name
        new_email = self.email if _is_blank(email) else email.strip()
        new_username = self.username if _is_blank(username) else username.strip()
        if not EMAIL_PATTERN.match(new_email):
            raise ValidationFailed("Formato de email inválido.", field="email")
        if not USERNAME_MIN_LENGTH <= len(new_username) <= USERNAME_MAX_LENGTH:
            raise ValidationFailed(
                f"El username debe tener entre {USERNAME_MIN_LENGTH} y "
                f"{USERNAME_MAX_LENGTH} caracteres.",
                field="username",
            )

        self.name = new_name
        self.email = new_email
        self.username = new_username
        if address is not None:
            self.address = address
        self._touch()

    def change_password(self, new_password_hash: str) -> None:
        if _is_blank(new_password_hash):
            raise ValidationFailed("El password no puede estar vacío.", field="password")
        self.password_hash = new_password_hash
        self._touch()

    def add_role(self, role: Role) -> None:
        if role not in self.roles:
            self.roles.add(role)
            self._touch()

    def remove_role(self, role: Role) -> None:
        if role not in self.roles:
            return
        if len(self.roles) == 1:
            raise ValidationFailed(
                "El usuario debe conservar al menos un rol.", field="roles"
            )
        self.roles.discard(role)
        self._touch()

    def replace_roles(self, roles: Iterable[Role]) -> None:
        new_roles = set(roles)
        if not new_roles:
            raise ValidationFailed(
                "El usuario debe conservar al menos un rol.", field="roles"
            )
        if new_roles != self.roles:
            self.roles = new_roles
            self._touch()

    def enable(self) -> None:
        self.enabled = True
        self._touch()

    def disable(self) -> None:
        self.enabled = False
        self._touch()

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    def has_any_role(self, roles: Iterable[Role]) -> bool:
        return any(role in self.roles for role in roles)

    def is_new(self) -> bool:
        return self.id is None


# =============================================================================
# Restaurant
# =============================================================================


def _validate_entity_name(name: Optional[str], label: str) -> str:
    if _is_blank(name):
        raise ValidationFailed(f"El nombre del {label} no puede estar vacío.", field="name")
    if not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        raise ValidationFailed(
            f"El nombre del {label} debe tener entre {NAME_MIN_LENGTH} y "
            f"{NAME_MAX_LENGTH} caracteres.",
            field="name",
        )
    return name.strip()


def _validate_rating(rating: float) -> float:
    if rating is None or not MIN_RATING <= float(rating) <= MAX_RATING:
        raise ValidationFailed(
            f"El rating debe estar entre {MIN_RATING} y {MAX_RATING}.", field="rating"
        )
    return float(rating)


@dataclass
class Restaurant:
    owner_id: int
    name: str
    cuisine: str
    address: Optional[Address] = None
    opening_hours: Optional[str] = None
    rating: float = 0.0
    is_open: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.owner_id is None:
            raise ValidationFailed("El restaurante requiere owner.", field="owner_id")
        self.name = _validate_entity_name(self.name, "restaurante")
        if _is_blank(self.cuisine):
            raise ValidationFailed("La cocina no puede estar vacía.", field="cuisine")
        self.rating = _validate_rating(self.rating)

    @classmethod
    def create_new(
        cls,
        *,
        owner_id: int,
        name: str,
        cuisine: str,
        address: Optional[Address] = None,
        opening_hours: Optional[str] = None,
        rating: Optional[float] = None,
        is_open: Optional[bool] = None,
    ) -> "Restaurant":
        return cls(
            owner_id=owner_id,
            name=name,
            cuisine=cuisine,
            address=address,
            opening_hours=opening_hours,
            rating=0.0 if rating is None else rating,
            is_open=True if is_open is None else is_open,
        )

    def update_info(
        self,
        *,
        name: Optional[str] = None,
        cuisine: Optional[str] = None,
        address: Optional[Address] = None,
        opening_hours: Optional[str] = None,
    ) -> None:
        new_name = self.name if _is_blank(name) else _validate_entity_name(name, "restaurante")
        self.name = new_name
        if not _is_blank(cuisine):
            self.cuisine = cuisine.strip()
        if address is not None:
            self.address = address
        if opening_hours is not None:
            self.opening_hours = opening_hours
        self.updated_at = _utcnow()

    def update_rating(self, rating: float) -> None:
        self.rating = _validate_rating(rating)
        self.updated_at = _utcnow()

    def open(self) -> None:
        self.is_open = True
        self.updated_at = _utcnow()

    def close(self) -> None:
        self.is_open = False
        self.updated_at = _utcnow()

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id


# =============================================================================
# MenuItem
# =============================================================================


def _validate_price(price) -> Decimal:
    try:
        value = Decimal(str(price))
        in_range = Decimal("0") <= value <= MAX_PRICE
    except (ArithmeticError, ValueError, TypeError):
        raise ValidationFailed("Precio inválido.", field="price") from None
    if not in_range:
        raise ValidationFailed(
            f"El precio debe estar entre 0 y {MAX_PRICE}.", field="price"
        )
    return value


@dataclass
class MenuItem:
    restaurant_id: int
    name: str
    price: Decimal
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_available: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.restaurant_id is None:
            raise ValidationFailed(
                "El ítem requiere restaurante.", field="restaurant_id"
            )
        self.name = _validate_entity_name(self.name, "ítem")
        self.price = _validate_price(self.price)

    @classmethod
    def create_new(
        cls,
        *,
        restaurant_id: int,
        name: str,
        price,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        is_available: Optional[bool] = None,
    ) -> "MenuItem":
        return cls(
            restaurant_id=restaurant_id,
            name=name,
            price=price,
            description=description,
            image_url=image_url,
            is_available=True if is_available is None else is_available,
        )

    def update_info(
        self,
        *,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price=None,
        image_url: Optional[str] = None,
    ) -> None:
        if not _is_blank(name):
            self.name = _validate_entity_name(name, "ítem")
        if description is not None:
            self.description = description
        if price is not None:
            self.price = _validate_price(price)
        if image_url is not None:
            self.image_url = image_url
        self.updated_at = _utcnow()

    def update_price(self, price) -> None:
        self.price = _validate_price(price)
        self.updated_at = _utcnow()

    def mark_as_available(self) -> None:
        self.is_available = True
        self.updated_at = _utcnow()

    def mark_as_unavailable(self) -> None:
        self.is_available = False
        self.updated_at = _utcnow()

    def belongs_to_restaurant(self, restaurant_id: int) -> bool:
        return self.restaurant_id == restaurant_id
