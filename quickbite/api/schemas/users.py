"""
===============================================================================
TARJETA CRC — api/schemas/users.py
===============================================================================

Responsabilidades:
    - Requests de registro / alta administrativa / actualización.
    - UserRes: nunca expone password_hash.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from ...domain.entities import User
from .common import AddressDTO


class _EmailNormalizer(BaseModel):
    @field_validator("email", check_fields=False)
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v


class RegisterUserReq(_EmailNormalizer):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=320)
    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=512)
    address: AddressDTO | None = None


class CreateUserReq(RegisterUserReq):
    role_ids: list[int] = Field(default_factory=list, max_length=10)
    enabled: bool | None = None


class UpdateUserReq(_EmailNormalizer):
    name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=320)
    username: str | None = Field(default=None, max_length=50)
    password: str | None = Field(default=None, max_length=512)
    address: AddressDTO | None = None
    role_ids: list[int] | None = Field(default=None, max_length=10)
    enabled: bool | None = None


class UserRes(BaseModel):
    id: int
    name: str
    email: str
    username: str
    address: AddressDTO | None
    roles: list[str]
    enabled: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            username=user.username,
            address=AddressDTO.from_domain(user.address),
            roles=sorted(role.value for role in user.roles),
            enabled=user.enabled,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
