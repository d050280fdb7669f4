"""Schemas HTTP de ítems de menú (price como Decimal, serializado como string)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ...domain.entities import MenuItem


class CreateMenuItemReq(BaseModel):
    restaurant_id: int
    name: str = Field(..., max_length=100)
    price: Decimal
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = Field(default=None, max_length=500)
    is_available: bool | None = None


class UpdateMenuItemReq(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    price: Decimal | None = None
    description: str | None = Field(default=None, max_length=500)
    image_url: str | None = Field(default=None, max_length=500)
    is_available: bool | None = None


class MenuItemRes(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str | None
    price: Decimal
    image_url: str | None
    is_available: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, item: MenuItem) -> "MenuItemRes":
        return cls(
            id=item.id,
            restaurant_id=item.restaurant_id,
            name=item.name,
            description=item.description,
            price=item.price,
            image_url=item.image_url,
            is_available=item.is_available,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
