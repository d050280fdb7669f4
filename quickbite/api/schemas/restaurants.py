"""Schemas HTTP de restaurantes."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ...domain.entities import Restaurant
from .common import AddressDTO


class CreateRestaurantReq(BaseModel):
    owner_id: int
    name: str = Field(..., max_length=100)
    cuisine: str = Field(..., max_length=50)
    address: AddressDTO | None = None
    opening_hours: str | None = Field(default=None, max_length=100)
    rating: float | None = None
    is_open: bool | None = None


class UpdateRestaurantReq(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    cuisine: str | None = Field(default=None, max_length=50)
    address: AddressDTO | None = None
    opening_hours: str | None = Field(default=None, max_length=100)
    rating: float | None = None
    is_open: bool | None = None


class RestaurantRes(BaseModel):
    id: int
    owner_id: int
    name: str
    cuisine: str
    address: AddressDTO | None
    opening_hours: str | None
    rating: float
    is_open: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, restaurant: Restaurant) -> "RestaurantRes":
        return cls(
            id=restaurant.id,
            owner_id=restaurant.owner_id,
            name=restaurant.name,
            cuisine=restaurant.cuisine,
            address=AddressDTO.from_domain(restaurant.address),
            opening_hours=restaurant.opening_hours,
            rating=restaurant.rating,
            is_open=restaurant.is_open,
            created_at=restaurant.created_at,
            updated_at=restaurant.updated_at,
        )
