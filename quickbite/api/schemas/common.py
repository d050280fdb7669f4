"""
===============================================================================
TARJETA CRC — api/schemas/common.py
===============================================================================

Responsabilidades:
    - AddressDTO compartido por usuarios y restaurantes (request y response).
    - Conversión AddressDTO <-> AddressInput / Address.
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ...application.usecases.common import AddressInput
from ...domain.entities import Address


class AddressDTO(BaseModel):
    street: str | None = Field(default=None, max_length=200)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    zip_code: str | None = Field(default=None, max_length=20)

    def to_input(self) -> AddressInput:
        return AddressInput(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
        )

    @classmethod
    def from_domain(cls, address: Address | None) -> "AddressDTO | None":
        if address is None:
            return None
        return cls(
            street=address.street,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
        )


def address_input(dto: AddressDTO | None) -> AddressInput | None:
    return dto.to_input() if dto is not None else None
