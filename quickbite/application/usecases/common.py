"""
===============================================================================
MÓDULO: Helpers compartidos por los casos de uso
===============================================================================

Responsabilidades:
    - AddressInput: dirección tal como llega de la API (campos opcionales).
    - build_address: AddressInput -> Address (valida vía dominio).
    - page_request: construye PageRequest y devuelve el motivo de rechazo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ...crosscutting.pagination import PageRequest
from ...domain.entities import Address


@dataclass(frozen=True)
class AddressInput:
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


def build_address(data: AddressInput | None) -> Address | None:
    """None si no vino dirección. Raises ValidationFailed si está incompleta."""
    if data is None:
        return None
    return Address(
        street=data.street,
        city=data.city,
        state=data.state,
        zip_code=data.zip_code,
    )


def page_request(page: int, size: int, max_size: int) -> tuple[PageRequest, str | None]:
    request = PageRequest(page=page, size=size)
    return request, request.validation_message(max_size)
