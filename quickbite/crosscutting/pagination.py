# quickbite/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Utilidades de paginación (page/size, 0-indexed)
===============================================================================

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PageRequest + PageSlice + Page[T]

Responsabilidades:
  - Validar page/size contra el máximo configurado
  - Transportar una página de dominio (items + total) entre capas
  - Response HTTP genérico Page[T] con total_pages calculado
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self.page * self.size

    def validation_message(self, max_size: int) -> str | None:
        """Devuelve el motivo de rechazo o None si la página es válida."""
        if self.page < 0:
            return "page debe ser >= 0."
        if self.size <= 0:
            return "size debe ser > 0."
        if self.size > max_size:
            return f"size no puede superar {max_size}."
        return None


@dataclass
class PageSlice(Generic[T]):
    """Página de resultados de dominio (sin dependencias HTTP)."""

    items: List[T] = field(default_factory=list)
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    def map(self, fn: Callable[[T], R]) -> "PageSlice[R]":
        return PageSlice(
            items=[fn(item) for item in self.items],
            page=self.page,
            size=self.size,
            total=self.total,
        )


class Page(BaseModel, Generic[T]):
    data: List[T] = Field(description="Items de la página actual")
    page: int = Field(description="Número de página (0-indexed)")
    size: int = Field(description="Tamaño de página solicitado")
    total_elements: int = Field(description="Total de elementos")
    total_pages: int = Field(description="Total de páginas")


def to_page(page_slice: PageSlice[T]) -> Page[T]:
    total_pages = math.ceil(page_slice.total / page_slice.size) if page_slice.size else 0
    return Page(
        data=page_slice.items,
        page=page_slice.page,
        size=page_slice.size,
        total_elements=page_slice.total,
        total_pages=total_pages,
    )
