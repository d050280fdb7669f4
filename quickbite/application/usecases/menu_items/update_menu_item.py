"""Use case: actualizar un ítem de menú (campos ausentes se mantienen)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ....crosscutting.logger import logger
from ....domain.errors import ValidationFailed
from ....domain.repositories import MenuItemRepository
from .menu_item_results import MenuItemResult, not_found, validation_error


@dataclass(frozen=True)
class UpdateMenuItemInput:
    item_id: int
    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    image_url: str | None = None
    is_available: bool | None = None


class UpdateMenuItemUseCase:
    def __init__(self, items: MenuItemRepository) -> None:
        self._items = items

    def execute(self, input_data: UpdateMenuItemInput) -> MenuItemResult:
        item = self._items.find_by_id(input_data.item_id)
        if item is None:
            return MenuItemResult(error=not_found(input_data.item_id))

        try:
            item.update_info(
                name=input_data.name,
                description=input_data.description,
                price=input_data.price,
                image_url=input_data.image_url,
            )
        except ValidationFailed as exc:
            return MenuItemResult(error=validation_error(exc))

        if input_data.is_available is True:
            item.mark_as_available()
        elif input_data.is_available is False:
            item.mark_as_unavailable()

        saved = self._items.save(item)
        logger.info("Ítem de menú actualizado", extra={"item_id": saved.id})
        return MenuItemResult(item=saved)
