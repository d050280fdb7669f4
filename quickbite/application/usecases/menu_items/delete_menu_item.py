from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import MenuItemRepository
from .menu_item_results import DeleteMenuItemResult, not_found


class DeleteMenuItemUseCase:
    def __init__(self, items: MenuItemRepository) -> None:
        self._items = items

    def execute(self, item_id: int) -> DeleteMenuItemResult:
        if not self._items.delete(item_id):
            return DeleteMenuItemResult(error=not_found(item_id))
        logger.info("Ítem de menú eliminado", extra={"item_id": item_id})
        return DeleteMenuItemResult(deleted=True)
