from __future__ import annotations

from ....domain.repositories import MenuItemRepository
from .menu_item_results import MenuItemResult, not_found


class GetMenuItemUseCase:
    def __init__(self, items: MenuItemRepository) -> None:
        self._items = items

    def execute(self, item_id: int) -> MenuItemResult:
        item = self._items.find_by_id(item_id)
        if item is None:
            return MenuItemResult(error=not_found(item_id))
        return MenuItemResult(item=item)
