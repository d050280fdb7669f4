"""Menu item use cases."""

from .create_menu_item import CreateMenuItemInput, CreateMenuItemUseCase
from .delete_menu_item import DeleteMenuItemUseCase
from .get_menu_item import GetMenuItemUseCase
from .list_menu_items import ListMenuItemsInput, ListMenuItemsUseCase
from .menu_item_results import (
    DeleteMenuItemResult,
    MenuItemError,
    MenuItemErrorCode,
    MenuItemPageResult,
    MenuItemResult,
)
from .update_menu_item import UpdateMenuItemInput, UpdateMenuItemUseCase

__all__ = [
    "CreateMenuItemInput",
    "CreateMenuItemUseCase",
    "DeleteMenuItemResult",
    "DeleteMenuItemUseCase",
    "GetMenuItemUseCase",
    "ListMenuItemsInput",
    "ListMenuItemsUseCase",
    "MenuItemError",
    "MenuItemErrorCode",
    "MenuItemPageResult",
    "MenuItemResult",
    "UpdateMenuItemInput",
    "UpdateMenuItemUseCase",
]
