"""
In-memory repository implementations.

For tests and local development. Data is lost on process restart.
All repositories built over the same InMemoryStore share one lock, so the
user delete guard sees a consistent view of restaurants.
"""

from .menu_item import InMemoryMenuItemRepository
from .restaurant import InMemoryRestaurantRepository
from .store import InMemoryStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryStore",
    "InMemoryUserRepository",
    "InMemoryRestaurantRepository",
    "InMemoryMenuItemRepository",
]
