"""
===============================================================================
TARJETA CRC — quickbite/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, componentes de identidad y casos de uso.
  - Exponer factories para FastAPI (Depends) y para el AuthenticationGate.
  - Mantener singletons (lru_cache) para recursos compartidos.
  - Elegir backend de persistencia según Settings.repository_backend.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.* (puertos)
  - infrastructure.repositories.{postgres,in_memory} (implementaciones)
  - identity.* (CredentialVerifier, TokenCodec, SessionManager, AuthorizationPolicy)
  - application.usecases.*

Notas:
  - Este archivo NO contiene lógica de negocio ni depende de FastAPI.
  - Con backend memory los tres repositorios comparten un InMemoryStore.
  - reset_container() limpia todos los singletons (tests).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.auth import ChangePasswordUseCase, LoginUseCase
from .application.usecases.menu_items import (
    CreateMenuItemUseCase,
    DeleteMenuItemUseCase,
    GetMenuItemUseCase,
    ListMenuItemsUseCase,
    UpdateMenuItemUseCase,
)
from .application.usecases.restaurants import (
    CreateRestaurantUseCase,
    DeleteRestaurantUseCase,
    GetRestaurantUseCase,
    ListRestaurantsUseCase,
    UpdateRestaurantUseCase,
)
from .application.usecases.users import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    MenuItemRepository,
    RestaurantRepository,
    UserRepository,
)
from .identity.credentials import CredentialVerifier
from .identity.policy import DEFAULT_RULES, PRODUCTION_RULES, AuthorizationPolicy
from .identity.sessions import SessionManager
from .identity.token_codec import TokenCodec
from .infrastructure.repositories.in_memory import (
    InMemoryMenuItemRepository,
    InMemoryRestaurantRepository,
    InMemoryStore,
    InMemoryUserRepository,
)
from .infrastructure.repositories.postgres import (
    PostgresMenuItemRepository,
    PostgresRestaurantRepository,
    PostgresUserRepository,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _uses_memory_backend() -> bool:
    return get_settings().repository_backend == "memory"


@lru_cache(maxsize=1)
def get_in_memory_store() -> InMemoryStore:
    return InMemoryStore()


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _uses_memory_backend():
        return InMemoryUserRepository(get_in_memory_store())
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_restaurant_repository() -> RestaurantRepository:
    if _uses_memory_backend():
        return InMemoryRestaurantRepository(get_in_memory_store())
    return PostgresRestaurantRepository()


@lru_cache(maxsize=1)
def get_menu_item_repository() -> MenuItemRepository:
    if _uses_memory_backend():
        return InMemoryMenuItemRepository(get_in_memory_store())
    return PostgresMenuItemRepository()


# =============================================================================
# Identidad (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_credential_verifier() -> CredentialVerifier:
    return CredentialVerifier()


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """TokenCodec construido desde el snapshot de settings (nunca Settings directo)."""
    return TokenCodec(get_settings().token_settings())


@lru_cache(maxsize=1)
def get_session_manager() -> SessionManager:
    return SessionManager(
        users=get_user_repository(),
        verifier=get_credential_verifier(),
        codec=get_token_codec(),
    )


@lru_cache(maxsize=1)
def get_authorization_policy() -> AuthorizationPolicy:
    if get_settings().is_production():
        return AuthorizationPolicy(PRODUCTION_RULES)
    return AuthorizationPolicy(DEFAULT_RULES)


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_login_use_case() -> LoginUseCase:
    return LoginUseCase(get_session_manager())


def get_change_password_use_case() -> ChangePasswordUseCase:
    return ChangePasswordUseCase(
        sessions=get_session_manager(),
        users=get_user_repository(),
        verifier=get_credential_verifier(),
    )


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(get_user_repository(), get_credential_verifier())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), get_credential_verifier())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(get_user_repository(), get_credential_verifier())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(
        get_user_repository(), max_page_size=get_settings().max_page_size
    )


def get_create_restaurant_use_case() -> CreateRestaurantUseCase:
    return CreateRestaurantUseCase(get_restaurant_repository(), get_user_repository())


def get_update_restaurant_use_case() -> UpdateRestaurantUseCase:
    return UpdateRestaurantUseCase(get_restaurant_repository())


def get_delete_restaurant_use_case() -> DeleteRestaurantUseCase:
    return DeleteRestaurantUseCase(get_restaurant_repository())


def get_get_restaurant_use_case() -> GetRestaurantUseCase:
    return GetRestaurantUseCase(get_restaurant_repository())


def get_list_restaurants_use_case() -> ListRestaurantsUseCase:
    return ListRestaurantsUseCase(
        get_restaurant_repository(), max_page_size=get_settings().max_page_size
    )


def get_create_menu_item_use_case() -> CreateMenuItemUseCase:
    return CreateMenuItemUseCase(get_menu_item_repository(), get_restaurant_repository())


def get_update_menu_item_use_case() -> UpdateMenuItemUseCase:
    return UpdateMenuItemUseCase(get_menu_item_repository())


def get_delete_menu_item_use_case() -> DeleteMenuItemUseCase:
    return DeleteMenuItemUseCase(get_menu_item_repository())


def get_get_menu_item_use_case() -> GetMenuItemUseCase:
    return GetMenuItemUseCase(get_menu_item_repository())


def get_list_menu_items_use_case() -> ListMenuItemsUseCase:
    return ListMenuItemsUseCase(
        get_menu_item_repository(),
        get_restaurant_repository(),
        max_page_size=get_settings().max_page_size,
    )


_SINGLETONS = (
    get_in_memory_store,
    get_user_repository,
    get_restaurant_repository,
    get_menu_item_repository,
    get_credential_verifier,
    get_token_codec,
    get_session_manager,
    get_authorization_policy,
)


def reset_container() -> None:
    """Para tests: descarta todos los singletons cacheados."""
    for factory in _SINGLETONS:
        factory.cache_clear()
