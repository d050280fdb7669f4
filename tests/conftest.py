"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, memory backend, test secret)
  - Provide fast credential hashing for tests
  - Provide in-memory repositories sharing one store
  - Provide an app TestClient with seeded users

Notes:
  - Fixtures are auto-discovered by pytest
  - Every fixture is function scoped for isolation
"""

import os
from decimal import Decimal

import pytest
from argon2 import PasswordHasher

from quickbite.crosscutting import config as app_config

app_config.Settings.model_config["env_file"] = None

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REPOSITORY_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-secret-with-enough-length-0123456789")

from quickbite.crosscutting.config import TokenSettings, get_settings  # noqa: E402
from quickbite.domain.entities import Address, MenuItem, Restaurant, User  # noqa: E402
from quickbite.identity.credentials import CredentialVerifier  # noqa: E402
from quickbite.identity.roles import Role  # noqa: E402
from quickbite.identity.token_codec import TokenCodec  # noqa: E402
from quickbite.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryMenuItemRepository,
    InMemoryRestaurantRepository,
    InMemoryStore,
    InMemoryUserRepository,
)

TEST_SECRET = "test-secret-with-enough-length-0123456789"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


def fast_verifier() -> CredentialVerifier:
    """Argon2 con costo mínimo: mismo formato de digest, mucho más rápido."""
    return CredentialVerifier(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


# ============================================================================
# Identity Fixtures
# ============================================================================


@pytest.fixture
def verifier() -> CredentialVerifier:
    return fast_verifier()


@pytest.fixture
def token_settings() -> TokenSettings:
    return TokenSettings(prefix="Bearer", secret=TEST_SECRET, expiration_ms=60_000)


@pytest.fixture
def codec(token_settings: TokenSettings) -> TokenCodec:
    return TokenCodec(token_settings)


# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def user_repo(store: InMemoryStore) -> InMemoryUserRepository:
    return InMemoryUserRepository(store)


@pytest.fixture
def restaurant_repo(store: InMemoryStore) -> InMemoryRestaurantRepository:
    return InMemoryRestaurantRepository(store)


@pytest.fixture
def menu_repo(store: InMemoryStore) -> InMemoryMenuItemRepository:
    return InMemoryMenuItemRepository(store)


@pytest.fixture
def sample_address() -> Address:
    return Address(street="Av. Siempre Viva 742", city="Springfield", state="IL", zip_code="62704")


@pytest.fixture
def make_user(user_repo, verifier):
    """Factory: persiste un usuario con password 'secret1' por defecto."""

    def _make(
        username: str = "alice",
        *,
        roles=(Role.USER,),
        enabled: bool = True,
        password: str = "secret1",
        email: str | None = None,
    ) -> User:
        user = User.reconstruct(
            id=None,
            name=username.title(),
            email=email or f"{username}@example.com",
            username=username,
            password_hash=verifier.hash(password),
            address=None,
            roles=roles,
            enabled=enabled,
        )
        return user_repo.save(user)

    return _make


@pytest.fixture
def make_restaurant(restaurant_repo):
    def _make(owner_id: int, name: str = "La Parrilla", cuisine: str = "Argentina", rating: float = 4.0):
        return restaurant_repo.save(
            Restaurant.create_new(owner_id=owner_id, name=name, cuisine=cuisine, rating=rating)
        )

    return _make


@pytest.fixture
def make_menu_item(menu_repo):
    def _make(restaurant_id: int, name: str = "Empanada", price: str = "3.50", is_available: bool = True):
        return menu_repo.save(
            MenuItem.create_new(
                restaurant_id=restaurant_id,
                name=name,
                price=Decimal(price),
                is_available=is_available,
            )
        )

    return _make


# ============================================================================
# App Fixtures
# ============================================================================


@pytest.fixture
def api_client(monkeypatch):
    """TestClient sobre una app fresca con backend memory y singletons limpios."""
    from fastapi.testclient import TestClient

    from quickbite import container
    from quickbite.api.main import create_app

    get_settings.cache_clear()
    container.reset_container()
    monkeypatch.setattr(container, "CredentialVerifier", fast_verifier)

    with TestClient(create_app()) as client:
        yield client

    container.reset_container()
    get_settings.cache_clear()


@pytest.fixture
def seed_user(api_client):
    """Factory: persiste un usuario en los repos del container de la app."""
    from quickbite import container

    def _seed(username: str, *, roles=(Role.USER,), enabled: bool = True, password: str = "secret1") -> User:
        user = User.reconstruct(
            id=None,
            name=username.title(),
            email=f"{username}@example.com",
            username=username,
            password_hash=container.get_credential_verifier().hash(password),
            address=None,
            roles=roles,
            enabled=enabled,
        )
        return container.get_user_repository().save(user)

    return _seed


@pytest.fixture
def auth_header(api_client):
    """Factory: login vía /api/login y devuelve el header Authorization."""

    def _login(username: str, password: str = "secret1") -> dict[str, str]:
        response = api_client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": response.json()["token"]}

    return _login
