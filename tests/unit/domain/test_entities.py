"""
Name: Domain Entity Tests

Responsibilities:
  - User invariants (username length, email format, roles)
  - Address completeness
  - Restaurant rating range and defaults
  - MenuItem price range (Decimal)
"""

from decimal import Decimal

import pytest

from quickbite.domain.entities import Address, MenuItem, Restaurant, User
from quickbite.domain.errors import ValidationFailed
from quickbite.identity.roles import Role


def _user(**overrides) -> User:
    data = dict(
        name="Alice",
        email="alice@example.com",
        username="alice",
        password_hash="digest",
    )
    data.update(overrides)
    return User.create_new(**data)


@pytest.mark.unit
class TestUser:
    def test_create_new_defaults(self):
        user = _user()
        assert user.roles == {Role.USER}
        assert user.enabled is True
        assert user.is_new()

    @pytest.mark.parametrize("username", ["ab", "x" * 51, "   "])
    def test_username_length(self, username):
        with pytest.raises(ValidationFailed) as exc:
            _user(username=username)
        assert exc.value.field == "username"

    @pytest.mark.parametrize("email", ["no-at-sign", "@example.com", "a b@example.com"])
    def test_email_format(self, email):
        with pytest.raises(ValidationFailed) as exc:
            _user(email=email)
        assert exc.value.field == "email"

    def test_cannot_remove_last_role(self):
        user = _user()
        with pytest.raises(ValidationFailed):
            user.remove_role(Role.USER)
        assert user.roles == {Role.USER}

    def test_add_and_remove_roles(self):
        user = _user()
        user.add_role(Role.OWNER)
        user.remove_role(Role.USER)
        assert user.roles == {Role.OWNER}
        assert user.has_any_role([Role.OWNER, Role.ADMIN])

    def test_replace_roles_rejects_empty(self):
        with pytest.raises(ValidationFailed):
            _user().replace_roles([])

    def test_update_profile_keeps_blank_fields(self):
        user = _user()
        user.update_profile(name="  ", email=None, username="alice2")
        assert user.name == "Alice"
        assert user.email == "alice@example.com"
        assert user.username == "alice2"
        assert user.updated_at is not None

    def test_update_profile_validates_email(self):
        user = _user()
        with pytest.raises(ValidationFailed):
            user.update_profile(email="broken")
        assert user.email == "alice@example.com"

    def test_disable_and_enable(self):
        user = _user()
        user.disable()
        assert user.enabled is False
        user.enable()
        assert user.enabled is True


@pytest.mark.unit
class TestAddress:
    @pytest.mark.parametrize("missing", ["street", "city", "state", "zip_code"])
    def test_all_fields_required(self, missing):
        data = dict(street="Main 1", city="Rosario", state="SF", zip_code="2000")
        data[missing] = " "
        with pytest.raises(ValidationFailed) as exc:
            Address(**data)
        assert exc.value.field == missing


@pytest.mark.unit
class TestRestaurant:
    def test_defaults(self):
        restaurant = Restaurant.create_new(owner_id=1, name="Don Julio", cuisine="Parrilla")
        assert restaurant.rating == 0.0
        assert restaurant.is_open is True
        assert restaurant.address is None
        assert restaurant.is_owned_by(1)

    @pytest.mark.parametrize("rating", [-0.1, 5.1])
    def test_rating_range(self, rating):
        with pytest.raises(ValidationFailed):
            Restaurant.create_new(owner_id=1, name="Don Julio", cuisine="Parrilla", rating=rating)

    def test_name_length(self):
        with pytest.raises(ValidationFailed):
            Restaurant.create_new(owner_id=1, name="X", cuisine="Parrilla")

    def test_open_close(self):
        restaurant = Restaurant.create_new(owner_id=1, name="Don Julio", cuisine="Parrilla")
        restaurant.close()
        assert restaurant.is_open is False
        restaurant.open()
        assert restaurant.is_open is True


@pytest.mark.unit
class TestMenuItem:
    def test_price_is_decimal(self):
        item = MenuItem.create_new(restaurant_id=1, name="Flan", price="4.25")
        assert item.price == Decimal("4.25")
        assert item.is_available is True

    @pytest.mark.parametrize("price", ["-0.01", "1000000", "NaN", None, "abc"])
    def test_invalid_prices(self, price):
        with pytest.raises(ValidationFailed) as exc:
            MenuItem.create_new(restaurant_id=1, name="Flan", price=price)
        assert exc.value.field == "price"

    def test_availability_toggle(self):
        item = MenuItem.create_new(restaurant_id=1, name="Flan", price=Decimal("1"))
        item.mark_as_unavailable()
        assert item.is_available is False
        item.mark_as_available()
        assert item.belongs_to_restaurant(1)
