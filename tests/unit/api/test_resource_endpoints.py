"""
Name: Resource Endpoint Tests (users / restaurants / menu items)

Responsibilities:
  - Route RBAC table: USER reads, OWNER manages, ADMIN deletes
  - Route-level admin guard on user update/delete
  - Guarded user delete surfaces restaurant_count (409)
  - Validation and conflicts as problem+json
"""

import pytest

from quickbite.identity.roles import Role

pytestmark = pytest.mark.unit


@pytest.fixture
def actors(seed_user, auth_header):
    seed_user("alice", roles=(Role.USER,))
    owner = seed_user("olga", roles=(Role.OWNER,))
    seed_user("root", roles=(Role.ADMIN,))
    return {
        "user": auth_header("alice"),
        "owner": auth_header("olga"),
        "admin": auth_header("root"),
        "owner_id": owner.id,
    }


def _create_restaurant(client, headers, owner_id, name="Don Julio"):
    response = client.post(
        "/api/restaurants",
        json={"owner_id": owner_id, "name": name, "cuisine": "Parrilla", "rating": 4.5},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


# ============================================================================
# Users
# ============================================================================


def test_register_is_public(api_client):
    response = api_client.post(
        "/api/users/register",
        json={
            "name": "Ana",
            "email": " ana@example.com ",
            "username": "ana",
            "password": "secret1",
            "address": {"street": "Calle 1", "city": "Rosario", "state": "SF", "zip_code": "2000"},
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["roles"] == ["USER"]
    assert body["email"] == "ana@example.com"
    assert body["address"]["zip_code"] == "2000"
    assert "password" not in body and "password_hash" not in body


def test_register_duplicate_username(api_client, seed_user):
    seed_user("ana")

    response = api_client.post(
        "/api/users/register",
        json={"name": "Ana", "email": "other@example.com", "username": "ana", "password": "secret1"},
    )

    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_IDENTITY"
    assert response.json()["errors"] == [{"field": "username"}]


def test_register_missing_fields(api_client):
    response = api_client.post("/api/users/register", json={"username": "ana"})

    assert response.status_code == 422
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_admin_creates_user_with_roles(api_client, actors):
    response = api_client.post(
        "/api/users",
        json={
            "name": "Nuevo Dueño",
            "email": "nuevo@example.com",
            "username": "nuevo",
            "password": "secret1",
            "role_ids": [2, 1],
        },
        headers=actors["admin"],
    )

    assert response.status_code == 201
    assert response.json()["roles"] == ["OWNER", "USER"]


def test_owner_cannot_create_users(api_client, actors):
    response = api_client.post(
        "/api/users",
        json={"name": "X", "email": "x@example.com", "username": "xxx", "password": "secret1"},
        headers=actors["owner"],
    )
    assert response.status_code == 403


def test_owner_cannot_list_users(api_client, actors):
    assert api_client.get("/api/users", headers=actors["owner"]).status_code == 403


def test_user_lists_users(api_client, actors):
    response = api_client.get("/api/users", params={"size": 2}, headers=actors["user"])

    assert response.status_code == 200
    body = response.json()
    assert body["total_elements"] == 3
    assert body["total_pages"] == 2
    assert len(body["data"]) == 2


def test_update_user_is_admin_only(api_client, actors):
    response = api_client.put(
        f"/api/users/{actors['owner_id']}", json={"name": "Olga B"}, headers=actors["user"]
    )
    assert response.status_code == 403

    response = api_client.put(
        f"/api/users/{actors['owner_id']}", json={"name": "Olga B"}, headers=actors["admin"]
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Olga B"


def test_delete_owner_with_restaurants_conflicts(api_client, actors):
    _create_restaurant(api_client, actors["owner"], actors["owner_id"])

    response = api_client.delete(f"/api/users/{actors['owner_id']}", headers=actors["admin"])

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "USER_HAS_DEPENDENTS"
    assert body["errors"] == [{"restaurant_count": 1}]


def test_delete_user_without_restaurants(api_client, actors, seed_user):
    target = seed_user("temporal")

    response = api_client.delete(f"/api/users/{target.id}", headers=actors["admin"])

    assert response.status_code == 204
    assert api_client.get(f"/api/users/{target.id}", headers=actors["admin"]).status_code == 404


# ============================================================================
# Restaurants
# ============================================================================


def test_user_cannot_create_restaurant(api_client, actors):
    response = api_client.post(
        "/api/restaurants",
        json={"owner_id": actors["owner_id"], "name": "Nope", "cuisine": "Tapas"},
        headers=actors["user"],
    )
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


def test_owner_creates_and_user_reads(api_client, actors):
    created = _create_restaurant(api_client, actors["owner"], actors["owner_id"])

    response = api_client.get(f"/api/restaurants/{created['id']}", headers=actors["user"])

    assert response.status_code == 200
    assert response.json()["name"] == "Don Julio"
    assert response.json()["is_open"] is True


def test_restaurant_owner_must_hold_owner_role(api_client, actors, seed_user):
    plain = seed_user("plain")

    response = api_client.post(
        "/api/restaurants",
        json={"owner_id": plain.id, "name": "Plain Bar", "cuisine": "Bar"},
        headers=actors["admin"],
    )

    assert response.status_code == 403


def test_restaurant_filter_by_cuisine(api_client, actors):
    _create_restaurant(api_client, actors["owner"], actors["owner_id"], name="Uno")

    response = api_client.get(
        "/api/restaurants", params={"cuisine": "parrilla"}, headers=actors["user"]
    )

    assert response.json()["total_elements"] == 1


def test_only_admin_deletes_restaurants(api_client, actors):
    created = _create_restaurant(api_client, actors["owner"], actors["owner_id"])
    url = f"/api/restaurants/{created['id']}"

    assert api_client.delete(url, headers=actors["owner"]).status_code == 403
    assert api_client.delete(url, headers=actors["admin"]).status_code == 204
    assert api_client.get(url, headers=actors["admin"]).status_code == 404


def test_invalid_rating_is_422(api_client, actors):
    response = api_client.post(
        "/api/restaurants",
        json={"owner_id": actors["owner_id"], "name": "Mala", "cuisine": "X", "rating": 9},
        headers=actors["owner"],
    )
    assert response.status_code == 422
    assert response.json()["errors"] == [{"field": "rating"}]


# ============================================================================
# Menu items
# ============================================================================


def test_menu_item_lifecycle(api_client, actors):
    restaurant = _create_restaurant(api_client, actors["owner"], actors["owner_id"])

    created = api_client.post(
        "/api/menu-items",
        json={"restaurant_id": restaurant["id"], "name": "Provoleta", "price": "8.50"},
        headers=actors["owner"],
    )
    assert created.status_code == 201
    item_id = created.json()["id"]

    listed = api_client.get(
        "/api/menu-items",
        params={"restaurant_id": restaurant["id"], "name": "provo"},
        headers=actors["user"],
    )
    assert [i["name"] for i in listed.json()["data"]] == ["Provoleta"]

    updated = api_client.put(
        f"/api/menu-items/{item_id}", json={"is_available": False}, headers=actors["owner"]
    )
    assert updated.json()["is_available"] is False

    assert api_client.delete(f"/api/menu-items/{item_id}", headers=actors["user"]).status_code == 403
    assert api_client.delete(f"/api/menu-items/{item_id}", headers=actors["admin"]).status_code == 204


def test_menu_list_requires_restaurant_id(api_client, actors):
    response = api_client.get("/api/menu-items", headers=actors["user"])
    assert response.status_code == 422


def test_menu_item_for_unknown_restaurant(api_client, actors):
    response = api_client.post(
        "/api/menu-items",
        json={"restaurant_id": 999, "name": "Fantasma", "price": "1.00"},
        headers=actors["owner"],
    )
    assert response.status_code == 404
