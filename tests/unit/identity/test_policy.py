"""
Name: Authorization Policy Tests

Responsibilities:
  - Path pattern matching ("*", "{param}", "**")
  - Route table decisions per role (first match wins)
  - Authenticated fallback for unmatched routes
  - /metrics restricted to ADMIN in production
  - require_role any-of semantics
"""

from types import SimpleNamespace

import pytest

from quickbite import container
from quickbite.identity.errors import Forbidden, Unauthenticated
from quickbite.identity.policy import (
    AuthorizationPolicy,
    Decision,
    PRODUCTION_RULES,
    has_any_role,
    path_matches,
    public,
    require_role,
)
from quickbite.identity.principal import Identity
from quickbite.identity.roles import Role


def _identity(*roles: Role) -> Identity:
    return Identity.from_roles("someone", roles)


USER = _identity(Role.USER)
OWNER = _identity(Role.OWNER)
ADMIN = _identity(Role.ADMIN)


@pytest.mark.unit
class TestPathMatches:
    @pytest.mark.parametrize(
        "pattern,path,expected",
        [
            ("/api/users", "/api/users", True),
            ("/api/users", "/api/users/", True),
            ("/api/users", "/api/users/1", False),
            ("/api/users/*", "/api/users/1", True),
            ("/api/users/{id}", "/api/users/1", True),
            ("/api/users/*", "/api/users/1/roles", False),
            ("/api/restaurants/**", "/api/restaurants", True),
            ("/api/restaurants/**", "/api/restaurants/1/menu", True),
            ("/api/restaurants/**", "/api/restaurantsX", False),
        ],
    )
    def test_patterns(self, pattern, path, expected):
        assert path_matches(pattern, path) is expected


@pytest.mark.unit
class TestDefaultPolicy:
    policy = AuthorizationPolicy()

    @pytest.mark.parametrize(
        "method,path",
        [
            ("GET", "/healthz"),
            ("GET", "/metrics"),
            ("GET", "/openapi.json"),
            ("POST", "/api/login"),
            ("POST", "/api/change-password"),
            ("POST", "/api/users/register"),
        ],
    )
    def test_public_routes_need_no_identity(self, method, path):
        assert self.policy.decide(method, path, None) is Decision.GRANTED

    def test_create_user_is_admin_only(self):
        assert self.policy.decide("POST", "/api/users", ADMIN) is Decision.GRANTED
        assert self.policy.decide("POST", "/api/users", USER) is Decision.FORBIDDEN
        assert self.policy.decide("POST", "/api/users", None) is Decision.UNAUTHENTICATED

    def test_user_reads_exclude_owner_only_identities(self):
        assert self.policy.decide("GET", "/api/users/3", USER) is Decision.GRANTED
        assert self.policy.decide("GET", "/api/users", OWNER) is Decision.FORBIDDEN

    @pytest.mark.parametrize("resource", ["/api/restaurants", "/api/menu-items"])
    def test_reads_open_to_every_role(self, resource):
        for identity in (USER, OWNER, ADMIN):
            assert self.policy.decide("GET", f"{resource}/7", identity) is Decision.GRANTED

    @pytest.mark.parametrize("resource", ["/api/restaurants", "/api/menu-items"])
    @pytest.mark.parametrize("method", ["POST", "PUT"])
    def test_writes_need_owner_or_admin(self, resource, method):
        assert self.policy.decide(method, resource, OWNER) is Decision.GRANTED
        assert self.policy.decide(method, f"{resource}/1", ADMIN) is Decision.GRANTED
        assert self.policy.decide(method, resource, USER) is Decision.FORBIDDEN

    @pytest.mark.parametrize("resource", ["/api/restaurants", "/api/menu-items"])
    def test_delete_is_admin_only(self, resource):
        assert self.policy.decide("DELETE", f"{resource}/1", ADMIN) is Decision.GRANTED
        assert self.policy.decide("DELETE", f"{resource}/1", OWNER) is Decision.FORBIDDEN

    def test_unmatched_route_requires_authentication_only(self):
        assert self.policy.decide("PUT", "/api/users/1", USER) is Decision.GRANTED
        assert self.policy.decide("PUT", "/api/users/1", None) is Decision.UNAUTHENTICATED

    def test_identity_without_known_roles_is_forbidden_on_role_rules(self):
        nobody = Identity(subject="ghost")
        assert self.policy.decide("GET", "/api/restaurants", nobody) is Decision.FORBIDDEN


@pytest.mark.unit
class TestProductionPolicy:
    policy = AuthorizationPolicy(PRODUCTION_RULES)

    def test_metrics_requires_admin(self):
        assert self.policy.decide("GET", "/metrics", None) is Decision.UNAUTHENTICATED
        assert self.policy.decide("GET", "/metrics", USER) is Decision.FORBIDDEN
        assert self.policy.decide("GET", "/metrics", ADMIN) is Decision.GRANTED

    def test_rest_of_table_unchanged(self):
        assert self.policy.decide("GET", "/healthz", None) is Decision.GRANTED
        assert self.policy.decide("GET", "/api/restaurants", USER) is Decision.GRANTED

    @pytest.fixture
    def fresh_policy(self):
        container.get_authorization_policy.cache_clear()
        yield
        container.get_authorization_policy.cache_clear()

    @pytest.mark.parametrize("production,expected", [(True, Decision.UNAUTHENTICATED), (False, Decision.GRANTED)])
    def test_container_picks_rules_by_environment(self, monkeypatch, fresh_policy, production, expected):
        settings = SimpleNamespace(is_production=lambda: production)
        monkeypatch.setattr(container, "get_settings", lambda: settings)

        policy = container.get_authorization_policy()

        assert policy.decide("GET", "/metrics", None) is expected


@pytest.mark.unit
class TestCustomRules:
    def test_first_matching_rule_wins(self):
        policy = AuthorizationPolicy(
            [
                public(["GET"], "/api/things/open"),
                has_any_role(["GET"], [Role.ADMIN], "/api/things/**"),
            ]
        )
        assert policy.decide("GET", "/api/things/open", None) is Decision.GRANTED
        assert policy.decide("GET", "/api/things/closed", USER) is Decision.FORBIDDEN


@pytest.mark.unit
class TestRequireRole:
    def test_returns_identity_when_any_role_matches(self):
        both = _identity(Role.USER, Role.OWNER)
        assert require_role(both, [Role.OWNER, Role.ADMIN]) is both

    def test_missing_identity_is_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            require_role(None, [Role.USER])

    def test_no_common_role_is_forbidden(self):
        with pytest.raises(Forbidden):
            require_role(USER, [Role.ADMIN])
