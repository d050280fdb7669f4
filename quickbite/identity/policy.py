"""
===============================================================================
TARJETA CRC — identity/policy.py
===============================================================================

Módulo:
    AuthorizationPolicy (tabla (método, patrón) -> roles)

Responsabilidades:
    - Evaluar reglas en orden de declaración: la PRIMERA que matchea decide.
    - Semántica any-of: alcanza con un rol del set requerido.
    - Reglas públicas: pasan también requests anónimos.
    - Sin regla que matchee: requiere autenticación (cualquier rol).
    - PRODUCTION_RULES: la misma tabla con /metrics restringido a ADMIN.
    - AuthorizationMiddleware: aplica la decisión antes del routing usando la
      Identity que dejó el AuthenticationGate.
    - require_role(identity, allowed): check puntual para casos de uso/rutas.

Colaboradores:
    - identity.gate (identity_from_scope)
    - identity.principal.Identity, identity.roles.Role
    - crosscutting.error_responses.send_problem
    - crosscutting.metrics.record_auth_rejection

Patrones de path:
    - "*"  o "{param}": exactamente un segmento.
    - "**": cero o más segmentos (por eso "/api/x/**" también matchea "/api/x").
    - Trailing slash se ignora.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from ..crosscutting.error_responses import ErrorCode, send_problem
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_rejection
from .errors import Forbidden, Unauthenticated
from .gate import identity_from_scope
from .principal import Identity
from .roles import Role

ANY_METHOD: str = "*"


class Decision(str, Enum):
    GRANTED = "GRANTED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


# ---------------------------------------------------------------------------
# Matching de paths
# ---------------------------------------------------------------------------


def _segments(path: str) -> list[str]:
    return [segment for segment in path.strip("/").split("/") if segment]


def _match_segments(pattern: Sequence[str], path: Sequence[str]) -> bool:
    if not pattern:
        return not path

    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_segments(rest, path[i:]) for i in range(len(path) + 1))
    if not path:
        return False
    if head == "*" or (head.startswith("{") and head.endswith("}")):
        return _match_segments(rest, path[1:])
    return head == path[0] and _match_segments(rest, path[1:])


def path_matches(pattern: str, path: str) -> bool:
    return _match_segments(_segments(pattern), _segments(path))


# ---------------------------------------------------------------------------
# Reglas
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AccessRule:
    """
    roles vacío + public=False => cualquier usuario autenticado.
    public=True => pasa cualquiera (roles se ignora).
    """

    methods: frozenset[str]
    patterns: tuple[str, ...]
    roles: frozenset[Role] = frozenset()
    public: bool = False

    def matches(self, method: str, path: str) -> bool:
        if ANY_METHOD not in self.methods and method.upper() not in self.methods:
            return False
        return any(path_matches(pattern, path) for pattern in self.patterns)

    def permits(self, identity: Identity | None) -> Decision:
        if self.public:
            return Decision.GRANTED
        if identity is None:
            return Decision.UNAUTHENTICATED
        if not self.roles or identity.has_any_role(self.roles):
            return Decision.GRANTED
        return Decision.FORBIDDEN


def public(methods: Iterable[str], *patterns: str) -> AccessRule:
    return AccessRule(
        methods=frozenset(m.upper() for m in methods), patterns=patterns, public=True
    )


def has_any_role(methods: Iterable[str], roles: Iterable[Role], *patterns: str) -> AccessRule:
    return AccessRule(
        methods=frozenset(m.upper() for m in methods),
        patterns=patterns,
        roles=frozenset(roles),
    )


def authenticated(methods: Iterable[str], *patterns: str) -> AccessRule:
    return AccessRule(methods=frozenset(m.upper() for m in methods), patterns=patterns)


_READERS = (Role.USER, Role.OWNER, Role.ADMIN)
_MANAGERS = (Role.OWNER, Role.ADMIN)

DEFAULT_RULES: tuple[AccessRule, ...] = (
    public(
        ["GET"],
        "/healthz",
        "/metrics",
        "/docs",
        "/docs/**",
        "/redoc",
        "/openapi.json",
    ),
    public(["POST"], "/api/login"),
    public(["POST"], "/api/change-password"),
    public(["POST"], "/api/users/register"),
    has_any_role(["POST"], [Role.ADMIN], "/api/users"),
    has_any_role(["GET"], [Role.USER, Role.ADMIN], "/api/users", "/api/users/**"),
    has_any_role(["GET"], _READERS, "/api/restaurants", "/api/restaurants/**"),
    has_any_role(["POST", "PUT"], _MANAGERS, "/api/restaurants/**"),
    has_any_role(["DELETE"], [Role.ADMIN], "/api/restaurants/**"),
    has_any_role(["GET"], _READERS, "/api/menu-items", "/api/menu-items/**"),
    has_any_role(["POST", "PUT"], _MANAGERS, "/api/menu-items/**"),
    has_any_role(["DELETE"], [Role.ADMIN], "/api/menu-items/**"),
)

# R: en producción /metrics exige ADMIN; la regla va antes de la pública.
PRODUCTION_RULES: tuple[AccessRule, ...] = (
    has_any_role(["GET"], [Role.ADMIN], "/metrics"),
    *DEFAULT_RULES,
)


class AuthorizationPolicy:
    def __init__(self, rules: Sequence[AccessRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    @property
    def rules(self) -> tuple[AccessRule, ...]:
        return self._rules

    def find_rule(self, method: str, path: str) -> AccessRule | None:
        for rule in self._rules:
            if rule.matches(method, path):
                return rule
        return None

    def decide(self, method: str, path: str, identity: Identity | None) -> Decision:
        rule = self.find_rule(method, path)
        if rule is None:
            # R: fallback deny-by-default: solo autenticados.
            return Decision.GRANTED if identity is not None else Decision.UNAUTHENTICATED
        return rule.permits(identity)


def require_role(identity: Identity | None, allowed_roles: Iterable[Role]) -> Identity:
    """
    Check puntual any-of.

    Raises:
        Unauthenticated: identity ausente.
        Forbidden: ningún rol en común.
    """
    if identity is None:
        raise Unauthenticated()
    allowed = tuple(allowed_roles)
    if not identity.has_any_role(allowed):
        logger.warning(
            "RBAC denegó",
            extra={
                "subject": identity.subject,
                "required": [role.value for role in allowed],
            },
        )
        raise Forbidden()
    return identity


class AuthorizationMiddleware:
    """Aplica AuthorizationPolicy sobre la Identity instalada por el gate."""

    def __init__(self, app, policy: AuthorizationPolicy | None = None) -> None:
        self.app = app
        self._policy = policy or AuthorizationPolicy()

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        path = scope.get("path", "")
        identity = identity_from_scope(scope)
        decision = self._policy.decide(method, path, identity)

        if decision is Decision.GRANTED:
            await self.app(scope, receive, send)
            return

        request_id = (scope.get("state") or {}).get("request_id")
        if decision is Decision.UNAUTHENTICATED:
            record_auth_rejection(Unauthenticated.reason)
            await send_problem(
                send,
                status=401,
                code=ErrorCode.UNAUTHORIZED,
                detail=Unauthenticated.message,
                instance=path,
                request_id=request_id,
            )
            return

        record_auth_rejection(Forbidden.reason)
        logger.warning(
            "RBAC denegó",
            extra={"subject": identity.subject if identity else None},
        )
        await send_problem(
            send,
            status=403,
            code=ErrorCode.FORBIDDEN,
            detail=Forbidden.message,
            instance=path,
            request_id=request_id,
        )
