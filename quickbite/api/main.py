"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with metadata and lifespan
  - Configure the middleware stack (CORS, request context, auth gate, RBAC)
  - Mount the resource routers under /api
  - Expose health check and metrics endpoints

Collaborators:
  - RequestContextMiddleware: request id, logging context, HTTP metrics
  - AuthenticationGate: parses the Authorization header before routing
  - AuthorizationMiddleware: route table RBAC over the installed identity
  - container: use case / repository factories

Notes:
  - Starlette runs the LAST added middleware first. Effective order:
    CORS -> RequestContext -> AuthenticationGate -> Authorization -> routes
  - The pool is only opened when repository_backend=postgres
  - /healthz follows Kubernetes health check convention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from ..container import get_authorization_policy, get_token_codec
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger, setup_logger
from ..crosscutting.metrics import get_metrics_response
from ..crosscutting.middleware import RequestContextMiddleware
from ..identity.gate import AuthenticationGate
from ..identity.policy import AuthorizationMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from .exception_handlers import register_exception_handlers
from .routers.auth import router as auth_router
from .routers.menu_items import router as menu_items_router
from .routers.restaurants import router as restaurants_router
from .routers.users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the pool for the postgres backend."""
    settings = get_settings()
    uses_postgres = settings.repository_backend == "postgres"

    if uses_postgres:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )

    logger.info(
        "QuickBite API starting up",
        extra={
            "app_env": settings.app_env,
            "repository_backend": settings.repository_backend,
            "db_pool_min": settings.db_pool_min_size,
            "db_pool_max": settings.db_pool_max_size,
        },
    )
    try:
        yield
    finally:
        if uses_postgres:
            close_pool()
        logger.info("QuickBite API shutting down")


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logger(level=settings.log_level, use_json=settings.log_json)

    app = FastAPI(
        title="QuickBite API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Login and password change (JWT)"},
            {"name": "users", "description": "User registration and administration"},
            {"name": "restaurants", "description": "Restaurant catalogue"},
            {"name": "menu-items", "description": "Menu items per restaurant"},
        ],
    )

    # R: Innermost first.
    app.add_middleware(AuthorizationMiddleware, policy=get_authorization_policy())
    app.add_middleware(AuthenticationGate, codec_factory=get_token_codec)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(restaurants_router)
    app.include_router(menu_items_router)

    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"ok": True, "repository_backend": settings.repository_backend}

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        body, content_type = get_metrics_response()
        return Response(content=body, media_type=content_type)

    return app


# R: ASGI entrypoint (uvicorn quickbite.api.main:app)
app = create_app()
