"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI application (create_app) with metadata
  - Configure middleware (CORS, request context, body limit, route gate)
  - Mount auth, page and AI routers
  - Register exception handlers (RFC 7807 + redirect signal)
  - Expose the health check

Collaborators:
  - crosscutting.middleware: RequestContextMiddleware, BodyLimitMiddleware
  - identity.route_guard.RoleRouteMiddleware
  - api.auth_routes / api.page_routes / api.ai_routes
  - api.exception_handlers.register_exception_handlers

Notes:
  - Starlette runs the last added middleware first:
    CORS -> RequestContext -> BodyLimit -> RoleRoute -> routes
  - Settings are validated at startup (lifespan); CORS falls back to the
    dev origin when settings cannot be loaded at import time
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import BodyLimitMiddleware, RequestContextMiddleware
from ..identity.route_guard import RoleRouteMiddleware
from .ai_routes import router as ai_router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .match_routes import router as match_router
from .page_routes import router as page_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Settings validation fails fast here."""
    settings = get_settings()

    logger.info(
        "Talentgate starting up",
        extra={
            "app_env": settings.app_env,
            "fake_llm": settings.fake_llm,
            "fake_embeddings": settings.fake_embeddings,
            "sign_in_path": settings.sign_in_path,
            "unauthorized_redirect_path": settings.unauthorized_redirect_path or None,
        },
    )
    yield
    logger.info("Talentgate shutting down")


def _get_cors_settings() -> tuple[list[str], bool]:
    try:
        settings = get_settings()
        return settings.get_allowed_origins_list(), settings.cors_allow_credentials
    except Exception as exc:
        logger.warning(
            "settings unavailable for CORS, using dev defaults",
            extra={"error_type": type(exc).__name__},
        )
        return ["http://localhost:3000"], False


def create_app() -> FastAPI:
    app = FastAPI(
        title="Talentgate API",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Sign-up / sign-in per role (JWT)"},
            {"name": "pages", "description": "Role-gated pages"},
            {"name": "ai", "description": "Embeddings, resume extraction, bios"},
            {"name": "matching", "description": "Talent / opportunity matching"},
        ],
    )

    app.add_middleware(RoleRouteMiddleware)
    app.add_middleware(BodyLimitMiddleware)
    app.add_middleware(RequestContextMiddleware)

    allowed_origins, allow_credentials = _get_cors_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

    app.include_router(page_router)
    app.include_router(auth_router)
    app.include_router(ai_router)
    app.include_router(match_router)

    register_exception_handlers(app)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"ok": True, "version": __version__}

    return app


app = create_app()
