"""
Application entry point.

Creates the FastAPI application and wires together:
- Configuration (one frozen tree, injected through ``app.state``)
- Logging configuration and process hooks
- Security middleware (headers, CORS, rate limiting)
- Error handlers (envelope error stage for errors outside route groups)
- The route table from ``server.urls.web_routers``, one router kind at a time

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from kiosk_api import __version__
from kiosk_api.core.config import ConfigStore, get_configuration
from kiosk_api.infrastructure.database import Database
from kiosk_api.interfaces.health import router as health_router
from kiosk_api.interfaces.routing import mount_route_table
from kiosk_api.shared.errors.codes import DEFAULT_ERROR_TABLE
from kiosk_api.shared.errors.handlers import register_error_handlers
from kiosk_api.shared.logging import configure_logging
from kiosk_api.shared.process_hooks import install_loop_hook, install_process_hooks
from kiosk_api.shared.security.headers import SecurityHeadersMiddleware
from kiosk_api.shared.security.rate_limiting import build_limiter, rate_limit_exceeded_handler
from kiosk_api.shared.utils import to_boolean

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: install the loop hook and open the database."""
    install_loop_hook()

    database: Database = app.state.database
    if app.state.configuration.get("database.sql.sync", False):
        database.create_all()
    database.verify()

    yield

    database.dispose()


def _configure_logging(configuration: ConfigStore) -> None:
    log = configuration.get("log")
    configure_logging(
        level=log["level"],
        fmt=log["format"],
        date_format=log["date_format"],
        log_file=log["file"] or None,
        max_bytes=log["max_bytes"],
        backups=log["backups"],
    )


def _as_list(value) -> list:
    """Return a config value that may be one string or a sequence as a list."""
    if not value:
        return []
    return [value] if isinstance(value, str) else list(value)


def _add_default_redirect(app: FastAPI, target: str) -> None:
    @app.get("/", include_in_schema=False)
    def redirect_to_default() -> RedirectResponse:
        return RedirectResponse(target)


def create_app(configuration: ConfigStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        configuration: Configuration to build the app from. Defaults to
            the process-wide configuration.

    Returns:
        A fully configured FastAPI application instance.
    """
    configuration = configuration or get_configuration()
    _configure_logging(configuration)
    install_process_hooks()

    sandbox = bool(configuration.get("server.isSandbox", False))
    app = FastAPI(
        title=configuration.get("server.name"),
        version=__version__,
        docs_url="/docs" if sandbox else None,
        redoc_url="/redoc" if sandbox else None,
        lifespan=lifespan,
    )
    app.state.configuration = configuration
    app.state.error_table = DEFAULT_ERROR_TABLE
    app.state.database = Database.from_configuration(configuration)

    # --- Rate Limiting ---
    app.state.limiter = build_limiter(
        default_limit=configuration.get("server.rate_limit.default", "60/minute"),
        enabled=bool(configuration.get("server.rate_limit.enabled", True)),
    )
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # --- Security Middleware ---
    cors = configuration.get("server.cors")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_as_list(cors["origin"]),
        allow_credentials=bool(cors["credentials"]),
        allow_methods=_as_list(cors["methods"]),
        allow_headers=["*"],
        expose_headers=_as_list(cors["exposedHeaders"]),
    )
    app.add_middleware(
        SecurityHeadersMiddleware,
        https=bool(to_boolean(configuration.get("server.isHttps"), default=False)),
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    mount_route_table(app, configuration.get("server.urls.web_routers", ()))

    default_path = configuration.get("server.urls.default", "/")
    if default_path and default_path != "/":
        _add_default_redirect(app, default_path)

    logger.info("%s %s configured (sandbox=%s)", app.title, __version__, sandbox)
    return app
