"""FastAPI application factory."""

import base64
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config.settings import settings
from takehome.api.routes import router
from takehome.calculators.tax_data import load_jurisdiction
from takehome.db.session import close_pool, get_pool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: load the jurisdiction table, init DB pool. Shutdown: close pool."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up...")

    app.state.jurisdiction = load_jurisdiction(settings.tax_year, settings.jurisdiction_file)
    app.state.pool = await get_pool()

    yield

    logger.info("Shutting down...")
    await close_pool()


UNAUTHORIZED = Response(
    content="Unauthorized",
    status_code=401,
    headers={"WWW-Authenticate": "Basic"},
)


AUTH_USERNAME = settings.auth_username.encode()
AUTH_PASSWORD = settings.auth_password.encode()


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Enforce HTTP Basic Auth on all requests."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        auth = request.headers.get("Authorization")
        if auth and auth.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth[6:]).decode()
                username, password = decoded.split(":", 1)
            except ValueError:
                return UNAUTHORIZED
            if secrets.compare_digest(username.encode(), AUTH_USERNAME) and secrets.compare_digest(
                password.encode(), AUTH_PASSWORD
            ):
                return await call_next(request)
        return UNAUTHORIZED


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="NZ Take-Home Pay", lifespan=lifespan)
    if settings.auth_enabled:
        app.add_middleware(BasicAuthMiddleware)
    else:
        logger.warning("AUTH_USERNAME/AUTH_PASSWORD not set; API is unauthenticated")
    app.include_router(router)
    return app
