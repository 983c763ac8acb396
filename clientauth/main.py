# clientauth/main.py

import logging
from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from contextlib import asynccontextmanager

from clientauth.adapters.configuration.config import settings
from clientauth.adapters.outbound.persistence.database import create_all, engine

# ─── UNIQUE LOGGING CONFIGURATION ─────────────────────────────────────────────────
level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
logging.basicConfig(
    level=level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


# ────────────────────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    # Startup
    logger.info("Application starting up...")

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_all()

    yield

    # Shutdown
    logger.info("Application shutting down...")
    service = app.dependency_overrides.get(
        get_client_authorization_service, get_client_authorization_service
    )()
    await service.drain()
    await engine.dispose()


# Create FastAPI instance
app = FastAPI(
    title="Client Authorizations",
    description="Authorizations granted by users to client applications",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Middlewares
from clientauth.shared.middleware import (
    AsyncExceptionMiddleware,
    AsyncRequestLoggingMiddleware,
)

app.add_middleware(AsyncRequestLoggingMiddleware)
app.add_middleware(AsyncExceptionMiddleware)

# Routers
from clientauth.adapters.inbound.api.deps import get_client_authorization_service
from clientauth.adapters.inbound.api.v1.router import api_router as api_v1_router

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def redirect_to_docs():
    return RedirectResponse(url="/docs")
