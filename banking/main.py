"""
FastAPI application factory and entry point.

This module creates and configures the FastAPI application:
  1. Lifespan manager — logging setup, table creation, engine disposal
  2. CORS middleware — allows frontend origins to make cross-origin requests
  3. Exception handlers — maps domain error kinds to HTTP responses
  4. Router registration — mounts all API endpoint groups

Running locally:
    uvicorn banking.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import banking.models  # noqa: F401  (registers every table on Base.metadata)
from banking.config import settings
from banking.database import engine, Base
from banking.error_handlers import register_exception_handlers
from banking.logging import configure_logging
from banking.routers import accounts, auth, customers

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
      Configures logging and creates missing tables. In production, schema
      changes belong in versioned migrations instead.

    Shutdown:
      Disposes of the database engine, closing all pooled connections.
    """
    # --- Startup ---
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("server_started", app=settings.APP_NAME, version=settings.APP_VERSION)
    yield
    # --- Shutdown ---
    await engine.dispose()
    logger.info("server_stopped")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Banking REST API with customer and account management",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(customers.router, prefix="/customers", tags=["Customers"])
app.include_router(accounts.router, prefix="/customers", tags=["Accounts"])


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness check for load balancers and orchestrators."""
    return {"status": "ok", "version": settings.APP_VERSION}
