"""
muu space — FastAPI application entry point.
Lifespan: create DB tables → verify connectivity → report provider config.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from muu.config import settings
from muu.database import check_db_connectivity, engine
from muu.models import Base
from muu.routers import health, recent_self, stories, talk
from muu.routers.health import VERSION

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Create all tables (idempotent — IF NOT EXISTS).
    2. Verify DB connectivity.
    3. Warn if the provider key is missing; /api/talk will answer 500 until it is set.
    """
    logger.info("Starting muu space (env=%s)", settings.app_env)

    # Step 1: create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified.")

    # Step 2: connectivity check
    ok = await check_db_connectivity()
    if not ok:
        logger.error("Database connectivity check FAILED at startup.")
    else:
        logger.info("Database connectivity verified.")

    # Step 3: provider config
    if not settings.groq_api_key:
        logger.warning("GROQ_API_KEY is not set — talk requests will fail.")
    else:
        logger.info("Talk provider: %s (%s)", settings.groq_model, settings.groq_base_url)

    yield

    logger.info("Shutting down muu space.")
    await engine.dispose()


app = FastAPI(
    title="muu space",
    description="Companion chat, stories and recent-self walls for muu space.",
    version=VERSION,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(talk.router)
app.include_router(stories.router)
app.include_router(recent_self.router)


# ── Global exception handler ─────────────────────────────────────────────────

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"error": "internal error", "detail": str(exc)},
    )
