"""FastAPI application for the Tutorials server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

try:
    from fastapi import FastAPI
except ImportError:
    raise ImportError(
        "FastAPI dependencies are required for the Tutorials server. "
        "Install them with: pip install tutorials[server]"
    )

from tutorials.server.config import settings
from tutorials.server.logging_config import setup_logging
from tutorials.server.middleware import install_middleware
from tutorials.server.routes.tutorials import router as tutorials_router
from tutorials.server.state import get_store

setup_logging()
logger = logging.getLogger(__name__)

API_TITLE = "Tutorial Management API"
API_VERSION = "1.1.1"
API_DESCRIPTION = "API describes endpoints to manage tutorials."


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the process-wide store before serving requests."""
    store = get_store()
    logger.info("Serving %d tutorials", store.count())
    yield


app = FastAPI(
    title=API_TITLE,
    version=API_VERSION,
    description=API_DESCRIPTION,
    terms_of_service="https://tutorials.example.com/terms",
    contact={
        "name": "Tutorials API admin",
        "email": "admin@tutorials.example.com",
        "url": "https://tutorials.example.com",
    },
    license_info={
        "name": "GNU General Public License v3.0",
        "url": "https://www.gnu.org/licenses/gpl-3.0.html",
    },
    servers=[
        {"url": settings.dev_url, "description": "Server URL in Development environment"},
        {"url": settings.prod_url, "description": "Server URL in Production environment"},
    ],
    lifespan=lifespan,
)

app.include_router(tutorials_router)

# Install middleware and error handlers
install_middleware(app)


# ── Health ─────────────────────────────────────────────────────────


@app.get("/health", tags=["health"])
async def health() -> dict:
    return {"status": "ok"}
