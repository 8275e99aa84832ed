# src/startup_feed/main.py
"""Main entry point for the Startup Feed application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from startup_feed.api.v1 import (
    admin_router,
    comments_router,
    posts_router,
    system_router,
    users_router,
)
from startup_feed.core.errors import FeedError
from startup_feed.core.settings import settings
from startup_feed.services.feed import seeder_for
from startup_feed.storage import RecordStore, determine_mode

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Community feed API: posts, comments, likes and member tiers",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(system_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
app.include_router(posts_router, prefix="/api")
app.include_router(comments_router, prefix="/api")


@app.exception_handler(FeedError)
async def handle_feed_error(request: Request, exc: FeedError) -> JSONResponse:
    """Report domain errors with the status each one carries."""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.detail, exc_info=exc
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    selection = await determine_mode(settings)
    app.state.store = selection.store
    app.state.seeder = seeder_for(settings)
    logger.info("Storage mode: %s", selection.mode.value)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    store: RecordStore | None = getattr(app.state, "store", None)
    if store is not None:
        await store.close()


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("startup_feed.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
