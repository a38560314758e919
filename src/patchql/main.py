# src/patchql/main.py
"""Main entry point for the patchql application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from patchql.api.graphql import graphql_router
from patchql.api.v1 import posts_router, threads_router
from patchql.core.settings import settings
from patchql.db.pool import close_connection_pool, get_connection_pool

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="patchql",
    description="Thread search and cursor pagination over an append-only message log",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(threads_router, prefix="/api/v1")
app.include_router(posts_router, prefix="/api/v1")
app.include_router(graphql_router, prefix="/graphql")


@app.on_event("startup")
async def on_startup() -> None:
    pool = get_connection_pool()
    logger.info(
        "%s %s started with %d connection handles",
        settings.app_name,
        settings.app_version,
        pool.size,
    )


@app.on_event("shutdown")
async def on_shutdown() -> None:
    close_connection_pool()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "graphql": "/graphql",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("patchql.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
