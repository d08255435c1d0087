"""
Movie Finder - FastAPI application.

Provides endpoints for:
- Searching TMDb movies by keyword (`/`)
- Viewing a single movie's details (`/movie/{id}`)
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.routers import movies
from movie_finder.config import load_settings
from movie_finder.utils.env import load_env

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: refuse to serve without a TMDb credential.
    load_env()
    settings = load_settings()
    logger.info(f"Starting up Movie Finder (TMDb base {settings.tmdb_base_url})...")
    yield
    # Shutdown
    logger.info("Shutting down Movie Finder...")


app = FastAPI(
    title="Movie Finder",
    description="Search TMDb movies and view their details",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(movies.router)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
