"""
Dependency injection for configuration, the TMDb HTTP session and templates.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Iterator

import requests
from fastapi import Depends
from fastapi.templating import Jinja2Templates

from movie_finder.config import Settings, load_settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_settings() -> Settings:
    """
    Returns the process-wide, read-only settings.

    Raises ConfigurationError if TMDB_API_KEY is not set.
    """
    return load_settings()


def get_tmdb_session() -> Iterator[requests.Session]:
    """
    Yields a requests session scoped to one inbound request.

    The session (and its pooled connections) is closed once the response is sent.
    """
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


def get_templates() -> Jinja2Templates:
    return templates


# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
TmdbSession = Annotated[requests.Session, Depends(get_tmdb_session)]
Templates = Annotated[Jinja2Templates, Depends(get_templates)]
