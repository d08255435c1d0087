"""
Movie search and detail pages backed by TMDb.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from jinja2 import TemplateError

from api.deps import AppSettings, Templates, TmdbSession
from movie_finder.integrations.tmdb.client import TmdbClientError, fetch_movie_details, search_movies
from movie_finder.models.movies import SearchResults

logger = logging.getLogger(__name__)

router = APIRouter(tags=["movies"])

SEARCH_FAILED_MESSAGE = "Failed to search movies"
DETAILS_FAILED_MESSAGE = "Failed to fetch movie details"
INVALID_MOVIE_ID_MESSAGE = "Invalid movie ID"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def extract_movie_id(movie_path: str) -> str | None:
    """
    Return the identifier from the part of a detail path after `/movie/`.

    Anything after the identifier is ignored. Returns None when the identifier
    segment is empty.
    """
    movie_id = movie_path.split("/")[0]
    return movie_id or None


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    settings: AppSettings,
    session: TmdbSession,
    templates: Templates,
    keyword: str = "",
) -> HTMLResponse:
    """Search form, plus the result list when `keyword` is given."""
    context = {"keyword": keyword, "movies": SearchResults(), "error": None}
    if not keyword:
        return templates.TemplateResponse(request, "home.html", context)

    try:
        context["movies"] = search_movies(
            keyword,
            api_key=settings.tmdb_api_key,
            session=session,
            base_url=settings.tmdb_base_url,
            timeout_seconds=settings.timeout_seconds,
        )
    except TmdbClientError as exc:
        logger.error(f"Error searching movies: {exc}")
        # The form is still shown; results are all-or-nothing.
        context["error"] = SEARCH_FAILED_MESSAGE
        return templates.TemplateResponse(request, "home.html", context, status_code=500)

    return templates.TemplateResponse(request, "home.html", context)


@router.get("/movie", response_class=PlainTextResponse, include_in_schema=False)
def movie_details_missing_id() -> PlainTextResponse:
    return PlainTextResponse(INVALID_MOVIE_ID_MESSAGE, status_code=400)


@router.get("/movie/{movie_path:path}", response_class=HTMLResponse)
def movie_details(
    request: Request,
    movie_path: str,
    settings: AppSettings,
    session: TmdbSession,
    templates: Templates,
):
    """Detail page for one TMDb movie id."""
    movie_id = extract_movie_id(movie_path)
    if movie_id is None:
        return PlainTextResponse(INVALID_MOVIE_ID_MESSAGE, status_code=400)

    try:
        movie = fetch_movie_details(
            movie_id,
            api_key=settings.tmdb_api_key,
            session=session,
            base_url=settings.tmdb_base_url,
            timeout_seconds=settings.timeout_seconds,
        )
    except TmdbClientError as exc:
        logger.error(f"Error fetching movie details: {exc}")
        return PlainTextResponse(DETAILS_FAILED_MESSAGE, status_code=500)

    try:
        return templates.TemplateResponse(request, "movie.html", {"movie": movie})
    except TemplateError as exc:
        logger.error(f"Error rendering movie template: {exc}")
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)
