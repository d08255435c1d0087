from __future__ import annotations

import logging
from typing import Any, Mapping

import requests

from movie_finder.config import DEFAULT_TIMEOUT_SECONDS, TMDB_API_BASE_URL
from movie_finder.models.movies import MovieDetail, SearchResults

logger = logging.getLogger(__name__)

SEARCH_ENDPOINT = "/search/movie"
MOVIE_ENDPOINT = "/movie/"

_HEADERS = {
    "accept": "application/json",
    "user-agent": "movie-finder/0.1",
}


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def build_request_url(
    endpoint: str,
    params: Mapping[str, Any] | None = None,
    *,
    base_url: str = TMDB_API_BASE_URL,
) -> str:
    """
    Join the API base, an endpoint path and URL-encoded query params.

    Encoding is delegated to requests so the returned URL is exactly what goes on the wire.
    """

    url = f"{base_url.rstrip('/')}{endpoint}"
    prepared = requests.Request("GET", url, params=dict(params or {})).prepare()
    return str(prepared.url)


def _request_json(
    session: requests.Session,
    url: str,
    *,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> dict[str, Any]:
    try:
        resp = session.get(url, headers=_HEADERS, timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise TmdbClientError(f"TMDb request failed: {exc}") from exc

    with resp:
        if not 200 <= resp.status_code < 300:
            raise TmdbClientError(
                f"TMDb request failed with HTTP {resp.status_code}.",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:400],
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise TmdbClientError(
                "TMDb returned non-JSON response.",
                status_code=resp.status_code,
                body_snippet=(resp.text or "")[:400],
            ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).")
    return payload


def search_movies(
    keyword: str,
    *,
    api_key: str,
    session: requests.Session | None = None,
    base_url: str = TMDB_API_BASE_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> SearchResults:
    """
    Search TMDb movies by keyword via `/search/movie`.

    Only the first page is fetched. Results keep TMDb's ordering.
    """

    session = session or requests.Session()
    url = build_request_url(SEARCH_ENDPOINT, {"api_key": api_key, "query": keyword}, base_url=base_url)
    logger.debug(f"TMDb search request: query={keyword!r}")
    payload = _request_json(session, url, timeout_seconds=timeout_seconds)
    try:
        return SearchResults.from_payload(payload)
    except ValueError as exc:
        raise TmdbClientError(f"TMDb returned unexpected search payload: {exc}") from exc


def fetch_movie_details(
    movie_id: str,
    *,
    api_key: str,
    session: requests.Session | None = None,
    base_url: str = TMDB_API_BASE_URL,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> MovieDetail:
    """
    Fetch a movie details payload from `/movie/{id}`.

    The id is not validated here; TMDb decides whether it exists.
    """

    session = session or requests.Session()
    url = build_request_url(f"{MOVIE_ENDPOINT}{movie_id}", {"api_key": api_key}, base_url=base_url)
    logger.debug(f"TMDb movie details request: id={movie_id!r}")
    payload = _request_json(session, url, timeout_seconds=timeout_seconds)
    try:
        return MovieDetail.from_payload(payload)
    except ValueError as exc:
        raise TmdbClientError(f"TMDb returned unexpected movie payload: {exc}") from exc
