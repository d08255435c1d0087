from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from movie_finder.integrations.tmdb import client as mod
from movie_finder.models.movies import MovieDetail, SearchResultItem

FIXTURES = Path(__file__).resolve().parents[2] / "fixtures" / "tmdb"


def _response(body: bytes | str, *, status_code: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp.encoding = "utf-8"
    resp.raw = MagicMock()
    return resp


class _FakeSession:
    def __init__(self, response: requests.Response | None = None, *, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs):  # noqa: ANN003
        self.calls.append((url, kwargs))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_search_movies_decodes_results_in_remote_order() -> None:
    session = _FakeSession(_response((FIXTURES / "search_movie_sample.json").read_text(encoding="utf-8")))

    results = mod.search_movies("inception", api_key="k", session=session)

    assert [item.id for item in results] == [27205, 64956, 613092]
    assert results.results[0] == SearchResultItem(id=27205, title="Inception", release_date="2010-07-15")
    assert results.results[2].release_date == ""


def test_search_movies_sends_api_key_and_query_to_search_endpoint() -> None:
    session = _FakeSession(_response('{"results": []}'))

    mod.search_movies("the matrix", api_key="secret", session=session, timeout_seconds=3.5)

    url, kwargs = session.calls[0]
    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://api.themoviedb.org/3/search/movie"
    assert parse_qs(parts.query) == {"api_key": ["secret"], "query": ["the matrix"]}
    assert kwargs["timeout"] == 3.5
    assert kwargs["headers"]["accept"] == "application/json"


@pytest.mark.parametrize("keyword", ["sci-fi: a|b", "Amélie & co?", "50% #1 / 2+2=4"])
def test_build_request_url_round_trips_reserved_characters(keyword: str) -> None:
    url = mod.build_request_url(mod.SEARCH_ENDPOINT, {"api_key": "k", "query": keyword})

    query = urlsplit(url).query
    assert "|" not in query
    assert " " not in query
    assert parse_qs(query)["query"] == [keyword]


def test_build_request_url_honours_custom_base_url() -> None:
    url = mod.build_request_url("/movie/12", {"api_key": "k"}, base_url="http://localhost:9000/3/")
    assert url == "http://localhost:9000/3/movie/12?api_key=k"


def test_fetch_movie_details_inserts_id_into_path() -> None:
    session = _FakeSession(_response((FIXTURES / "movie_details_sample.json").read_text(encoding="utf-8")))

    movie = mod.fetch_movie_details("27205", api_key="k", session=session)

    assert movie == MovieDetail(
        title="Inception",
        overview="A thief who steals corporate secrets through the use of dream-sharing technology.",
    )
    url, _ = session.calls[0]
    assert urlsplit(url).path == "/3/movie/27205"
    assert parse_qs(urlsplit(url).query) == {"api_key": ["k"]}


def test_fetch_movie_details_does_not_validate_identifier() -> None:
    session = _FakeSession(_response("{}"))

    movie = mod.fetch_movie_details("not-a-number", api_key="k", session=session)

    assert movie == MovieDetail(title="", overview="")
    assert urlsplit(session.calls[0][0]).path == "/3/movie/not-a-number"


def test_missing_and_null_fields_take_zero_values() -> None:
    session = _FakeSession(_response('{"results": [{"title": null}, {"id": 7}], "extra": true}'))

    results = mod.search_movies("x", api_key="k", session=session)

    assert list(results) == [SearchResultItem(id=0, title="", release_date=""), SearchResultItem(id=7)]


def test_non_success_status_raises_before_decoding() -> None:
    body = json.dumps({"success": False, "status_code": 34, "status_message": "The resource could not be found."})
    session = _FakeSession(_response(body, status_code=404))

    with pytest.raises(mod.TmdbClientError) as excinfo:
        mod.fetch_movie_details("0", api_key="k", session=session)

    assert excinfo.value.status_code == 404
    assert "could not be found" in (excinfo.value.body_snippet or "")


def test_non_json_body_raises() -> None:
    session = _FakeSession(_response("<html>gateway timeout</html>"))

    with pytest.raises(mod.TmdbClientError, match="non-JSON"):
        mod.search_movies("x", api_key="k", session=session)


def test_non_object_json_raises() -> None:
    session = _FakeSession(_response("[1, 2, 3]"))

    with pytest.raises(mod.TmdbClientError, match="not an object"):
        mod.search_movies("x", api_key="k", session=session)


def test_wrongly_typed_fields_raise() -> None:
    session = _FakeSession(_response('{"results": [{"id": "27205", "title": "Inception"}]}'))

    with pytest.raises(mod.TmdbClientError, match="unexpected search payload"):
        mod.search_movies("x", api_key="k", session=session)


def test_network_error_is_wrapped() -> None:
    session = _FakeSession(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(mod.TmdbClientError, match="connection refused") as excinfo:
        mod.search_movies("x", api_key="k", session=session)

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_timeout_is_wrapped() -> None:
    session = _FakeSession(exc=requests.Timeout("read timed out"))

    with pytest.raises(mod.TmdbClientError):
        mod.fetch_movie_details("1", api_key="k", session=session)


@pytest.mark.parametrize(
    ("body", "status_code"),
    [
        ('{"title": "Inception", "overview": ""}', 200),
        ("not json", 200),
        ('{"status_message": "Invalid API key"}', 401),
    ],
)
def test_response_is_released_on_every_outcome(body: str, status_code: int) -> None:
    resp = _response(body, status_code=status_code)
    session = _FakeSession(resp)

    try:
        mod.fetch_movie_details("1", api_key="k", session=session)
    except mod.TmdbClientError:
        pass

    resp.raw.release_conn.assert_called_once()
