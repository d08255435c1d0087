from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _str_field(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Expected string for {key!r}, got {type(value).__name__}.")
    return value


def _int_field(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    # bool is an int subclass; TMDb never sends one for an id.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Expected integer for {key!r}, got {type(value).__name__}.")
    return value


@dataclass(frozen=True)
class SearchResultItem:
    """
    One row of a `/search/movie` response.

    `release_date` is passed through as TMDb sends it (usually `YYYY-MM-DD`, may be empty).
    """

    id: int = 0
    title: str = ""
    release_date: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SearchResultItem:
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ValueError("Search result entry is not an object.")
        return cls(
            id=_int_field(payload, "id"),
            title=_str_field(payload, "title"),
            release_date=_str_field(payload, "release_date"),
        )


@dataclass(frozen=True)
class SearchResults:
    results: tuple[SearchResultItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> SearchResults:
        raw = payload.get("results")
        if raw is None:
            return cls()
        if not isinstance(raw, list):
            raise ValueError("Expected list for 'results'.")
        # Order is kept exactly as returned; no sorting or de-duplication.
        return cls(results=tuple(SearchResultItem.from_payload(item) for item in raw))

    def __iter__(self):
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class MovieDetail:
    title: str = ""
    overview: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> MovieDetail:
        return cls(
            title=_str_field(payload, "title"),
            overview=_str_field(payload, "overview"),
        )
