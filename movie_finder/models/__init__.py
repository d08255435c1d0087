"""
Domain models shared across the app and scripts.
"""

from movie_finder.models.movies import MovieDetail, SearchResultItem, SearchResults

__all__ = [
    "MovieDetail",
    "SearchResultItem",
    "SearchResults",
]
