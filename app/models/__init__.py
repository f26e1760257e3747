"""
Document helpers for the movies collection
"""
from app.models.movie import (
    MOVIE_FIELDS,
    TITLE_KEY_FIELD,
    LEGACY_SYNOPSIS_FIELD,
    normalize_title,
    title_filter,
    build_document,
    serialize_movie,
)

__all__ = [
    "MOVIE_FIELDS",
    "TITLE_KEY_FIELD",
    "LEGACY_SYNOPSIS_FIELD",
    "normalize_title",
    "title_filter",
    "build_document",
    "serialize_movie",
]
