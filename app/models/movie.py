"""
Movie document as stored in MongoDB.

    {
        "_id": ObjectId,
        "title": str,
        "title_key": str,      # lower-cased title, indexed, internal only
        "actors": str,
        "image": str,          # stored upload file name
        "synopsis": str,
        "categories": [str],
    }

Every public field may be null.
"""
from typing import Any, Dict, Optional

# Public fields replaced wholesale by create/update
MOVIE_FIELDS = ("title", "actors", "image", "synopsis", "categories")

TITLE_KEY_FIELD = "title_key"

# Field name written by the legacy service
LEGACY_SYNOPSIS_FIELD = "synopshis"


def normalize_title(title: Any) -> Optional[str]:
    """Lookup key for a title: case-insensitive exact matching by equality"""
    if title is None:
        return None
    # Legacy documents may hold numbers here
    return str(title).lower()


def title_filter(title: str) -> Dict[str, Any]:
    return {TITLE_KEY_FIELD: normalize_title(title)}


def build_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Full movie document from request data.
    Missing fields become None so an update never keeps stale values.
    """
    document = {field: data.get(field) for field in MOVIE_FIELDS}
    document[TITLE_KEY_FIELD] = normalize_title(document["title"])
    return document


def serialize_movie(document: Dict[str, Any]) -> Dict[str, Any]:
    """Wire representation: string _id, public fields only"""
    movie = {"_id": str(document["_id"])}
    for field in MOVIE_FIELDS:
        movie[field] = document.get(field)
    if movie["synopsis"] is None and LEGACY_SYNOPSIS_FIELD in document:
        movie["synopsis"] = document[LEGACY_SYNOPSIS_FIELD]
    return movie
