"""
Migration script for movie documents written by the legacy Node service.

Usage:
    python -m app.migrations.normalize_movie_documents

This will:
    - Rename the misspelled 'synopshis' field to 'synopsis' (when the
      document has no 'synopsis' yet; otherwise the legacy field is dropped)
    - Backfill 'title_key' (lower-cased title) for documents missing it
    - Ensure the title_key index exists

Safe to run multiple times.
"""
from pymongo.collection import Collection
from typing import Optional

from app.database import get_movie_collection
from app.models.indexes import create_performance_indexes
from app.models.movie import LEGACY_SYNOPSIS_FIELD, TITLE_KEY_FIELD, normalize_title


def normalize_movie_documents(collection: Optional[Collection] = None) -> dict:
    if collection is None:
        collection = get_movie_collection()

    print("=" * 60)
    print("Normalizing legacy movie documents...")
    print("=" * 60)

    # Rename only where the new field is absent so nothing gets clobbered
    renamed = collection.update_many(
        {LEGACY_SYNOPSIS_FIELD: {"$exists": True}, "synopsis": {"$exists": False}},
        {"$rename": {LEGACY_SYNOPSIS_FIELD: "synopsis"}},
    ).modified_count
    dropped = collection.update_many(
        {LEGACY_SYNOPSIS_FIELD: {"$exists": True}},
        {"$unset": {LEGACY_SYNOPSIS_FIELD: ""}},
    ).modified_count
    print(f"✅ synopsis: {renamed} renamed, {dropped} duplicate legacy fields removed")

    backfilled = 0
    for doc in list(collection.find({TITLE_KEY_FIELD: {"$exists": False}}, {"title": 1})):
        backfilled += collection.update_one(
            {"_id": doc["_id"]},
            {"$set": {TITLE_KEY_FIELD: normalize_title(doc.get("title"))}},
        ).modified_count
    print(f"✅ title_key backfilled on {backfilled} documents")

    create_performance_indexes(collection)

    return {"renamed": renamed, "dropped": dropped, "backfilled": backfilled}


if __name__ == "__main__":
    normalize_movie_documents()
