"""
Database Performance Indexes
============================
Creates indexes for frequently queried fields of the movies collection.

Usage:
    python -m app.models.indexes
    python -m app.models.indexes --drop

This module creates indexes to optimize:
- Title lookups (get / update / delete by title all query title_key)

Also called on application startup. Run this after initial deployment
against an existing database.
"""
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from typing import Optional
import logging

from app.database import get_movie_collection
from app.models.movie import TITLE_KEY_FIELD

logger = logging.getLogger(__name__)

# Titles are intentionally not unique: duplicates are allowed.
INDEXES = [
    {
        "name": "idx_movies_title_key",
        "keys": [(TITLE_KEY_FIELD, ASCENDING)],
        "purpose": "Case-insensitive exact title lookups",
    },
]


def index_exists(collection: Collection, index_name: str) -> bool:
    """Check if an index already exists"""
    return index_name in collection.index_information()


def create_performance_indexes(collection: Optional[Collection] = None) -> dict:
    """
    Create indexes to speed up common queries.
    This function is idempotent - safe to run multiple times.
    """
    if collection is None:
        collection = get_movie_collection()

    created_count = 0
    skipped_count = 0
    error_count = 0

    for idx in INDEXES:
        try:
            if index_exists(collection, idx["name"]):
                logger.info(f"✓ Index {idx['name']} already exists - {idx['purpose']}")
                skipped_count += 1
            else:
                collection.create_index(idx["keys"], name=idx["name"])
                logger.info(f"✓ Created index {idx['name']} - {idx['purpose']}")
                created_count += 1
        except PyMongoError as e:
            error_msg = str(e).split('\n')[0]
            logger.error(f"✗ Error creating index {idx['name']}: {error_msg}")
            error_count += 1

    if error_count:
        logger.warning(f"⚠️ Index creation completed with {error_count} errors")

    return {
        "created": created_count,
        "skipped": skipped_count,
        "errors": error_count,
        "total": len(INDEXES)
    }


def drop_all_custom_indexes(collection: Optional[Collection] = None):
    """
    Drop all custom indexes (for testing/debugging).
    WARNING: Use with caution! Title lookups become collection scans.
    """
    if collection is None:
        collection = get_movie_collection()

    logger.warning("⚠️ Dropping all custom indexes...")
    for idx in INDEXES:
        if not index_exists(collection, idx["name"]):
            continue
        try:
            collection.drop_index(idx["name"])
            logger.info(f"✓ Dropped index {idx['name']}")
        except PyMongoError as e:
            logger.error(f"✗ Error dropping index {idx['name']}: {str(e)}")

    logger.info("✅ All indexes dropped")


if __name__ == "__main__":
    import argparse

    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Manage movies collection indexes")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop all custom indexes instead of creating them"
    )

    args = parser.parse_args()

    if args.drop:
        drop_all_custom_indexes()
    else:
        create_performance_indexes()
