from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from typing import List, Dict, Any
import logging

from app.models.movie import LEGACY_SYNOPSIS_FIELD, build_document, serialize_movie, title_filter
from app.schemas.movie import MovieCreate, MovieUpdate
from app.utils.exceptions import MovieNotFound, StoreFailure

logger = logging.getLogger(__name__)


def _require_title(title: str):
    # An empty path title must not address movies stored with an empty title
    if not title:
        raise MovieNotFound()


class MovieService:
    """
    Service for movie catalog operations.

    Movies are addressed by title. Lookups compare the lower-cased title
    against the indexed title_key field, so matching is exact and
    case-insensitive with no pattern semantics.
    """

    @staticmethod
    def list_movies(collection: Collection) -> List[Dict[str, Any]]:
        """All movies in store order"""
        try:
            return [serialize_movie(doc) for doc in collection.find()]
        except PyMongoError as e:
            logger.error(f"Failed to list movies: {e}", exc_info=True)
            raise StoreFailure("Error retrieving movies") from e

    @staticmethod
    def get_movie(collection: Collection, title: str) -> Dict[str, Any]:
        """First movie whose title matches, ignoring case"""
        _require_title(title)
        try:
            document = collection.find_one(title_filter(title))
        except PyMongoError as e:
            logger.error(f"Failed to get movie '{title}': {e}", exc_info=True)
            raise StoreFailure("Error retrieving movie") from e

        if document is None:
            raise MovieNotFound()
        return serialize_movie(document)

    @staticmethod
    def create_movie(collection: Collection, movie_data: MovieCreate) -> Dict[str, Any]:
        """Insert a new movie. Duplicate titles are allowed."""
        document = build_document(movie_data.model_dump())
        try:
            result = collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to add movie '{movie_data.title}': {e}", exc_info=True)
            raise StoreFailure("Error adding movie") from e

        document["_id"] = result.inserted_id
        logger.info(f"Movie created: '{movie_data.title}' ({result.inserted_id})")
        return serialize_movie(document)

    @staticmethod
    def update_movie(collection: Collection, title: str, movie_data: MovieUpdate) -> Dict[str, Any]:
        """
        Replace all public fields of the first movie matching `title`.
        Fields missing from `movie_data` are overwritten with None.
        """
        _require_title(title)
        try:
            document = collection.find_one_and_update(
                title_filter(title),
                {
                    "$set": build_document(movie_data.model_dump()),
                    "$unset": {LEGACY_SYNOPSIS_FIELD: ""},
                },
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Failed to update movie '{title}': {e}", exc_info=True)
            raise StoreFailure("Error updating movie") from e

        if document is None:
            raise MovieNotFound()
        logger.info(f"Movie updated: '{title}' -> '{document.get('title')}'")
        return serialize_movie(document)

    @staticmethod
    def delete_movie(collection: Collection, title: str) -> int:
        """
        Delete every movie matching `title`.
        Returns the number of deleted documents (always > 0).
        """
        _require_title(title)
        try:
            result = collection.delete_many(title_filter(title))
        except PyMongoError as e:
            logger.error(f"Failed to delete movie '{title}': {e}", exc_info=True)
            raise StoreFailure("Error deleting movie") from e

        if result.deleted_count == 0:
            raise MovieNotFound()
        logger.info(f"Movie deleted: '{title}' ({result.deleted_count} document(s))")
        return result.deleted_count
