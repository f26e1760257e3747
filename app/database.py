from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from app.config import Config
import logging

logger = logging.getLogger(__name__)

# MongoClient keeps its own connection pool and is safe to share across threads.
# It connects lazily, so creating it at import time does not touch the server.
client: MongoClient = MongoClient(
    Config.MONGODB_URI,
    serverSelectionTimeoutMS=Config.MONGODB_TIMEOUT_MS,
    appname="movie-catalog-api",
)


def get_database():
    return client[Config.MONGODB_DB]


# Dependency for FastAPI routes
def get_movie_collection() -> Collection:
    """
    Movie collection dependency for FastAPI.
    Tests override this with an in-memory collection.

    Usage:
        @router.get("/endpoint")
        def endpoint(collection: Collection = Depends(get_movie_collection)):
            # Use collection here
    """
    return get_database()[Config.MOVIES_COLLECTION]


def ping_database(database) -> bool:
    """Check that the server answers; used by the health endpoint"""
    try:
        database.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"Database ping failed: {e}")
        return False


def close_client():
    client.close()
    logger.debug("MongoDB client closed")
