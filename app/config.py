import os
from dotenv import load_dotenv
from urllib.parse import urlparse

load_dotenv()


def _database_from_uri(uri: str, default: str) -> str:
    """Database name from the URI path, e.g. mongodb://host/movie-catalog"""
    return urlparse(uri).path.lstrip("/") or default


class Config:
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    MONGODB_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017/movie-catalog")
    MONGODB_DB = os.getenv("MONGODB_DB") or _database_from_uri(MONGODB_URI, "movie-catalog")
    MOVIES_COLLECTION = os.getenv("MOVIES_COLLECTION", "movies")
    MONGODB_TIMEOUT_MS = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))
    # "false" skips index creation at startup
    ENSURE_INDEXES_ON_STARTUP = os.getenv("ENSURE_INDEXES_ON_STARTUP", "true").lower() == "true"

    # Only one browser origin may call the API
    ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "http://localhost:4200")

    UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads")
    UPLOAD_URL_PREFIX = "/uploads"
