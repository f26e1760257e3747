import os
import shutil
import tempfile
from pathlib import Path

import mongomock
import pytest
from fastapi.testclient import TestClient

# Must be set before the app reads its config
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="movie-catalog-uploads-")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:4200")
os.environ["ENSURE_INDEXES_ON_STARTUP"] = "false"

from app.config import Config  # noqa: E402
from app.database import get_movie_collection  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
def movie_collection():
    """Provide a clean in-memory movies collection for each test."""
    client = mongomock.MongoClient()
    collection = client["movie-catalog-test"]["movies"]
    try:
        yield collection
    finally:
        client.close()


@pytest.fixture
def upload_dir():
    """Upload directory served under /uploads, emptied after each test."""
    path = Path(Config.UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    yield path
    for entry in path.iterdir():
        if entry.is_dir():
            shutil.rmtree(entry)
        else:
            entry.unlink()


@pytest.fixture
def client(movie_collection, upload_dir):
    """FastAPI test client with the collection dependency overridden."""
    app.dependency_overrides[get_movie_collection] = lambda: movie_collection

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_movie_collection, None)


@pytest.fixture
def inception():
    return {
        "title": "Inception",
        "actors": "Leonardo DiCaprio",
        "synopsis": "A thief who steals secrets via dreams",
        "image": "inception.jpg",
        "categories": ["Sci-Fi", "Thriller"],
    }
