from fastapi.testclient import TestClient

from app import main
from app.config import Config
from app.migrations.normalize_movie_documents import normalize_movie_documents
from app.models.indexes import (
    create_performance_indexes,
    drop_all_custom_indexes,
    index_exists,
)


def test_create_indexes_is_idempotent(movie_collection):
    first = create_performance_indexes(movie_collection)
    second = create_performance_indexes(movie_collection)

    assert first["created"] == 1
    assert second == {"created": 0, "skipped": 1, "errors": 0, "total": 1}
    assert index_exists(movie_collection, "idx_movies_title_key")


def test_drop_indexes(movie_collection):
    create_performance_indexes(movie_collection)

    drop_all_custom_indexes(movie_collection)

    assert not index_exists(movie_collection, "idx_movies_title_key")


def test_app_startup_creates_title_index(movie_collection, upload_dir, monkeypatch):
    monkeypatch.setattr(Config, "ENSURE_INDEXES_ON_STARTUP", True)
    monkeypatch.setattr(main, "get_movie_collection", lambda: movie_collection)

    with TestClient(main.app):
        pass

    assert index_exists(movie_collection, "idx_movies_title_key")


def test_app_startup_can_skip_indexes(client, movie_collection):
    assert not index_exists(movie_collection, "idx_movies_title_key")


def test_migration_renames_legacy_synopsis_and_backfills_title_key(movie_collection):
    movie_collection.insert_many([
        {"title": "The Matrix", "synopshis": "Red pill", "categories": ["Sci-Fi"]},
        {"title": "Heat", "synopsis": "Cops", "synopshis": "stale"},
        {"title": "Alien", "title_key": "alien", "synopsis": "In space"},
    ])

    result = normalize_movie_documents(movie_collection)

    assert result == {"renamed": 1, "dropped": 1, "backfilled": 2}
    matrix = movie_collection.find_one({"title_key": "the matrix"})
    assert matrix["synopsis"] == "Red pill"
    assert "synopshis" not in matrix
    heat = movie_collection.find_one({"title_key": "heat"})
    assert heat["synopsis"] == "Cops"
    assert "synopshis" not in heat
    assert index_exists(movie_collection, "idx_movies_title_key")


def test_migration_is_idempotent(movie_collection):
    movie_collection.insert_one({"title": "Heat", "synopshis": "Cops"})
    normalize_movie_documents(movie_collection)

    assert normalize_movie_documents(movie_collection) == {"renamed": 0, "dropped": 0, "backfilled": 0}


def test_migrated_legacy_documents_are_reachable_by_title(client, movie_collection):
    movie_collection.insert_one({"title": "The Matrix", "synopshis": "Red pill"})
    normalize_movie_documents(movie_collection)

    response = client.get("/movies/the%20matrix")

    assert response.status_code == 200
    assert response.json()["synopsis"] == "Red pill"


def test_migration_backfills_non_text_titles(movie_collection):
    movie_collection.insert_many([
        {"title": 1999, "actors": "Prince"},
        {"actors": "Nobody"},
    ])

    result = normalize_movie_documents(movie_collection)

    assert result["backfilled"] == 2
    assert movie_collection.find_one({"title_key": "1999"})["actors"] == "Prince"
    assert movie_collection.find_one({"actors": "Nobody"})["title_key"] is None
