import io
import re

import pytest
from fastapi import UploadFile

from app.services import upload_service
from app.services.upload_service import build_stored_name
from app.utils.exceptions import InvalidUpload

HEX_SUFFIX = r"-[0-9a-f]{32}"


def upload(client, filename, content=b"\x89PNG fake image", content_type="image/png"):
    return client.post("/uploads", files={"file": (filename, content, content_type)})


def test_upload_stores_file_and_returns_names(client, upload_dir):
    response = upload(client, "inception.jpg", b"jpeg-bytes", "image/jpeg")

    assert response.status_code == 201
    body = response.json()
    assert body["original_filename"] == "inception.jpg"
    assert re.fullmatch(r"inception" + HEX_SUFFIX + r"\.jpg", body["filename"])
    assert body["url"] == f"/uploads/{body['filename']}"
    assert (upload_dir / body["filename"]).read_bytes() == b"jpeg-bytes"


def test_uploaded_file_is_served_statically(client):
    body = upload(client, "poster.png", b"poster-bytes").json()

    response = client.get(body["url"])

    assert response.status_code == 200
    assert response.content == b"poster-bytes"


def test_same_name_uploads_do_not_overwrite(client, upload_dir):
    first = upload(client, "poster.png", b"first").json()
    second = upload(client, "poster.png", b"second").json()

    assert first["filename"] != second["filename"]
    assert (upload_dir / first["filename"]).read_bytes() == b"first"
    assert (upload_dir / second["filename"]).read_bytes() == b"second"


def test_upload_cannot_escape_upload_dir(client, upload_dir):
    body = upload(client, "../../etc/passwd").json()

    stored = upload_dir / body["filename"]
    assert stored.parent == upload_dir
    assert stored.exists()
    assert body["filename"].startswith("passwd-")


def test_upload_name_links_to_movie_image(client):
    stored = upload(client, "heat.jpg").json()["filename"]

    client.post("/movies", json={"title": "Heat", "image": stored})

    image = client.get("/movies/heat").json()["image"]
    assert client.get(f"/uploads/{image}").status_code == 200


def test_upload_without_file_is_rejected(client):
    response = client.post("/uploads")

    assert response.status_code == 422


def test_unknown_upload_is_not_found(client):
    assert client.get("/uploads/missing.png").status_code == 404


def test_filesystem_error_hides_detail(client, monkeypatch):
    def broken(upload_dir):
        raise PermissionError("[Errno 13] Permission denied: '/srv/uploads'")

    monkeypatch.setattr(upload_service, "ensure_upload_dir", broken)

    response = upload(client, "poster.png")

    assert response.status_code == 500
    assert response.json() == {"message": "Error uploading file", "error": "Internal server error"}


@pytest.mark.parametrize(
    "original, pattern",
    [
        ("The Matrix.jpg", r"The_Matrix" + HEX_SUFFIX + r"\.jpg"),
        ("C:\\Users\\me\\poster.png", r"poster" + HEX_SUFFIX + r"\.png"),
        (".htaccess", r"htaccess" + HEX_SUFFIX),
        ("archive.tar.gz", r"archive\.tar" + HEX_SUFFIX + r"\.gz"),
        ("...", r"upload" + HEX_SUFFIX),
    ],
)
def test_build_stored_name(original, pattern):
    assert re.fullmatch(pattern, build_stored_name(original))


def test_save_upload_requires_file_name(upload_dir):
    nameless = UploadFile(file=io.BytesIO(b"data"), filename="")

    with pytest.raises(InvalidUpload):
        upload_service.UploadService.save_upload(upload_dir, nameless)

    assert list(upload_dir.iterdir()) == []
