"""
Upload storage for movie images.

Files land in the upload directory under a generated name so that two
uploads never overwrite each other and a client file name can never escape
the directory. The generated name is what goes into a movie's `image` field.
"""
from fastapi import UploadFile
from pathlib import Path
from typing import Dict
import logging
import re
import shutil
import uuid

from app.config import Config
from app.utils.exceptions import InvalidUpload, StoreFailure

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def get_upload_dir() -> Path:
    """Upload directory dependency (overridden in tests)"""
    return Path(Config.UPLOAD_DIR)


def ensure_upload_dir(upload_dir: Path) -> Path:
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def build_stored_name(original_filename: str) -> str:
    """
    Storage name for a client file name.

    "../posters/The Matrix.jpg" -> "The_Matrix-<32 hex chars>.jpg"
    """
    # Browsers on Windows may send full paths
    base = original_filename.replace("\\", "/").rsplit("/", 1)[-1]
    base = _UNSAFE_CHARS.sub("_", base).lstrip(".")

    stem, dot, ext = base.rpartition(".")
    if not dot:
        stem, ext = base, ""
    stem = stem or "upload"

    suffix = uuid.uuid4().hex
    return f"{stem}-{suffix}.{ext}" if ext else f"{stem}-{suffix}"


class UploadService:
    """Service for storing uploaded files"""

    @staticmethod
    def save_upload(upload_dir: Path, upload: UploadFile) -> Dict[str, str]:
        original_filename = upload.filename or ""
        if not original_filename.strip():
            raise InvalidUpload("A file with a name is required")

        stored_name = build_stored_name(original_filename)
        destination = upload_dir / stored_name

        try:
            ensure_upload_dir(upload_dir)
            with destination.open("wb") as out:
                shutil.copyfileobj(upload.file, out)
        except OSError as e:
            logger.error(f"Failed to store upload '{original_filename}': {e}", exc_info=True)
            raise StoreFailure("Error uploading file") from e
        finally:
            upload.file.close()

        logger.info(f"Stored upload '{original_filename}' as '{stored_name}'")
        return {
            "filename": stored_name,
            "original_filename": original_filename,
            "url": f"{Config.UPLOAD_URL_PREFIX}/{stored_name}",
        }
