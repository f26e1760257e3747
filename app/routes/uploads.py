from fastapi import APIRouter, Depends, File, UploadFile, status
from pathlib import Path

from app.schemas.movie import UploadResponse
from app.services.upload_service import UploadService, get_upload_dir

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_image(
    file: UploadFile = File(..., description="Movie image"),
    upload_dir: Path = Depends(get_upload_dir)
):
    """
    Store a movie image

    The file is saved under a generated name (client name plus a random
    suffix). Put the returned **filename** in the movie's `image` field;
    the file is then served at **url**.
    """
    return UploadService.save_upload(upload_dir, file)
