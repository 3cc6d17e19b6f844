# site_backend/core/storage.py

import os
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile


UPLOAD_URL_PREFIX = "uploads"


def generate_filename(original_filename: str | None) -> str:
    ext = Path(original_filename or "").suffix
    return f"{uuid.uuid4().hex}{ext}"


def save_upload(uploaded_file: UploadFile, upload_dir: Path) -> str:
    """
    Writes the upload verbatim under upload_dir with a generated name.
    Returns the path relative to the site root, e.g. "uploads/<name>.png",
    which is also where the static mount serves it.
    """
    os.makedirs(upload_dir, exist_ok=True)
    filename = generate_filename(uploaded_file.filename)
    path = Path(upload_dir) / filename
    with path.open("wb") as buffer:
        shutil.copyfileobj(uploaded_file.file, buffer)
    return f"{UPLOAD_URL_PREFIX}/{filename}"
