"""
File Upload Utility - Validate and store resumes and profile pictures.

Supported formats:
- Resume: PDF (.pdf) checked with PyPDF2, Word (.docx) checked with python-docx
- Picture: JPEG, PNG, GIF, WEBP

Files land in <UPLOAD_DIR>/resumes and <UPLOAD_DIR>/profile-pictures and are
served back under /uploads/.
"""

import io
import logging
import os
import secrets
import time
from typing import Tuple

from docx import Document
from fastapi import UploadFile
from PyPDF2 import PdfReader

from jobboard.core.config import get_settings
from jobboard.core.errors import ValidationFailed

logger = logging.getLogger(__name__)

RESUMES = "resumes"
PROFILE_PICTURES = "profile-pictures"
UPLOAD_KINDS = (RESUMES, PROFILE_PICTURES)

RESUME_TYPES = {
    "application/pdf": ".pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
}
IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

MB = 1024 * 1024


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def ensure_upload_dirs() -> None:
    settings = get_settings()
    for kind in UPLOAD_KINDS:
        os.makedirs(os.path.join(settings.upload_dir, kind), exist_ok=True)


async def _read_limited(file: UploadFile, max_mb: int) -> bytes:
    if not file or not file.filename:
        raise ValidationFailed("No file uploaded")

    limit = max_mb * MB
    # one byte past the limit is enough to know the file is too large
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise ValidationFailed("File is too large")
    if not content:
        raise ValidationFailed("Uploaded file is empty")
    return content


def _check_pdf(content: bytes) -> None:
    try:
        reader = PdfReader(io.BytesIO(content))
        len(reader.pages)
    except Exception as e:
        logger.info("Rejected PDF upload: %s", e)
        raise ValidationFailed("Could not read PDF file. File may be corrupted.")


def _check_docx(content: bytes) -> None:
    try:
        Document(io.BytesIO(content))
    except Exception as e:
        logger.info("Rejected DOCX upload: %s", e)
        raise ValidationFailed("Could not read DOCX file. File may be corrupted.")


async def read_resume(file: UploadFile) -> Tuple[bytes, str]:
    """
    Validate a resume upload.

    Returns:
        Tuple of (content, extension)

    Raises:
        ValidationFailed on wrong type, oversize or unreadable content
    """
    ext = RESUME_TYPES.get(file.content_type) if file else None
    if ext is None:
        raise ValidationFailed("Invalid file type. Only PDF and DOCX are allowed.")

    content = await _read_limited(file, get_settings().max_resume_size_mb)

    if ext == ".pdf":
        _check_pdf(content)
    else:
        _check_docx(content)
    return content, ext


async def read_picture(file: UploadFile) -> Tuple[bytes, str]:
    """Validate a profile picture upload. Returns (content, extension)."""
    ext = IMAGE_TYPES.get(file.content_type) if file else None
    if ext is None:
        raise ValidationFailed("Invalid file type. Only JPEG, PNG, GIF and WEBP images are allowed.")

    content = await _read_limited(file, get_settings().max_picture_size_mb)
    return content, ext


def save_upload(content: bytes, ext: str, kind: str, user_id: int) -> Tuple[str, str]:
    """
    Write the file under a collision-free name.

    Returns:
        Tuple of (filename, public url)
    """
    filename = f"{user_id}-{int(time.time() * 1000)}-{secrets.token_hex(6)}{ext}"
    directory = os.path.join(get_settings().upload_dir, kind)
    os.makedirs(directory, exist_ok=True)

    with open(os.path.join(directory, filename), "wb") as f:
        f.write(content)

    logger.info("Stored %s upload %s", kind, filename)
    return filename, f"/uploads/{kind}/{filename}"


def remove_upload(kind: str, filename: str) -> None:
    """Delete a stored file; a missing file is not an error."""
    path = os.path.join(get_settings().upload_dir, kind, filename)
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
