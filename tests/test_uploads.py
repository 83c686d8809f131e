import asyncio
import io
import os

import pytest
from docx import Document
from PyPDF2 import PdfWriter
from sqlalchemy.exc import SQLAlchemyError

from conftest import auth
from jobboard.core.config import get_settings
from jobboard.core.errors import ValidationFailed
from jobboard.db.session import SessionLocal
from jobboard.models import Student
from jobboard.services import profile_service
from jobboard.utils.file_upload import MB, RESUMES, read_picture

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _pdf_bytes():
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def _docx_bytes():
    document = Document()
    document.add_paragraph("Ana - Backend Developer")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def _stored_path(url):
    kind, name = url.split("/")[-2:]
    return os.path.join(get_settings().upload_dir, kind, name)


def test_upload_pdf_resume(client, register_student):
    student = register_student()

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(student["token"]),
        files={"file": ("cv.pdf", _pdf_bytes(), "application/pdf")},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["url"].startswith("/uploads/resumes/")
    assert data["filename"].endswith(".pdf")
    assert os.path.exists(_stored_path(data["url"]))

    profile = client.get("/api/students/me", headers=auth(student["token"])).json()["data"]
    assert profile["resume_url"] == data["url"]

    served = client.get(data["url"])
    assert served.status_code == 200


def test_upload_docx_resume(client, register_student):
    student = register_student()

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(student["token"]),
        files={"file": ("cv.docx", _docx_bytes(), DOCX_TYPE)},
    )

    assert response.status_code == 200
    assert response.json()["data"]["filename"].endswith(".docx")


def test_resume_wrong_type(client, register_student):
    student = register_student()

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(student["token"]),
        files={"file": ("cv.txt", b"plain text", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid file type. Only PDF and DOCX are allowed."


def test_resume_unreadable_pdf(client, register_student):
    student = register_student()

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(student["token"]),
        files={"file": ("cv.pdf", b"definitely not a pdf", "application/pdf")},
    )

    assert response.status_code == 400


def test_resume_too_large(client, register_student):
    student = register_student()
    oversized = b"0" * (5 * 1024 * 1024 + 1)

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(student["token"]),
        files={"file": ("cv.pdf", oversized, "application/pdf")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "File is too large"


def test_profile_picture(client, register_student):
    student = register_student()

    response = client.post(
        "/api/students/uploads/profile-picture",
        headers=auth(student["token"]),
        files={"file": ("me.png", b"\x89PNG\r\n\x1a\nfake", "image/png")},
    )

    assert response.status_code == 200
    url = response.json()["data"]["url"]
    assert url.startswith("/uploads/profile-pictures/")
    profile = client.get("/api/students/me", headers=auth(student["token"])).json()["data"]
    assert profile["profile_picture"] == url


def test_profile_picture_wrong_type_and_size(client, register_student):
    student = register_student()

    wrong_type = client.post(
        "/api/students/uploads/profile-picture",
        headers=auth(student["token"]),
        files={"file": ("me.pdf", _pdf_bytes(), "application/pdf")},
    )
    too_large = client.post(
        "/api/students/uploads/profile-picture",
        headers=auth(student["token"]),
        files={"file": ("me.jpg", b"0" * (2 * 1024 * 1024 + 1), "image/jpeg")},
    )

    assert wrong_type.status_code == 400
    assert too_large.status_code == 400
    assert too_large.json()["message"] == "File is too large"


def test_company_cannot_upload_resume(client, register_company):
    company = register_company()

    response = client.post(
        "/api/students/uploads/resume",
        headers=auth(company["token"]),
        files={"file": ("cv.pdf", _pdf_bytes(), "application/pdf")},
    )

    assert response.status_code == 403


def test_failed_profile_update_removes_stored_file(register_student, monkeypatch):
    register_student()
    resumes_dir = os.path.join(get_settings().upload_dir, RESUMES)
    os.makedirs(resumes_dir, exist_ok=True)
    before = set(os.listdir(resumes_dir))

    db = SessionLocal()
    try:
        student = db.query(Student).one()

        def failing_commit():
            raise SQLAlchemyError("database went away")

        monkeypatch.setattr(db, "commit", failing_commit)
        with pytest.raises(SQLAlchemyError):
            profile_service.attach_upload(db, student, RESUMES, _pdf_bytes(), ".pdf")
    finally:
        db.close()

    assert set(os.listdir(resumes_dir)) == before


class _RecordingUpload:
    """Stands in for UploadFile and remembers how much was asked for."""

    def __init__(self, size, content_type="image/png"):
        self.filename = "big.png"
        self.content_type = content_type
        self._size = size
        self.requested = []

    async def read(self, size=-1):
        self.requested.append(size)
        available = self._size if size < 0 else min(size, self._size)
        return b"0" * available


def test_oversized_upload_is_not_read_in_full():
    upload = _RecordingUpload(size=50 * MB)

    with pytest.raises(ValidationFailed) as exc:
        asyncio.run(read_picture(upload))

    assert exc.value.message == "File is too large"
    assert upload.requested == [get_settings().max_picture_size_mb * MB + 1]
