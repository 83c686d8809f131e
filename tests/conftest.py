import itertools
import os
import shutil
import tempfile

TEST_DIR = tempfile.mkdtemp(prefix="jobboard-tests-")

os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(TEST_DIR, "uploads")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from jobboard.db.session import Base, SessionLocal, engine
from jobboard.main import app
from jobboard.schemas.schemas import AdminCreateRequest
from jobboard.services.account_service import create_admin


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(TEST_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register_student(client):
    counter = itertools.count(1)

    def _register(**overrides):
        n = next(counter)
        payload = {
            "name": f"Student {n}",
            "email": f"student{n}@x.com",
            "password": "secret1",
            "phone": "555-0100",
            "city": "Lisbon",
            "skills": [{"name": "Python", "level": 4}],
        }
        payload.update(overrides)
        response = client.post("/api/auth/register/student", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def register_company(client):
    counter = itertools.count(1)

    def _register(**overrides):
        n = next(counter)
        payload = {
            "company_name": f"Company {n}",
            "responsible_name": f"Owner {n}",
            "email": f"company{n}@x.com",
            "tax_id": f"{n:014d}",
            "password": "secret1",
        }
        payload.update(overrides)
        response = client.post("/api/auth/register/company", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _register


@pytest.fixture
def admin(client):
    """An admin account created directly, then logged in through the API."""
    db = SessionLocal()
    try:
        create_admin(db, AdminCreateRequest(name="Root", email="root@x.com", password="secret1"))
    finally:
        db.close()

    response = client.post("/api/auth/admin/login", json={"email": "root@x.com", "password": "secret1"})
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
def post_job(client):
    def _post(token, **overrides):
        payload = {
            "title": "Backend Developer",
            "level": "JUNIOR",
            "location_type": "REMOTE",
            "description": "Build and run APIs",
            "salary": "3000",
            "contact_info": {"email": "jobs@x.com", "phone": "555-0200"},
            "required_skills": ["Python", "SQL"],
        }
        payload.update(overrides)
        response = client.post("/api/jobs", json=payload, headers=auth(token))
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _post
