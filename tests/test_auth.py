from datetime import timedelta

from conftest import auth
from jobboard.core.auth import Identity, create_access_token, decode_token, token_lifetime
from jobboard.db.session import SessionLocal
from jobboard.models import Student, User, UserRole


def _user_count():
    db = SessionLocal()
    try:
        return db.query(User).count()
    finally:
        db.close()


def test_register_student_returns_token(client):
    response = client.post("/api/auth/register/student", json={
        "name": "Ana",
        "email": "a@x.com",
        "password": "secret1",
        "phone": "555-0100",
        "skills": [{"name": "Python", "level": 3}, {"name": "SQL", "level": 2}],
    })

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "success"
    assert body["data"]["name"] == "Ana"
    assert body["data"]["role"] == "STUDENT"
    assert body["data"]["token"]

    db = SessionLocal()
    try:
        student = db.query(Student).one()
        assert [skill.name for skill in student.skills] == ["Python", "SQL"]
    finally:
        db.close()


def test_register_duplicate_email_conflicts_without_new_user(client, register_student):
    register_student(email="a@x.com")
    before = _user_count()

    response = client.post("/api/auth/register/student", json={
        "name": "Ana Again", "email": "a@x.com", "password": "secret1", "phone": "555-0101",
    })

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Email already registered"}
    assert _user_count() == before


def test_company_email_cannot_reuse_student_email(client, register_student, register_company):
    register_student(email="shared@x.com")

    response = client.post("/api/auth/register/company", json={
        "company_name": "Acme",
        "responsible_name": "Bob",
        "email": "shared@x.com",
        "tax_id": "12345678000199",
        "password": "secret1",
    })

    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered"


def test_register_company_duplicate_tax_id(client, register_company):
    register_company(tax_id="12345678000199")

    response = client.post("/api/auth/register/company", json={
        "company_name": "Other",
        "responsible_name": "Carl",
        "email": "other@x.com",
        "tax_id": "12345678000199",
        "password": "secret1",
    })

    assert response.status_code == 400
    assert response.json()["message"] == "Tax id already registered"


def test_register_validation_errors_are_listed(client):
    response = client.post("/api/auth/register/student", json={
        "name": "Ana", "email": "not-an-email", "password": "123", "phone": "555",
    })

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation error"
    fields = {error["field"] for error in body["errors"]}
    assert {"email", "password"} <= fields


def test_register_rejects_duplicate_skill_names(client):
    response = client.post("/api/auth/register/student", json={
        "name": "Ana", "email": "a@x.com", "password": "secret1", "phone": "555",
        "skills": [{"name": "Go", "level": 2}, {"name": "Go", "level": 4}],
    })

    assert response.status_code == 400


def test_login_token_decodes_to_stored_identity(client, register_student):
    register_student(email="a@x.com", password="secret1")

    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 200
    identity = decode_token(response.json()["data"]["token"])
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == "a@x.com").one()
        assert identity == Identity(user_id=user.id, email=user.email, role=user.role)
    finally:
        db.close()


def test_login_failures_share_one_message(client, register_student):
    register_student(email="a@x.com", password="secret1")

    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret1"})

    for response in (wrong_password, unknown_email):
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


def test_admin_login_rejects_non_admins(client, register_student):
    register_student(email="a@x.com", password="secret1")

    response = client.post("/api/auth/admin/login", json={"email": "a@x.com", "password": "secret1"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid admin credentials"


def test_admin_login(admin):
    assert admin["role"] == "ADMIN"
    assert admin["name"] == "Root"


def test_token_lifetime_depends_on_role():
    assert token_lifetime(UserRole.ADMIN) == timedelta(hours=8)
    assert token_lifetime(UserRole.STUDENT) == timedelta(hours=24)
    assert token_lifetime(UserRole.COMPANY) == timedelta(hours=24)


def test_missing_token_is_unauthenticated(client):
    response = client.get("/api/students/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Authentication required"


def test_expired_token_is_rejected(client, register_student):
    register_student(email="a@x.com")
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == "a@x.com").one()
        identity = Identity(user_id=user.id, email=user.email, role=user.role)
    finally:
        db.close()
    token = create_access_token(identity, expires_delta=timedelta(seconds=-1))

    response = client.get("/api/students/me", headers=auth(token))

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


def test_garbage_token_is_rejected(client):
    response = client.get("/api/students/me", headers=auth("not.a.token"))

    assert response.status_code == 401


def test_duplicate_email_caught_by_unique_constraint(client, register_student, monkeypatch):
    from jobboard.services import account_service

    register_student(email="a@x.com")
    before = _user_count()
    # two concurrent registrations can both pass the email pre-check
    monkeypatch.setattr(account_service, "_ensure_email_free", lambda db, email: None)

    response = client.post("/api/auth/register/student", json={
        "name": "Ana Again", "email": "a@x.com", "password": "secret1", "phone": "555-0101",
    })

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Email already registered"}
    assert _user_count() == before
