from pathlib import Path

from conftest import auth
from jobboard.db.session import SessionLocal
from jobboard.models import Application, JobListing, JobSkill
from jobboard.schemas.schemas import PageParams
from jobboard.services import job_service


def test_onsite_job_requires_location(client, register_company):
    company = register_company()
    payload = {
        "title": "Support Engineer",
        "level": "MID",
        "location_type": "ONSITE",
        "description": "Keep things running",
        "contact_info": {"email": "jobs@x.com"},
    }

    missing = client.post("/api/jobs", json=payload, headers=auth(company["token"]))
    assert missing.status_code == 400
    assert missing.json()["message"] == "Location is required for hybrid or onsite jobs"

    payload["location"] = "Remote city"
    created = client.post("/api/jobs", json=payload, headers=auth(company["token"]))
    assert created.status_code == 201
    assert created.json()["data"]["location"] == "Remote city"


def test_create_job_rejects_unknown_level(client, register_company):
    company = register_company()

    response = client.post("/api/jobs", headers=auth(company["token"]), json={
        "title": "x", "level": "INTERN", "location_type": "REMOTE",
        "description": "x", "contact_info": {"email": "x@x.com"},
    })

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "level"


def test_create_job_returns_skills_and_company_name(register_company, post_job):
    company = register_company(company_name="Acme")

    job = post_job(company["token"], required_skills=["Python", " Python ", "SQL", ""])

    assert job["company_name"] == "Acme"
    assert job["required_skills"] == ["Python", "SQL"]
    assert job["contact_info"]["email"] == "jobs@x.com"
    assert job["is_active"] is True


def test_get_job_includes_company(client, register_company, post_job):
    company = register_company(company_name="Acme")
    job = post_job(company["token"])

    response = client.get(f"/api/jobs/{job['id']}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["company"]["name"] == "Acme"
    assert data["application_count"] == 0


def test_get_missing_job_is_404(client):
    response = client.get("/api/jobs/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Job not found"


def test_update_keeps_omitted_fields(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"], salary="3000", benefits="Health")

    response = client.put(f"/api/jobs/{job['id']}", headers=auth(company["token"]), json={"title": "Senior Backend"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Senior Backend"
    for field in ("salary", "benefits", "description", "level", "location_type", "required_skills"):
        assert data[field] == job[field]


def test_update_merges_contact_info_field_by_field(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"], contact_info={"email": "jobs@x.com", "phone": "555-0200"})

    response = client.put(
        f"/api/jobs/{job['id']}",
        headers=auth(company["token"]),
        json={"contact_info": {"website": "https://acme.example.com"}},
    )

    contact = response.json()["data"]["contact_info"]
    assert contact["email"] == "jobs@x.com"
    assert contact["phone"] == "555-0200"
    assert contact["website"] == "https://acme.example.com"


def test_update_replaces_whole_skill_set(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"], required_skills=["Python", "SQL"])

    replaced = client.put(f"/api/jobs/{job['id']}", headers=auth(company["token"]), json={"required_skills": ["Go"]})
    assert replaced.json()["data"]["required_skills"] == ["Go"]

    cleared = client.put(f"/api/jobs/{job['id']}", headers=auth(company["token"]), json={"required_skills": []})
    assert cleared.json()["data"]["required_skills"] == []

    db = SessionLocal()
    try:
        assert db.query(JobSkill).filter(JobSkill.job_id == job["id"]).count() == 0
    finally:
        db.close()


def test_update_to_onsite_checks_merged_location(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"], location_type="REMOTE")

    response = client.put(f"/api/jobs/{job['id']}", headers=auth(company["token"]), json={"location_type": "HYBRID"})

    assert response.status_code == 400


def test_update_rejects_explicit_null_title(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"])

    response = client.put(f"/api/jobs/{job['id']}", headers=auth(company["token"]), json={"title": None})

    assert response.status_code == 400


def test_other_company_cannot_update_or_delete(client, register_company, post_job):
    owner = register_company()
    other = register_company()
    job = post_job(owner["token"])

    update = client.put(f"/api/jobs/{job['id']}", headers=auth(other["token"]), json={"title": "Mine now"})
    delete = client.delete(f"/api/jobs/{job['id']}", headers=auth(other["token"]))

    assert update.status_code == 403
    assert update.json()["message"] == "Access denied: You can only update your own job listings"
    assert delete.status_code == 403


def test_admin_can_update_any_job(client, admin, register_company, post_job):
    company = register_company()
    job = post_job(company["token"])

    response = client.put(f"/api/jobs/{job['id']}", headers=auth(admin["token"]), json={"is_active": False})

    assert response.status_code == 200
    assert response.json()["data"]["is_active"] is False


def test_delete_cascades_applications_and_skills(client, register_company, register_student, post_job):
    company = register_company()
    student = register_student()
    job = post_job(company["token"])
    client.post(f"/api/jobs/{job['id']}/apply", headers=auth(student["token"]))

    response = client.delete(f"/api/jobs/{job['id']}", headers=auth(company["token"]))

    assert response.status_code == 200
    db = SessionLocal()
    try:
        assert db.get(JobListing, job["id"]) is None
        assert db.query(Application).count() == 0
        assert db.query(JobSkill).count() == 0
    finally:
        db.close()
    assert client.get(f"/api/jobs/{job['id']}").status_code == 404


def test_pagination_over_twelve_jobs(client, register_company, post_job):
    company = register_company()
    for i in range(12):
        post_job(company["token"], title=f"Job {i}")

    response = client.get("/api/jobs", params={"limit": 5})

    data = response.json()["data"]
    assert len(data["jobs"]) == 5
    assert data["pagination"] == {"total": 12, "page": 1, "limit": 5, "pages": 3}
    assert data["jobs"][0]["title"] == "Job 11"

    last = client.get("/api/jobs", params={"limit": 5, "page": 3}).json()["data"]
    assert len(last["jobs"]) == 2


def test_limit_is_capped_at_100(client):
    response = client.get("/api/jobs", params={"limit": 500})

    assert response.status_code == 200
    assert response.json()["data"]["pagination"]["limit"] == 100


def test_page_zero_is_rejected(client):
    response = client.get("/api/jobs", params={"page": 0})

    assert response.status_code == 400


def test_list_filters(client, register_company, post_job):
    acme = register_company(company_name="Acme")
    globex = register_company(company_name="Globex")
    post_job(acme["token"], title="Python Dev", level="SENIOR", required_skills=["Python"])
    post_job(acme["token"], title="Office Admin", location_type="ONSITE", location="Porto", required_skills=[])
    post_job(globex["token"], title="Go Dev", description="Services in Go", required_skills=["Go"])

    def titles(**params):
        data = client.get("/api/jobs", params=params).json()["data"]
        return sorted(job["title"] for job in data["jobs"])

    assert titles(search="globex") == ["Go Dev"]
    assert titles(search="porto") == ["Office Admin"]
    assert titles(search="SERVICES") == ["Go Dev"]
    assert titles(level="SENIOR") == ["Python Dev"]
    assert titles(location_type="ONSITE") == ["Office Admin"]
    assert titles(company_id=acme["id"]) == ["Office Admin", "Python Dev"]
    assert titles(skills=["Go", "Python"]) == ["Go Dev", "Python Dev"]


def test_list_active_filter(client, admin, register_company, post_job):
    company = register_company()
    open_job = post_job(company["token"], title="Open")
    closed_job = post_job(company["token"], title="Closed")
    client.put(f"/api/admin/jobs/{closed_job['id']}/status", headers=auth(admin["token"]), json={"is_active": False})

    active = client.get("/api/jobs", params={"active": "true"}).json()["data"]["jobs"]
    inactive = client.get("/api/jobs", params={"active": "false"}).json()["data"]["jobs"]

    assert [job["id"] for job in active] == [open_job["id"]]
    assert [job["id"] for job in inactive] == [closed_job["id"]]


def test_company_me_lists_own_jobs_with_applications(client, register_company, register_student, post_job):
    company = register_company()
    other = register_company()
    student = register_student()
    job = post_job(company["token"])
    post_job(other["token"])
    client.post(f"/api/jobs/{job['id']}/apply", headers=auth(student["token"]))

    response = client.get("/api/jobs/company/me", headers=auth(company["token"]))

    data = response.json()["data"]
    assert [item["id"] for item in data] == [job["id"]]
    assert data[0]["applications"][0]["status"] == "PENDING"


def test_update_with_null_contact_email_keeps_stored_email(client, register_company, post_job):
    company = register_company()
    job = post_job(company["token"], contact_info={"email": "jobs@x.com", "phone": "555-0200"})

    response = client.put(
        f"/api/jobs/{job['id']}",
        headers=auth(company["token"]),
        json={"contact_info": {"email": None, "phone": "555-0300"}},
    )

    assert response.status_code == 200
    contact = response.json()["data"]["contact_info"]
    assert contact["email"] == "jobs@x.com"
    assert contact["phone"] == "555-0300"


def test_search_treats_wildcards_literally(client, register_company, post_job):
    company = register_company(company_name="Acme")
    post_job(company["token"], title="Backend")
    post_job(company["token"], title="Frontend")
    post_job(company["token"], title="Rate_Limiter")

    def titles(search):
        data = client.get("/api/jobs", params={"search": search}).json()["data"]
        return [job["title"] for job in data["jobs"]]

    assert titles("_") == ["Rate_Limiter"]
    assert titles("%") == []
    assert titles("ck_nd") == []


def test_page_params_describe_rounds_pages_up():
    page = PageParams(page=3, limit=10)

    assert page.offset == 20
    assert page.describe(21).model_dump() == {"total": 21, "page": 3, "limit": 10, "pages": 3}


def test_services_do_not_depend_on_the_api_layer():
    services_dir = Path(job_service.__file__).parent
    for module in services_dir.glob("*.py"):
        assert "jobboard.api" not in module.read_text(), module.name
