"""
Admin Routes

GET /admin/stats - System-wide counts
GET /admin/users - Paginated user list (type, search)
GET /admin/jobs - Paginated job list (status, search)
GET /admin/applications - Paginated application list (status)
POST /admin/create - Create another admin
PUT /admin/users/{user_id}/block - Not implemented (501)
PUT /admin/jobs/{job_id}/status - Activate or deactivate a job
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.api.dependencies import get_current_admin, get_page_params
from jobboard.core.errors import NotImplementedFeature
from jobboard.db.session import get_db
from jobboard.models import Admin, ApplicationStatus
from jobboard.services import account_service, application_service, job_service, stats_service
from jobboard.schemas.schemas import (
    AdminApplicationResponse, AdminCreateRequest, AdminCreatedResponse, AdminJobListData,
    AdminJobResponse, AdminUserResponse, ApplicationListData, Envelope, JobResponse,
    JobStatusUpdate, PageParams, SystemStatsResponse, UserListData
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/stats", response_model=Envelope[SystemStatsResponse])
async def get_stats(admin: Admin = Depends(get_current_admin), db: Session = Depends(get_db)):
    return Envelope(data=stats_service.system_stats(db))


@router.get("/users", response_model=Envelope[UserListData])
async def list_users(
    type: Optional[str] = Query(None, description="student, company or admin"),
    search: Optional[str] = Query(None, description="Email, student name or company name"),
    page: PageParams = Depends(get_page_params),
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    users, total = stats_service.list_users(db, type, search, page)
    return Envelope(data=UserListData(
        users=[AdminUserResponse.model_validate(user) for user in users],
        pagination=page.describe(total),
    ))


@router.get("/jobs", response_model=Envelope[AdminJobListData])
async def list_jobs(
    status: Optional[str] = Query(None, description="active or inactive"),
    search: Optional[str] = Query(None, description="Title or company name"),
    page: PageParams = Depends(get_page_params),
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    jobs, total = job_service.list_jobs_for_admin(db, status, search, page)
    return Envelope(data=AdminJobListData(
        jobs=[AdminJobResponse.model_validate(job) for job in jobs],
        pagination=page.describe(total),
    ))


@router.get("/applications", response_model=Envelope[ApplicationListData])
async def list_applications(
    status: Optional[ApplicationStatus] = Query(None),
    page: PageParams = Depends(get_page_params),
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    applications, total = application_service.all_applications(db, status, page)
    return Envelope(data=ApplicationListData(
        applications=[AdminApplicationResponse.model_validate(a) for a in applications],
        pagination=page.describe(total),
    ))


@router.post("/create", response_model=Envelope[AdminCreatedResponse], status_code=201)
async def create_admin(
    data: AdminCreateRequest,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Create another admin account. Only existing admins can do this."""
    created = account_service.create_admin(db, data)
    return Envelope(message="Admin created successfully", data=created)


@router.put("/users/{user_id}/block", response_model=Envelope[None], status_code=501)
async def block_user(user_id: int, admin: Admin = Depends(get_current_admin)):
    raise NotImplementedFeature("This functionality is not implemented yet")


@router.put("/jobs/{job_id}/status", response_model=Envelope[JobResponse])
async def update_job_status(
    job_id: int,
    data: JobStatusUpdate,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    job = job_service.set_job_active(db, job_id, data.is_active)
    state = "activated" if job.is_active else "deactivated"
    return Envelope(message=f"Job {state} successfully", data=JobResponse.model_validate(job))
