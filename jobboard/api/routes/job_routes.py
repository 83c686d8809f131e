"""
Job Routes

POST /jobs - Create job listing (company only)
GET /jobs - List jobs with filters and pagination
GET /jobs/company/me - My company's listings with applications
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (owner or admin)
DELETE /jobs/{job_id} - Delete job (owner or admin)
POST /jobs/{job_id}/apply - Apply to job (student only)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.api.dependencies import get_current_company, get_current_student, get_page_params
from jobboard.core.auth import Identity, get_current_identity
from jobboard.db.session import get_db
from jobboard.models import Company, JobLevel, LocationType, Student
from jobboard.services import application_service, job_service
from jobboard.services.job_service import JobFilters
from jobboard.schemas.schemas import (
    ApplicationResponse, CompanyJobResponse, Envelope, JobCreate, JobDetailResponse,
    JobListData, JobResponse, JobUpdate, PageParams
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=Envelope[JobResponse], status_code=201)
async def create_job(
    data: JobCreate,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    """Create a new job listing. Hybrid and onsite listings need a location."""
    job = job_service.create_job(db, company, data)
    return Envelope(message="Job created successfully", data=JobResponse.model_validate(job))


@router.get("", response_model=Envelope[JobListData])
async def list_jobs(
    search: Optional[str] = Query(None, description="Search title, description, location or company"),
    level: Optional[JobLevel] = Query(None),
    location_type: Optional[LocationType] = Query(None),
    company_id: Optional[int] = Query(None),
    active: Optional[bool] = Query(None),
    skills: Optional[List[str]] = Query(None, description="Jobs requiring any of these skills"),
    page: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    """List job listings, newest first, with filters and pagination."""
    filters = JobFilters(
        search=search,
        level=level,
        location_type=location_type,
        company_id=company_id,
        active=active,
        skills=skills,
    )
    jobs, total = job_service.list_jobs(db, filters, page)
    return Envelope(data=JobListData(
        jobs=[JobResponse.model_validate(job) for job in jobs],
        pagination=page.describe(total),
    ))


@router.get("/company/me", response_model=Envelope[List[CompanyJobResponse]])
async def get_my_jobs(company: Company = Depends(get_current_company), db: Session = Depends(get_db)):
    jobs = job_service.company_jobs(db, company)
    return Envelope(data=[CompanyJobResponse.model_validate(job) for job in jobs])


@router.get("/{job_id}", response_model=Envelope[JobDetailResponse])
async def get_job(job_id: int, db: Session = Depends(get_db)):
    job = job_service.get_job(db, job_id)
    return Envelope(data=JobDetailResponse.model_validate(job))


@router.put("/{job_id}", response_model=Envelope[JobResponse])
async def update_job(
    job_id: int,
    data: JobUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Update a listing. Omitted fields keep their value; a skill list replaces the old one."""
    job = job_service.update_job(db, identity, job_id, data)
    return Envelope(message="Job updated successfully", data=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=Envelope[None])
async def delete_job(
    job_id: int,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    job_service.delete_job(db, identity, job_id)
    return Envelope(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=Envelope[ApplicationResponse], status_code=201)
async def apply_to_job(
    job_id: int,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    application = application_service.apply(db, student, job_id)
    return Envelope(message="Application submitted successfully", data=ApplicationResponse.model_validate(application))
