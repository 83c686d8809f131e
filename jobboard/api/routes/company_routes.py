"""
Company Routes

GET /companies/me - Get own company profile
PUT /companies/me - Update company profile
PUT /companies/password - Change password
GET /companies/applications - Applications to my jobs
PUT /companies/applications/{application_id}/status - Move an application
GET /companies/stats - Job and application counts for my listings
GET /companies/{company_id} - Public company page
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.api.dependencies import get_current_company
from jobboard.db.session import get_db
from jobboard.models import ApplicationStatus, Company
from jobboard.services import account_service, application_service, profile_service, stats_service
from jobboard.schemas.schemas import (
    ApplicationResponse, ApplicationStatusUpdate, CompanyApplicationResponse, CompanyPublicResponse,
    CompanyResponse, CompanyStatsResponse, CompanyUpdate, Envelope, PasswordUpdateRequest
)

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.get("/me", response_model=Envelope[CompanyResponse])
async def get_my_company(company: Company = Depends(get_current_company)):
    return Envelope(data=CompanyResponse.model_validate(company))


@router.put("/me", response_model=Envelope[CompanyResponse])
async def update_my_company(
    data: CompanyUpdate,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    company = profile_service.update_company(db, company, data)
    return Envelope(message="Company profile updated successfully", data=CompanyResponse.model_validate(company))


@router.put("/password", response_model=Envelope[None])
async def update_password(
    data: PasswordUpdateRequest,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    account_service.change_password(db, company.user_id, data)
    return Envelope(message="Password updated successfully")


@router.get("/applications", response_model=Envelope[List[CompanyApplicationResponse]])
async def get_applications(
    job_id: Optional[int] = Query(None, description="Only applications to this job"),
    status: Optional[ApplicationStatus] = Query(None),
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    """Applications to the company's listings with the candidate's details."""
    applications = application_service.company_applications(db, company, job_id, status)
    return Envelope(data=[CompanyApplicationResponse.model_validate(a) for a in applications])


@router.put("/applications/{application_id}/status", response_model=Envelope[ApplicationResponse])
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    """
    Set an application's status.

    Any status may follow any other; the application must target one of the
    company's own listings.
    """
    application = application_service.update_status(db, company, application_id, data.status)
    return Envelope(
        message="Application status updated successfully",
        data=ApplicationResponse.model_validate(application),
    )


@router.get("/stats", response_model=Envelope[CompanyStatsResponse])
async def get_stats(company: Company = Depends(get_current_company), db: Session = Depends(get_db)):
    return Envelope(data=stats_service.company_stats(db, company))


@router.get("/{company_id}", response_model=Envelope[CompanyPublicResponse])
async def get_company(company_id: int, db: Session = Depends(get_db)):
    """Public company page with its active listings."""
    return Envelope(data=profile_service.public_company(db, company_id))
