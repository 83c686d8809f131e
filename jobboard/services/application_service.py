"""
Application Service - a student's candidacy for a job listing.

Status workflow:
    PENDING -> VIEWED -> INTERVIEWING -> ACCEPTED / REJECTED

Only the owning company moves the status, and any enumerated status may be
set from any other. Setting the current status again is a no-op.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from jobboard.core.auth import Identity
from jobboard.core.errors import Conflict, NotFound
from jobboard.core.permissions import ensure_owner_or_admin
from jobboard.db.session import commit_or_conflict
from jobboard.models import Application, ApplicationStatus, Company, JobListing, Student
from jobboard.schemas.schemas import PageParams

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied to this job"


def apply(db: Session, student: Student, job_id: int) -> Application:
    """Create a PENDING application for an active listing."""
    job = db.get(JobListing, job_id)
    if job is None or not job.is_active:
        raise NotFound("Job not found or not active")

    exists = (
        db.query(Application.id)
        .filter(Application.student_id == student.id, Application.job_id == job_id)
        .first()
    )
    if exists:
        raise Conflict(ALREADY_APPLIED)

    application = Application(student_id=student.id, job_id=job_id, status=ApplicationStatus.PENDING)
    db.add(application)
    commit_or_conflict(db, ALREADY_APPLIED)
    db.refresh(application)

    logger.info("Student %s applied to job %s", student.id, job_id)
    return application


def withdraw(db: Session, identity: Identity, application_id: int) -> None:
    application = db.get(Application, application_id)
    if application is None:
        raise NotFound("Application not found")
    ensure_owner_or_admin(
        identity, application.student.user_id, "Access denied: You can only withdraw your own applications"
    )

    db.delete(application)
    db.commit()
    logger.info("Application %s withdrawn", application_id)


def update_status(db: Session, company: Company, application_id: int, status: ApplicationStatus) -> Application:
    """Move an application on one of the company's own listings to `status`."""
    application = (
        db.query(Application)
        .join(Application.job)
        .filter(Application.id == application_id, JobListing.company_id == company.id)
        .first()
    )
    if application is None:
        raise NotFound("Application not found or does not belong to your company")

    if application.status != status:
        logger.info(
            "Application %s status %s -> %s", application.id, application.status.value, status.value
        )
        application.status = status
        db.commit()
        db.refresh(application)
    return application


def student_applications(
    db: Session, student: Student, status: Optional[ApplicationStatus] = None
) -> List[Application]:
    query = db.query(Application).filter(Application.student_id == student.id)
    if status:
        query = query.filter(Application.status == status)
    return query.order_by(Application.created_at.desc(), Application.id.desc()).all()


def company_applications(
    db: Session,
    company: Company,
    job_id: Optional[int] = None,
    status: Optional[ApplicationStatus] = None,
) -> List[Application]:
    """Applications on the company's listings, optionally for one job or status."""
    query = (
        db.query(Application)
        .join(Application.job)
        .filter(JobListing.company_id == company.id)
    )
    if job_id is not None:
        query = query.filter(Application.job_id == job_id)
    if status:
        query = query.filter(Application.status == status)
    return query.order_by(Application.created_at.desc(), Application.id.desc()).all()


def all_applications(
    db: Session, status: Optional[ApplicationStatus], page: PageParams
) -> Tuple[List[Application], int]:
    query = db.query(Application)
    if status:
        query = query.filter(Application.status == status)

    total = query.count()
    applications = (
        query.order_by(Application.created_at.desc(), Application.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    return applications, total
