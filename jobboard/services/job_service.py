"""
Job Service - job listing lifecycle.

Listings belong to a company. Only the owning company or an admin may change
or delete one; anyone may read them.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobboard.core.auth import Identity
from jobboard.core.errors import NotFound, ValidationFailed
from jobboard.core.permissions import ensure_owner_or_admin
from jobboard.models import Application, Company, JobLevel, JobListing, JobSkill, LocationType
from jobboard.schemas.schemas import JobCreate, JobUpdate, PageParams

logger = logging.getLogger(__name__)

LOCATION_REQUIRED = (LocationType.HYBRID, LocationType.ONSITE)


@dataclass
class JobFilters:
    search: Optional[str] = None
    level: Optional[JobLevel] = None
    location_type: Optional[LocationType] = None
    company_id: Optional[int] = None
    active: Optional[bool] = None
    skills: Optional[List[str]] = None


def check_location(location_type: LocationType, location: Optional[str]) -> None:
    """Hybrid and onsite listings must say where."""
    if location_type in LOCATION_REQUIRED and not (location and location.strip()):
        raise ValidationFailed(
            "Location is required for hybrid or onsite jobs",
            [{"field": "location", "message": "Location is required for hybrid or onsite jobs"}],
        )


def clean_skill_names(names: Iterable[str]) -> List[str]:
    """Strip, drop blanks and duplicates, keep first-seen order."""
    seen = []
    for name in names:
        name = name.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def get_job(db: Session, job_id: int) -> JobListing:
    job = db.get(JobListing, job_id)
    if job is None:
        raise NotFound("Job not found")
    return job


def create_job(db: Session, company: Company, data: JobCreate) -> JobListing:
    """Insert the listing and its required skills in one transaction."""
    check_location(data.location_type, data.location)

    job = JobListing(
        company_id=company.id,
        title=data.title,
        level=data.level,
        location_type=data.location_type,
        location=data.location,
        salary=data.salary,
        description=data.description,
        benefits=data.benefits,
        contact_info=data.contact_info.model_dump(mode="json"),
        required_skills=[JobSkill(name=name) for name in clean_skill_names(data.required_skills)],
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info("Company %s created job %s", company.id, job.id)
    return job


def update_job(db: Session, identity: Identity, job_id: int, data: JobUpdate) -> JobListing:
    """
    Merge the supplied fields into the listing.

    - absent fields keep their stored value
    - contact_info is merged key by key over the stored record
    - required_skills, when supplied, replaces the whole skill set
    """
    job = get_job(db, job_id)
    ensure_owner_or_admin(
        identity, job.company.user_id, "Access denied: You can only update your own job listings"
    )

    changes = data.model_dump(exclude_unset=True)
    contact_changes = changes.pop("contact_info", None)
    skills = changes.pop("required_skills", None)

    location_type = changes.get("location_type", job.location_type)
    location = changes["location"] if "location" in changes else job.location
    check_location(location_type, location)

    for field, value in changes.items():
        setattr(job, field, value)

    if contact_changes is not None:
        merged = dict(job.contact_info or {})
        merged.update(data.contact_info.model_dump(mode="json", exclude_unset=True, exclude_none=True))
        job.contact_info = merged

    if skills is not None:
        # delete-orphan cascade drops every previous row before the new set goes in
        job.required_skills = [JobSkill(name=name) for name in clean_skill_names(skills)]

    db.commit()
    db.refresh(job)

    logger.info("User %s updated job %s (%s)", identity.user_id, job.id, ", ".join(sorted(data.model_fields_set)))
    return job


def delete_job(db: Session, identity: Identity, job_id: int) -> None:
    """Remove the listing with its applications and skill tags in one transaction."""
    job = get_job(db, job_id)
    ensure_owner_or_admin(
        identity, job.company.user_id, "Access denied: You can only delete your own job listings"
    )

    db.query(Application).filter(Application.job_id == job_id).delete(synchronize_session=False)
    db.query(JobSkill).filter(JobSkill.job_id == job_id).delete(synchronize_session=False)
    db.query(JobListing).filter(JobListing.id == job_id).delete(synchronize_session=False)
    db.commit()
    db.expunge_all()

    logger.info("User %s deleted job %s", identity.user_id, job_id)


def list_jobs(db: Session, filters: JobFilters, page: PageParams) -> Tuple[List[JobListing], int]:
    """Filtered, newest-first page of listings plus the total match count."""
    query = db.query(JobListing).join(JobListing.company)

    if filters.search:
        term = filters.search.strip()
        query = query.filter(or_(
            JobListing.title.icontains(term, autoescape=True),
            JobListing.description.icontains(term, autoescape=True),
            JobListing.location.icontains(term, autoescape=True),
            Company.name.icontains(term, autoescape=True),
        ))
    if filters.level:
        query = query.filter(JobListing.level == filters.level)
    if filters.location_type:
        query = query.filter(JobListing.location_type == filters.location_type)
    if filters.company_id is not None:
        query = query.filter(JobListing.company_id == filters.company_id)
    if filters.active is not None:
        query = query.filter(JobListing.is_active.is_(filters.active))
    if filters.skills:
        query = query.filter(JobListing.required_skills.any(JobSkill.name.in_(filters.skills)))

    total = query.count()
    jobs = (
        query.order_by(JobListing.created_at.desc(), JobListing.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    return jobs, total


def list_jobs_for_admin(
    db: Session, status: Optional[str], search: Optional[str], page: PageParams
) -> Tuple[List[JobListing], int]:
    """Admin view: status is 'active' or 'inactive'; search matches title or company."""
    query = db.query(JobListing).join(JobListing.company)

    if status == "active":
        query = query.filter(JobListing.is_active.is_(True))
    elif status == "inactive":
        query = query.filter(JobListing.is_active.is_(False))
    elif status:
        raise ValidationFailed("Status must be 'active' or 'inactive'")

    if search:
        term = search.strip()
        query = query.filter(or_(
            JobListing.title.icontains(term, autoescape=True),
            Company.name.icontains(term, autoescape=True),
        ))

    total = query.count()
    jobs = (
        query.order_by(JobListing.created_at.desc(), JobListing.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    return jobs, total


def company_jobs(db: Session, company: Company) -> List[JobListing]:
    return (
        db.query(JobListing)
        .filter(JobListing.company_id == company.id)
        .order_by(JobListing.created_at.desc(), JobListing.id.desc())
        .all()
    )


def set_job_active(db: Session, job_id: int, is_active: bool) -> JobListing:
    job = get_job(db, job_id)
    job.is_active = is_active
    db.commit()
    db.refresh(job)

    logger.info("Job %s %s", job_id, "activated" if is_active else "deactivated")
    return job
