"""
Stats Service - read-side aggregates for admins and companies.

Every call recomputes from the source tables.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from jobboard.core.errors import ValidationFailed
from jobboard.models import (
    Application, ApplicationStatus, Company, JobListing, Student, User, UserRole
)
from jobboard.models.common import utcnow
from jobboard.schemas.schemas import (
    ApplicationStats, CompanyStatsResponse, JobStats, PageParams, SystemStatsResponse, UserStats
)

logger = logging.getLogger(__name__)

NEW_WINDOW_DAYS = 30


def _window_start():
    return utcnow() - timedelta(days=NEW_WINDOW_DAYS)


def _status_counts(query: Query) -> Dict[str, int]:
    """Grouped count of a query over Application, with every status present."""
    counts = {status.value: 0 for status in ApplicationStatus}
    rows = query.with_entities(Application.status, func.count(Application.id)).group_by(Application.status)
    for status, count in rows:
        counts[status.value] = count
    return counts


def _application_stats(query: Query) -> ApplicationStats:
    by_status = _status_counts(query)
    return ApplicationStats(total=sum(by_status.values()), by_status=by_status)


def _job_stats(query: Query, include_new: bool) -> JobStats:
    total = query.count()
    active = query.filter(JobListing.is_active.is_(True)).count()
    new = query.filter(JobListing.created_at >= _window_start()).count() if include_new else None
    return JobStats(total=total, active=active, inactive=total - active, new=new)


def system_stats(db: Session) -> SystemStatsResponse:
    since = _window_start()
    role_counts = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())

    users = UserStats(
        total=sum(role_counts.values()),
        students=role_counts.get(UserRole.STUDENT, 0),
        companies=role_counts.get(UserRole.COMPANY, 0),
        admins=role_counts.get(UserRole.ADMIN, 0),
        new_students=db.query(Student).filter(Student.created_at >= since).count(),
        new_companies=db.query(Company).filter(Company.created_at >= since).count(),
    )
    return SystemStatsResponse(
        users=users,
        jobs=_job_stats(db.query(JobListing), include_new=True),
        applications=_application_stats(db.query(Application)),
    )


def company_stats(db: Session, company: Company) -> CompanyStatsResponse:
    """The system job and application counts restricted to one company."""
    jobs = db.query(JobListing).filter(JobListing.company_id == company.id)
    applications = (
        db.query(Application)
        .join(Application.job)
        .filter(JobListing.company_id == company.id)
    )
    return CompanyStatsResponse(
        jobs=_job_stats(jobs, include_new=False),
        applications=_application_stats(applications),
    )


def list_users(
    db: Session, user_type: Optional[str], search: Optional[str], page: PageParams
) -> Tuple[List[User], int]:
    """
    Paginated user list for admins.

    Args:
        user_type: role name, case-insensitive (student, company, admin)
        search: matches email, student name or company name
    """
    query = db.query(User).outerjoin(User.student).outerjoin(User.company)

    if user_type:
        try:
            role = UserRole(user_type.upper())
        except ValueError:
            raise ValidationFailed("Type must be one of: student, company, admin")
        query = query.filter(User.role == role)

    if search:
        term = search.strip()
        query = query.filter(or_(
            User.email.icontains(term, autoescape=True),
            Student.name.icontains(term, autoescape=True),
            Company.name.icontains(term, autoescape=True),
        ))

    total = query.count()
    users = (
        query.order_by(User.created_at.desc(), User.id.desc())
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    return users, total
