"""
Shared route dependencies: profile loaders for each role and pagination.
"""

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from jobboard.core.auth import Identity
from jobboard.core.errors import NotFound
from jobboard.core.permissions import require_role
from jobboard.db.session import get_db
from jobboard.models import Admin, Company, Student, UserRole
from jobboard.schemas.schemas import PageParams

MAX_PAGE_SIZE = 100


async def get_current_student(
    identity: Identity = Depends(require_role(UserRole.STUDENT)),
    db: Session = Depends(get_db),
) -> Student:
    """Dependency - Require student role and load the student profile."""
    student = db.query(Student).filter(Student.user_id == identity.user_id).first()
    if not student:
        raise NotFound("Student profile not found")
    return student


async def get_current_company(
    identity: Identity = Depends(require_role(UserRole.COMPANY)),
    db: Session = Depends(get_db),
) -> Company:
    """Dependency - Require company role and load the company profile."""
    company = db.query(Company).filter(Company.user_id == identity.user_id).first()
    if not company:
        raise NotFound("Company profile not found")
    return company


async def get_current_admin(
    identity: Identity = Depends(require_role(UserRole.ADMIN)),
    db: Session = Depends(get_db),
) -> Admin:
    """Dependency - Require admin role and load the admin profile."""
    admin = db.query(Admin).filter(Admin.user_id == identity.user_id).first()
    if not admin:
        raise NotFound("Admin profile not found")
    return admin


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, description="Page size, capped at 100"),
) -> PageParams:
    return PageParams(page=page, limit=min(limit, MAX_PAGE_SIZE))
