"""
Account Service - registration, login, admin creation and password changes.

Every registration creates the User row and its role profile in a single
transaction and hands back a session token so the client is logged in
immediately.
"""

import logging

from sqlalchemy.orm import Session

from jobboard.core.auth import Identity, create_access_token, hash_password, verify_password
from jobboard.core.errors import Conflict, NotFound, Unauthenticated
from jobboard.db.session import commit_or_conflict
from jobboard.models import Admin, Company, Skill, Student, User, UserRole
from jobboard.schemas.schemas import (
    AdminCreateRequest, AdminCreatedResponse, AuthResponse, CompanyRegisterRequest,
    LoginRequest, PasswordUpdateRequest, StudentRegisterRequest
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
INVALID_ADMIN_CREDENTIALS = "Invalid admin credentials"


def identity_of(user: User) -> Identity:
    return Identity(user_id=user.id, email=user.email, role=user.role)


def _auth_response(user: User) -> AuthResponse:
    profile = user.profile
    return AuthResponse(
        id=profile.id if profile else None,
        name=profile.name if profile else None,
        email=user.email,
        role=user.role,
        token=create_access_token(identity_of(user)),
    )


def _ensure_email_free(db: Session, email: str) -> None:
    if db.query(User.id).filter(User.email == email).first():
        raise Conflict("Email already registered")


def register_student(db: Session, data: StudentRegisterRequest) -> AuthResponse:
    """Create a student account with its profile and initial skills."""
    _ensure_email_free(db, data.email)

    user = User(email=data.email, password_hash=hash_password(data.password), role=UserRole.STUDENT)
    Student(
        user=user,
        name=data.name,
        phone=data.phone,
        gender=data.gender,
        city=data.city,
        state=data.state,
        country=data.country,
        special_needs=data.special_needs,
        github_url=data.github_url,
        linkedin_url=data.linkedin_url,
        portfolio_url=data.portfolio_url,
        bio=data.bio,
        skills=[Skill(name=skill.name, level=skill.level) for skill in data.skills],
    )
    db.add(user)
    commit_or_conflict(db, "Email already registered")

    logger.info("Registered student user_id=%s", user.id)
    return _auth_response(user)


def register_company(db: Session, data: CompanyRegisterRequest) -> AuthResponse:
    """Create a company account. Email and tax id must both be unused."""
    _ensure_email_free(db, data.email)
    if db.query(Company.id).filter(Company.tax_id == data.tax_id).first():
        raise Conflict("Tax id already registered")

    user = User(email=data.email, password_hash=hash_password(data.password), role=UserRole.COMPANY)
    Company(
        user=user,
        name=data.company_name,
        responsible_name=data.responsible_name,
        tax_id=data.tax_id,
    )
    db.add(user)
    commit_or_conflict(db, "Email or tax id already registered")

    logger.info("Registered company user_id=%s", user.id)
    return _auth_response(user)


def create_admin(db: Session, data: AdminCreateRequest) -> AdminCreatedResponse:
    _ensure_email_free(db, data.email)

    user = User(email=data.email, password_hash=hash_password(data.password), role=UserRole.ADMIN)
    admin = Admin(user=user, name=data.name)
    db.add(user)
    commit_or_conflict(db, "Email already registered")

    logger.info("Created admin user_id=%s", user.id)
    return AdminCreatedResponse(id=admin.id, name=admin.name, email=user.email)


def login(db: Session, data: LoginRequest, admin_only: bool = False) -> AuthResponse:
    """
    Check credentials and issue a token.

    Unknown email and wrong password produce the same error so callers
    cannot tell which accounts exist.
    """
    failure = INVALID_ADMIN_CREDENTIALS if admin_only else INVALID_CREDENTIALS
    user = db.query(User).filter(User.email == data.email).first()

    if user is None or (admin_only and user.role != UserRole.ADMIN):
        logger.info("Rejected login: unknown account")
        raise Unauthenticated(failure)
    if not verify_password(data.password, user.password_hash):
        logger.info("Rejected login: bad password for user_id=%s", user.id)
        raise Unauthenticated(failure)

    return _auth_response(user)


def change_password(db: Session, user_id: int, data: PasswordUpdateRequest) -> None:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    if not verify_password(data.current_password, user.password_hash):
        raise Unauthenticated("Current password is incorrect")

    user.password_hash = hash_password(data.new_password)
    db.commit()
    logger.info("Password changed for user_id=%s", user_id)
