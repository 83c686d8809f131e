"""
Authentication Routes

POST /auth/register/student - Register a student and get a token
POST /auth/register/company - Register a company and get a token
POST /auth/login - Login and get JWT token
POST /auth/admin/login - Admin-only login
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.db.session import get_db
from jobboard.services import account_service
from jobboard.schemas.schemas import (
    AuthResponse, CompanyRegisterRequest, Envelope, LoginRequest, StudentRegisterRequest
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register/student", response_model=Envelope[AuthResponse], status_code=201)
async def register_student(request: StudentRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a student account together with its profile and skills.

    The response carries a token, so no separate login is needed.
    """
    data = account_service.register_student(db, request)
    return Envelope(message="Student registered successfully", data=data)


@router.post("/register/company", response_model=Envelope[AuthResponse], status_code=201)
async def register_company(request: CompanyRegisterRequest, db: Session = Depends(get_db)):
    """Register a company account. Email and tax id must be unused."""
    data = account_service.register_company(db, request)
    return Envelope(message="Company registered successfully", data=data)


@router.post("/login", response_model=Envelope[AuthResponse])
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    data = account_service.login(db, request)
    return Envelope(message="Login successful", data=data)


@router.post("/admin/login", response_model=Envelope[AuthResponse])
async def admin_login(request: LoginRequest, db: Session = Depends(get_db)):
    data = account_service.login(db, request, admin_only=True)
    return Envelope(message="Login successful", data=data)
