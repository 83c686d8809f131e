"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from jobboard.models.enums import ApplicationStatus, JobLevel, LocationType, UserRole

DataT = TypeVar("DataT")


def _reject_explicit_nulls(model: BaseModel, fields: tuple) -> None:
    """Optional in an update means 'may be omitted', not 'may be cleared'."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null")


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ============================================================
# ENVELOPE
# ============================================================

class Envelope(BaseModel, Generic[DataT]):
    status: str = "success"
    message: Optional[str] = None
    data: Optional[DataT] = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


@dataclass
class PageParams:
    """Parsed page/limit query values."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def describe(self, total: int) -> Pagination:
        return Pagination(
            total=total,
            page=self.page,
            limit=self.limit,
            pages=math.ceil(total / self.limit),
        )


# ============================================================
# AUTH SCHEMAS
# ============================================================

class SkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: int = Field(..., ge=1, le=5)


class StudentRegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: str = Field(..., min_length=1, max_length=40)
    gender: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    special_needs: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    bio: Optional[str] = None
    skills: List[SkillIn] = []

    @field_validator("skills")
    @classmethod
    def skill_names_unique(cls, skills: List[SkillIn]) -> List[SkillIn]:
        names = [skill.name for skill in skills]
        if len(names) != len(set(names)):
            raise ValueError("Skill names must be unique")
        return skills


class CompanyRegisterRequest(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    responsible_name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    tax_id: str = Field(..., min_length=14, max_length=18)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=6)


class PasswordUpdateRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class AuthResponse(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    email: str
    role: UserRole
    token: str
    token_type: str = "bearer"


class AdminCreatedResponse(BaseModel):
    id: int
    name: str
    email: str


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    phone: Optional[str] = Field(None, min_length=1, max_length=40)
    gender: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    special_needs: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    is_freelancer: Optional[bool] = None
    bio: Optional[str] = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("name", "phone", "is_freelancer"))
        return self


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    level: Optional[int] = Field(None, ge=1, le=5)

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("name", "level"))
        return self


class SkillResponse(ORMModel):
    id: int
    name: str
    level: int


class ExperienceCreate(BaseModel):
    company: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


class ExperienceUpdate(BaseModel):
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    current: Optional[bool] = None
    description: Optional[str] = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("company", "role", "start_date", "current"))
        return self


class ExperienceResponse(ORMModel):
    id: int
    company: str
    role: str
    start_date: date
    end_date: Optional[date] = None
    current: bool
    description: Optional[str] = None


class StudentPublicResponse(ORMModel):
    id: int
    name: str
    phone: Optional[str] = None
    gender: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    special_needs: Optional[str] = None
    bio: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    is_freelancer: bool = False
    resume_url: Optional[str] = None
    profile_picture: Optional[str] = None
    skills: List[SkillResponse] = []
    experiences: List[ExperienceResponse] = []
    created_at: datetime
    updated_at: datetime


class StudentBrief(ORMModel):
    id: int
    name: str
    profile_picture: Optional[str] = None


class StudentApplicantResponse(StudentBrief):
    """What a company sees about a candidate."""
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    resume_url: Optional[str] = None
    skills: List[SkillResponse] = []


class UploadResponse(BaseModel):
    url: str
    filename: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    responsible_name: Optional[str] = Field(None, min_length=1, max_length=150)

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(self, ("name", "responsible_name"))
        return self


class CompanyResponse(ORMModel):
    id: int
    user_id: int
    name: str
    responsible_name: str
    tax_id: str
    email: str
    created_at: datetime
    updated_at: datetime


class CompanyBrief(ORMModel):
    id: int
    name: str
    responsible_name: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class ContactInfo(BaseModel):
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    instructions: Optional[str] = None


class ContactInfoCreate(ContactInfo):
    email: EmailStr


class JobCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    level: JobLevel
    location_type: LocationType
    location: Optional[str] = Field(None, max_length=200)
    salary: Optional[str] = Field(None, max_length=100)
    description: str = Field(..., min_length=1)
    benefits: Optional[str] = None
    contact_info: ContactInfoCreate
    required_skills: List[str] = []


class JobUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    level: Optional[JobLevel] = None
    location_type: Optional[LocationType] = None
    location: Optional[str] = Field(None, max_length=200)
    salary: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, min_length=1)
    benefits: Optional[str] = None
    contact_info: Optional[ContactInfo] = None
    required_skills: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def required_columns_not_null(self):
        _reject_explicit_nulls(
            self,
            ("title", "level", "location_type", "description", "contact_info", "required_skills", "is_active"),
        )
        return self


class JobResponse(ORMModel):
    id: int
    company_id: int
    company_name: Optional[str] = None
    title: str
    level: JobLevel
    location_type: LocationType
    location: Optional[str] = None
    salary: Optional[str] = None
    description: str
    benefits: Optional[str] = None
    contact_info: ContactInfo = ContactInfo()
    is_active: bool
    required_skills: List[str] = []
    created_at: datetime
    updated_at: datetime

    @field_validator("required_skills", mode="before")
    @classmethod
    def skill_names(cls, value):
        return [getattr(skill, "name", skill) for skill in value or []]

    @field_validator("contact_info", mode="before")
    @classmethod
    def contact_info_dict(cls, value):
        return value or {}


class ApplicationSummary(ORMModel):
    id: int
    status: ApplicationStatus
    created_at: datetime


class CompanyJobResponse(JobResponse):
    applications: List[ApplicationSummary] = []


class JobDetailResponse(JobResponse):
    company: CompanyBrief
    application_count: int = 0


class AdminJobResponse(JobResponse):
    application_count: int = 0


class JobListData(BaseModel):
    jobs: List[JobResponse]
    pagination: Pagination


class AdminJobListData(BaseModel):
    jobs: List[AdminJobResponse]
    pagination: Pagination


class JobStatusUpdate(BaseModel):
    is_active: bool


class CompanyPublicResponse(CompanyBrief):
    created_at: datetime
    jobs: List[JobResponse] = []


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(ORMModel):
    id: int
    student_id: int
    job_id: int
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime


class JobBrief(ORMModel):
    id: int
    title: str
    company_id: int
    company_name: Optional[str] = None


class StudentApplicationResponse(ApplicationResponse):
    job: JobResponse


class CompanyApplicationResponse(ApplicationResponse):
    student: StudentApplicantResponse
    job: JobBrief


class AdminApplicationResponse(ApplicationResponse):
    student: StudentBrief
    job: JobBrief


class ApplicationListData(BaseModel):
    applications: List[AdminApplicationResponse]
    pagination: Pagination


class StudentProfileResponse(StudentPublicResponse):
    email: str
    applications: List[StudentApplicationResponse] = []


# ============================================================
# ADMIN / ANALYTICS SCHEMAS
# ============================================================

class AdminUserResponse(ORMModel):
    id: int
    email: str
    role: UserRole
    created_at: datetime
    student: Optional[StudentBrief] = None
    company: Optional[CompanyBrief] = None


class UserListData(BaseModel):
    users: List[AdminUserResponse]
    pagination: Pagination


class UserStats(BaseModel):
    total: int
    students: int
    companies: int
    admins: int
    new_students: int
    new_companies: int


class JobStats(BaseModel):
    total: int
    active: int
    inactive: int
    new: Optional[int] = None


class ApplicationStats(BaseModel):
    total: int
    by_status: Dict[str, int]


class SystemStatsResponse(BaseModel):
    users: UserStats
    jobs: JobStats
    applications: ApplicationStats


class CompanyStatsResponse(BaseModel):
    jobs: JobStats
    applications: ApplicationStats


class HealthResponse(BaseModel):
    database: str
