"""
Student Routes

GET /students/me - Get own profile with skills, experiences and applications
PUT /students/me - Update profile
PUT /students/password - Change password
POST /students/experiences - Add experience
PUT /students/experiences/{experience_id} - Update experience
DELETE /students/experiences/{experience_id} - Remove experience
POST /students/skills - Add skill
PUT /students/skills/{skill_id} - Update skill
DELETE /students/skills/{skill_id} - Remove skill
GET /students/applications - Get my applications
DELETE /students/applications/{application_id} - Withdraw application
POST /students/uploads/resume - Upload resume (PDF/DOCX)
POST /students/uploads/profile-picture - Upload profile picture
GET /students/{student_id} - Public profile
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from jobboard.api.dependencies import get_current_student
from jobboard.core.auth import Identity
from jobboard.core.permissions import require_role
from jobboard.db.session import get_db
from jobboard.models import ApplicationStatus, Student, UserRole
from jobboard.services import account_service, application_service, profile_service
from jobboard.utils.file_upload import PROFILE_PICTURES, RESUMES, read_picture, read_resume
from jobboard.schemas.schemas import (
    Envelope, ExperienceCreate, ExperienceResponse, ExperienceUpdate, PasswordUpdateRequest,
    SkillIn, SkillResponse, SkillUpdate, StudentApplicationResponse, StudentProfileResponse,
    StudentPublicResponse, StudentUpdate, UploadResponse
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/me", response_model=Envelope[StudentProfileResponse])
async def get_my_profile(student: Student = Depends(get_current_student)):
    return Envelope(data=StudentProfileResponse.model_validate(student))


@router.put("/me", response_model=Envelope[StudentPublicResponse])
async def update_my_profile(
    data: StudentUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Update profile. Only fields present in the request change."""
    student = profile_service.update_student(db, student, data)
    return Envelope(message="Profile updated successfully", data=StudentPublicResponse.model_validate(student))


@router.put("/password", response_model=Envelope[None])
async def update_password(
    data: PasswordUpdateRequest,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    account_service.change_password(db, student.user_id, data)
    return Envelope(message="Password updated successfully")


# ============================================================
# EXPERIENCES
# ============================================================

@router.post("/experiences", response_model=Envelope[ExperienceResponse], status_code=201)
async def add_experience(
    data: ExperienceCreate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    experience = profile_service.add_experience(db, student, data)
    return Envelope(message="Experience added successfully", data=ExperienceResponse.model_validate(experience))


@router.put("/experiences/{experience_id}", response_model=Envelope[ExperienceResponse])
async def update_experience(
    experience_id: int,
    data: ExperienceUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    experience = profile_service.update_experience(db, student, experience_id, data)
    return Envelope(message="Experience updated successfully", data=ExperienceResponse.model_validate(experience))


@router.delete("/experiences/{experience_id}", response_model=Envelope[None])
async def delete_experience(
    experience_id: int,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    profile_service.delete_experience(db, student, experience_id)
    return Envelope(message="Experience deleted successfully")


# ============================================================
# SKILLS
# ============================================================

@router.post("/skills", response_model=Envelope[SkillResponse], status_code=201)
async def add_skill(
    data: SkillIn,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    skill = profile_service.add_skill(db, student, data)
    return Envelope(message="Skill added successfully", data=SkillResponse.model_validate(skill))


@router.put("/skills/{skill_id}", response_model=Envelope[SkillResponse])
async def update_skill(
    skill_id: int,
    data: SkillUpdate,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    skill = profile_service.update_skill(db, student, skill_id, data)
    return Envelope(message="Skill updated successfully", data=SkillResponse.model_validate(skill))


@router.delete("/skills/{skill_id}", response_model=Envelope[None])
async def delete_skill(
    skill_id: int,
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    profile_service.delete_skill(db, student, skill_id)
    return Envelope(message="Skill deleted successfully")


# ============================================================
# APPLICATIONS
# ============================================================

@router.get("/applications", response_model=Envelope[List[StudentApplicationResponse]])
async def get_my_applications(
    status: Optional[ApplicationStatus] = Query(None),
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Get all my applications, newest first, with the job they target."""
    applications = application_service.student_applications(db, student, status)
    return Envelope(data=[StudentApplicationResponse.model_validate(a) for a in applications])


@router.delete("/applications/{application_id}", response_model=Envelope[None])
async def withdraw_application(
    application_id: int,
    identity: Identity = Depends(require_role(UserRole.STUDENT)),
    db: Session = Depends(get_db),
):
    application_service.withdraw(db, identity, application_id)
    return Envelope(message="Application withdrawn successfully")


# ============================================================
# UPLOADS
# ============================================================

@router.post("/uploads/resume", response_model=Envelope[UploadResponse])
async def upload_resume(
    file: UploadFile = File(...),
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Upload a resume (PDF or DOCX, max 5MB). Replaces the previous one."""
    content, ext = await read_resume(file)
    filename, url = profile_service.attach_upload(db, student, RESUMES, content, ext)
    return Envelope(message="Resume uploaded successfully", data=UploadResponse(url=url, filename=filename))


@router.post("/uploads/profile-picture", response_model=Envelope[UploadResponse])
async def upload_profile_picture(
    file: UploadFile = File(...),
    student: Student = Depends(get_current_student),
    db: Session = Depends(get_db),
):
    """Upload a profile picture (JPEG, PNG, GIF or WEBP, max 2MB)."""
    content, ext = await read_picture(file)
    filename, url = profile_service.attach_upload(db, student, PROFILE_PICTURES, content, ext)
    return Envelope(
        message="Profile picture uploaded successfully", data=UploadResponse(url=url, filename=filename)
    )


# Declared last so the fixed paths above win
@router.get("/{student_id}", response_model=Envelope[StudentPublicResponse])
async def get_student(student_id: int, db: Session = Depends(get_db)):
    student = profile_service.get_student(db, student_id)
    return Envelope(data=StudentPublicResponse.model_validate(student))
