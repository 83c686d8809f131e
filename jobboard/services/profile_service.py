"""
Profile Service - student and company profile management.

Covers the student's own profile, skills and experiences, attaching uploaded
files, the company profile, and the public read-only views of both.
"""

import logging
from typing import Tuple

from sqlalchemy.orm import Session

from jobboard.core.errors import Conflict, NotFound
from jobboard.db.session import commit_or_conflict
from jobboard.models import Company, Experience, JobListing, Skill, Student
from jobboard.schemas.schemas import (
    CompanyPublicResponse, CompanyUpdate, ExperienceCreate, ExperienceUpdate,
    JobResponse, SkillIn, SkillUpdate, StudentUpdate
)
from jobboard.utils.file_upload import PROFILE_PICTURES, RESUMES, remove_upload, save_upload

logger = logging.getLogger(__name__)

DUPLICATE_SKILL = "You already have this skill registered"


# ============================================================
# STUDENTS
# ============================================================

def get_student(db: Session, student_id: int) -> Student:
    student = db.get(Student, student_id)
    if student is None:
        raise NotFound("Student not found")
    return student


def update_student(db: Session, student: Student, data: StudentUpdate) -> Student:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(student, field, value)
    db.commit()
    db.refresh(student)

    logger.info("Student %s updated profile (%s)", student.id, ", ".join(sorted(data.model_fields_set)))
    return student


def _has_skill(db: Session, student_id: int, name: str, exclude_id: int = None) -> bool:
    query = db.query(Skill.id).filter(Skill.student_id == student_id, Skill.name == name)
    if exclude_id is not None:
        query = query.filter(Skill.id != exclude_id)
    return query.first() is not None


def _own_skill(db: Session, student: Student, skill_id: int) -> Skill:
    skill = db.query(Skill).filter(Skill.id == skill_id, Skill.student_id == student.id).first()
    if skill is None:
        raise NotFound("Skill not found or does not belong to this student")
    return skill


def add_skill(db: Session, student: Student, data: SkillIn) -> Skill:
    if _has_skill(db, student.id, data.name):
        raise Conflict(DUPLICATE_SKILL)

    skill = Skill(student_id=student.id, name=data.name, level=data.level)
    db.add(skill)
    commit_or_conflict(db, DUPLICATE_SKILL)
    db.refresh(skill)
    return skill


def update_skill(db: Session, student: Student, skill_id: int, data: SkillUpdate) -> Skill:
    """Change name and/or level. Renaming onto another owned skill is a conflict."""
    skill = _own_skill(db, student, skill_id)
    changes = data.model_dump(exclude_unset=True)

    if "name" in changes and _has_skill(db, student.id, changes["name"], exclude_id=skill.id):
        raise Conflict(DUPLICATE_SKILL)

    for field, value in changes.items():
        setattr(skill, field, value)
    commit_or_conflict(db, DUPLICATE_SKILL)
    db.refresh(skill)
    return skill


def delete_skill(db: Session, student: Student, skill_id: int) -> None:
    skill = _own_skill(db, student, skill_id)
    db.delete(skill)
    db.commit()


def _own_experience(db: Session, student: Student, experience_id: int) -> Experience:
    experience = (
        db.query(Experience)
        .filter(Experience.id == experience_id, Experience.student_id == student.id)
        .first()
    )
    if experience is None:
        raise NotFound("Experience not found or does not belong to this student")
    return experience


def add_experience(db: Session, student: Student, data: ExperienceCreate) -> Experience:
    experience = Experience(student_id=student.id, **data.model_dump())
    db.add(experience)
    db.commit()
    db.refresh(experience)
    return experience


def update_experience(db: Session, student: Student, experience_id: int, data: ExperienceUpdate) -> Experience:
    experience = _own_experience(db, student, experience_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(experience, field, value)
    db.commit()
    db.refresh(experience)
    return experience


def delete_experience(db: Session, student: Student, experience_id: int) -> None:
    experience = _own_experience(db, student, experience_id)
    db.delete(experience)
    db.commit()


def attach_upload(db: Session, student: Student, kind: str, content: bytes, ext: str) -> Tuple[str, str]:
    """
    Store the file and point the profile at it.

    The new file replaces the old reference; if the profile update fails the
    stored file is removed again.
    """
    filename, url = save_upload(content, ext, kind, student.user_id)
    try:
        if kind == RESUMES:
            student.resume_url = url
        elif kind == PROFILE_PICTURES:
            student.profile_picture = url
        else:
            raise ValueError(f"Unknown upload kind {kind!r}")
        db.commit()
    except Exception:
        db.rollback()
        remove_upload(kind, filename)
        raise

    logger.info("Student %s uploaded %s", student.id, kind)
    return filename, url


# ============================================================
# COMPANIES
# ============================================================

def get_company(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if company is None:
        raise NotFound("Company not found")
    return company


def update_company(db: Session, company: Company, data: CompanyUpdate) -> Company:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(company, field, value)
    db.commit()
    db.refresh(company)

    logger.info("Company %s updated profile", company.id)
    return company


def public_company(db: Session, company_id: int) -> CompanyPublicResponse:
    """Public company page: basic details and active listings only."""
    company = get_company(db, company_id)
    jobs = (
        db.query(JobListing)
        .filter(JobListing.company_id == company.id, JobListing.is_active.is_(True))
        .order_by(JobListing.created_at.desc(), JobListing.id.desc())
        .all()
    )
    return CompanyPublicResponse(
        id=company.id,
        name=company.name,
        responsible_name=company.responsible_name,
        created_at=company.created_at,
        jobs=[JobResponse.model_validate(job) for job in jobs],
    )
