from sqlalchemy import (
    JSON, Boolean, Column, Enum as SAEnum, ForeignKey, Integer, String, Text
)
from sqlalchemy.orm import relationship

from jobboard.db.session import Base
from jobboard.models.common import TimestampMixin
from jobboard.models.enums import JobLevel, LocationType


class JobListing(TimestampMixin, Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False, index=True)
    level = Column(SAEnum(JobLevel, native_enum=False, length=20), nullable=False, index=True)
    location_type = Column(SAEnum(LocationType, native_enum=False, length=20), nullable=False, index=True)
    location = Column(String(200))
    salary = Column(String(100))
    description = Column(Text, nullable=False)
    benefits = Column(Text)
    contact_info = Column(JSON, nullable=False, default=dict)  # email, phone, linkedin, website, instructions
    is_active = Column(Boolean, default=True, nullable=False, index=True)

    company = relationship("Company", back_populates="jobs")
    required_skills = relationship(
        "JobSkill", back_populates="job", order_by="JobSkill.id", cascade="all, delete-orphan"
    )
    applications = relationship(
        "Application", back_populates="job", order_by="Application.created_at.desc()",
        cascade="all, delete-orphan"
    )

    @property
    def company_name(self) -> str:
        return self.company.name if self.company else None

    # application_count is a column_property attached in models/application.py

    def __repr__(self):
        return f"<JobListing {self.title}, active={self.is_active}>"


class JobSkill(Base):
    """Required-skill tag on a listing (a plain name, not a student Skill)."""
    __tablename__ = "job_skills"

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)

    job = relationship("JobListing", back_populates="required_skills")
