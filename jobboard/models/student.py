from sqlalchemy import (
    Boolean, Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import relationship

from jobboard.db.session import Base
from jobboard.models.common import TimestampMixin


class Student(TimestampMixin, Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(150), nullable=False, index=True)
    phone = Column(String(40))
    gender = Column(String(40))
    city = Column(String(120))
    state = Column(String(120))
    country = Column(String(120))
    special_needs = Column(String(255))
    bio = Column(Text)
    portfolio_url = Column(String(500))
    github_url = Column(String(500))
    linkedin_url = Column(String(500))
    is_freelancer = Column(Boolean, default=False, nullable=False)
    resume_url = Column(String(500))
    profile_picture = Column(String(500))

    user = relationship("User", back_populates="student")
    skills = relationship(
        "Skill", back_populates="student", order_by="Skill.id", cascade="all, delete-orphan"
    )
    experiences = relationship(
        "Experience", back_populates="student",
        order_by="Experience.start_date.desc()", cascade="all, delete-orphan"
    )
    applications = relationship(
        "Application", back_populates="student",
        order_by="Application.created_at.desc()", cascade="all, delete-orphan"
    )

    @property
    def email(self) -> str:
        return self.user.email if self.user else None

    def __repr__(self):
        return f"<Student {self.name}>"


class Skill(Base):
    __tablename__ = "skills"
    __table_args__ = (
        UniqueConstraint("student_id", "name", name="uq_skill_student_name"),
        CheckConstraint("level BETWEEN 1 AND 5", name="ck_skill_level_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    level = Column(Integer, nullable=False)

    student = relationship("Student", back_populates="skills")


class Experience(TimestampMixin, Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    company = Column(String(200), nullable=False)
    role = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)
    current = Column(Boolean, default=False, nullable=False)
    description = Column(Text)

    student = relationship("Student", back_populates="experiences")
