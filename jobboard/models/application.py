from sqlalchemy import Column, Enum as SAEnum, ForeignKey, Integer, UniqueConstraint, func, select
from sqlalchemy.orm import column_property, relationship

from jobboard.db.session import Base
from jobboard.models.common import TimestampMixin
from jobboard.models.enums import ApplicationStatus
from jobboard.models.job import JobListing


class Application(TimestampMixin, Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("student_id", "job_id", name="uq_application_student_job"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    status = Column(
        SAEnum(ApplicationStatus, native_enum=False, length=20),
        default=ApplicationStatus.PENDING, nullable=False, index=True
    )

    student = relationship("Student", back_populates="applications")
    job = relationship("JobListing", back_populates="applications")

    def __repr__(self):
        return f"<Application student_id={self.student_id}, job_id={self.job_id}, status={self.status}>"


# Counted in the listing's own SELECT, so job lists do not load application rows
JobListing.application_count = column_property(
    select(func.count(Application.id))
    .where(Application.job_id == JobListing.id)
    .correlate_except(Application)
    .scalar_subquery()
)
