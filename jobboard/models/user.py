from sqlalchemy import Column, Enum as SAEnum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobboard.db.session import Base
from jobboard.models.common import TimestampMixin
from jobboard.models.enums import UserRole


class User(TimestampMixin, Base):
    """Login account. Exactly one of student/company/admin is set, matching role."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SAEnum(UserRole, native_enum=False, length=20), nullable=False, index=True)

    student = relationship("Student", back_populates="user", uselist=False, cascade="all, delete-orphan")
    company = relationship("Company", back_populates="user", uselist=False, cascade="all, delete-orphan")
    admin = relationship("Admin", back_populates="user", uselist=False, cascade="all, delete-orphan")

    @property
    def profile(self):
        if self.role == UserRole.STUDENT:
            return self.student
        if self.role == UserRole.COMPANY:
            return self.company
        return self.admin

    def __repr__(self):
        return f"<User {self.email}, role={self.role}>"


class Admin(TimestampMixin, Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(150), nullable=False)

    user = relationship("User", back_populates="admin")

    def __repr__(self):
        return f"<Admin {self.name}>"
