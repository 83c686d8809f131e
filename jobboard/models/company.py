from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobboard.db.session import Base
from jobboard.models.common import TimestampMixin


class Company(TimestampMixin, Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    name = Column(String(200), nullable=False, index=True)
    responsible_name = Column(String(150), nullable=False)
    tax_id = Column(String(18), unique=True, nullable=False)

    user = relationship("User", back_populates="company")
    jobs = relationship(
        "JobListing", back_populates="company", order_by="JobListing.created_at.desc()"
    )

    @property
    def email(self) -> str:
        return self.user.email if self.user else None

    def __repr__(self):
        return f"<Company {self.name}>"
