"""Course model definitions."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import utcnow


class Course(Base):
    """Represents a course students can enroll in."""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Deleting a referenced course is refused, so the ORM must never null out course_id.
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        passive_deletes="all",
        order_by="Enrollment.id.desc()",
    )
