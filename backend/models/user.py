"""User model definitions."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base


class Role(str, Enum):
    ADMIN = "ADMIN"
    STUDENT = "STUDENT"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Represents an account that can sign in."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)  # trimmed + lowercased
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.STUDENT.value)  # ADMIN/STUDENT
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    student = relationship("Student", back_populates="user", uselist=False)
