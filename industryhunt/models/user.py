"""User model definitions."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import relationship

from industryhunt.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Profile row for an authenticated account."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False, default="")
    email = Column(String, unique=True, index=True)
    avatar_url = Column(String)
    bio = Column(Text)
    role = Column(String, index=True)  # STUDENT/MENTOR/EMPLOYER
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    students = relationship("Student", back_populates="user", order_by="Student.created_at")
    mentors = relationship("Mentor", back_populates="user", order_by="Mentor.created_at")
    employers = relationship("Employer", back_populates="user", order_by="Employer.created_at")
