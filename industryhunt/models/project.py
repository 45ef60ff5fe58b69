"""Project model definitions."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, String, Text

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Project(Base):
    """Short engagement an employer offers to students."""
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=new_id)
    employer_id = Column(String(36), ForeignKey("employers.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    is_paid = Column(Boolean, default=False)
    budget = Column(Float)
    deadline = Column(DateTime(timezone=True))
    status = Column(String, default="OPEN", index=True)  # OPEN/IN_PROGRESS/COMPLETED/CANCELLED
    technologies = Column(JSON, default=list)
    assigned_students = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class ProjectApplicant(Base):
    __tablename__ = "project_applicants"

    id = Column(String(36), primary_key=True, default=new_id)
    project_id = Column(String(36), ForeignKey("projects.id"), index=True, nullable=False)
    student_id = Column(String(36), ForeignKey("students.id"), index=True, nullable=False)
    cover_letter = Column(Text)
    status = Column(String, default="PENDING")
    applied_at = Column(DateTime(timezone=True), default=utcnow)
