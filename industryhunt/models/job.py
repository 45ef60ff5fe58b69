"""Job posting and job application model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Job(Base):
    """A position an employer has posted."""
    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=new_id)
    employer_id = Column(String(36), ForeignKey("employers.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text)
    location = Column(String)
    salary_range = Column(String)
    deadline = Column(DateTime(timezone=True))
    status = Column(String, default="ACTIVE", index=True)  # ACTIVE/CLOSED/DRAFT
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(String(36), primary_key=True, default=new_id)
    job_id = Column(String(36), ForeignKey("jobs.id"), index=True, nullable=False)
    student_id = Column(String(36), ForeignKey("students.id"), index=True, nullable=False)
    cover_letter = Column(Text)
    status = Column(String, default="PENDING")
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
