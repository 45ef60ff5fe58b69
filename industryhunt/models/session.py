"""Scheduled meetings: mentor/student sessions and employer interviews."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Time

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class MentorshipSession(Base):
    __tablename__ = "mentorship_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    student_id = Column(String(36), ForeignKey("students.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, default="")
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    status = Column(String, default="PENDING")
    zoom_link = Column(String, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)


class EmployerSession(Base):
    __tablename__ = "employer_sessions"

    id = Column(String(36), primary_key=True, default=new_id)
    employer_id = Column(String(36), ForeignKey("employers.id"), index=True, nullable=False)
    applicant_id = Column(String(36), ForeignKey("students.id"), index=True, nullable=False)
    job_id = Column(String(36), ForeignKey("jobs.id"))
    title = Column(String, nullable=False)
    description = Column(Text, default="")
    date = Column(Date, nullable=False)
    time = Column(Time, nullable=False)
    status = Column(String, default="PENDING")
    meeting_link = Column(String, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow)
