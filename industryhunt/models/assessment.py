from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class AssessmentQuestion(Base):
    """Multiple-choice screening question written by an employer account."""
    __tablename__ = "assessment_questions"

    id = Column(String(36), primary_key=True, default=new_id)
    # Owning account's users.id.
    employer_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    job_id = Column(String(36), ForeignKey("jobs.id"))
    question = Column(Text, nullable=False)
    options = Column(JSON, default=list)
    correct_option = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
