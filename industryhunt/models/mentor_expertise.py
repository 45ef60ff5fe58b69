from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class MentorExpertise(Base):
    __tablename__ = "mentor_expertise"

    id = Column(String(36), primary_key=True, default=new_id)
    mentor_id = Column(String(36), ForeignKey("mentors.id"), index=True, nullable=False)
    skill_id = Column(String(36), ForeignKey("skills.id"), index=True, nullable=False)
    level = Column(Integer, nullable=False)  # 1-5
    created_at = Column(DateTime(timezone=True), default=utcnow)
