"""Mentor model definitions."""

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Mentor(Base):
    __tablename__ = "mentors"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    expertise = Column(JSON, default=list)
    years_of_experience = Column(Integer)
    hourly_rate = Column(Float)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="mentors")
