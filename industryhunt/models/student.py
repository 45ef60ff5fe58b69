"""Student model definitions."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Student(Base):
    """Student-specific profile attached to a user."""
    __tablename__ = "students"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    education = Column(String)
    skills = Column(JSON, default=list)
    interests = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="students")
