"""Employer model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Employer(Base):
    __tablename__ = "employers"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    company_name = Column(String, nullable=False, default="")
    industry = Column(String)
    company_size = Column(String)
    website = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="employers")
