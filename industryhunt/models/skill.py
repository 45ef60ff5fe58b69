"""Skill catalogue shared by mentor expertise and project technologies."""

from sqlalchemy import Column, DateTime, String

from industryhunt.database import Base
from industryhunt.models.user import new_id, utcnow


class Skill(Base):
    __tablename__ = "skills"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, unique=True, index=True, nullable=False)
    category = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow)
