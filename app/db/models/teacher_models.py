# /sahayak-backend/app/db/models/teacher_models.py

"""
SQLAlchemy model for the `Teacher` entity. A teacher is the tenant: every
student, generated artifact, lesson plan and assessment is owned by exactly
one teacher through its `teacherId` column.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.orm import relationship

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Teacher(Base):
    id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    school = Column(String, nullable=True)
    subjects = Column(JSON, nullable=False, default=list)
    experience = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    # Settings page state: notifications, autoSave, offlineMode, theme, language.
    preferences = Column(JSON, nullable=False, default=dict)

    createdAt = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    lastLogin = Column(DateTime(timezone=True), nullable=True)
    updatedAt = Column(DateTime(timezone=True), nullable=True)

    students = relationship("Student", back_populates="owner", cascade="all, delete-orphan")
