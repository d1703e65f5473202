# /sahayak-backend/app/db/models/content_models.py

from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, JSON, DateTime, ForeignKey

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GeneratedContent(Base):
    """An AI-produced artifact (story, worksheet, visual aid, explanation) saved for reuse."""
    __tablename__ = "generated_content"

    id = Column(String, primary_key=True, index=True)
    type = Column(String, index=True, nullable=False)
    title = Column(String, nullable=False)
    # Plain text, or serialized JSON for structured generations.
    content = Column(Text, nullable=False)
    subject = Column(String, nullable=False, default="")
    grade = Column(String, nullable=False, default="")
    language = Column(String, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    meta = Column("metadata", JSON, nullable=False, default=dict)
    teacherId = Column(String, ForeignKey("teachers.id"), nullable=False, index=True)
    clientRef = Column(String, unique=True, index=True, nullable=True)
    createdAt = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class LessonPlan(Base):
    __tablename__ = "lesson_plans"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    grade = Column(String, nullable=False)
    week = Column(String, nullable=False, default="")
    objectives = Column(JSON, nullable=False, default=list)
    activities = Column(JSON, nullable=False, default=list)
    resources = Column(JSON, nullable=False, default=list)
    assessment = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default="draft")
    teacherId = Column(String, ForeignKey("teachers.id"), nullable=False, index=True)
    clientRef = Column(String, unique=True, index=True, nullable=True)
    createdAt = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updatedAt = Column(DateTime(timezone=True), nullable=True)
