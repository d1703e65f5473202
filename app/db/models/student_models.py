# /sahayak-backend/app/db/models/student_models.py

"""
SQLAlchemy models for the `Student` and `Assessment` entities.

A student belongs to one teacher. Assessments hang off a student; deleting a
student removes every assessment whose `studentId` points at it.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Student(Base):
    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    grade = Column(String, nullable=False)
    rollNumber = Column(String, nullable=False)
    subjects = Column(JSON, nullable=False, default=list)
    # Subject -> latest score map maintained by the teacher.
    performance = Column(JSON, nullable=False, default=dict)

    teacherId = Column(String, ForeignKey("teachers.id"), nullable=False, index=True)
    # Idempotency key of the offline write this row was replayed from, if any.
    clientRef = Column(String, unique=True, index=True, nullable=True)

    createdAt = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updatedAt = Column(DateTime(timezone=True), nullable=True)
    lastAssessment = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("Teacher", back_populates="students")
    assessments = relationship("Assessment", back_populates="student", cascade="all, delete-orphan")


class Assessment(Base):
    id = Column(String, primary_key=True, index=True)
    studentId = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    teacherId = Column(String, ForeignKey("teachers.id"), nullable=False, index=True)
    type = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    score = Column(Float, nullable=False)
    feedback = Column(String, nullable=False, default="")
    audioUrl = Column(String, nullable=True)
    # `metadata` is reserved on declarative classes, so the attribute is `meta`.
    meta = Column("metadata", JSON, nullable=False, default=dict)
    clientRef = Column(String, unique=True, index=True, nullable=True)
    createdAt = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    student = relationship("Student", back_populates="assessments")
