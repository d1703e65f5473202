# /sahayak-backend/app/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, List, Optional

# --- Model Definitions ---

class StudentBase(BaseModel):
    """
    The base model for a Student. Contains fields common to create and read operations.
    """
    name: str = Field(..., min_length=1, description="The full name of the student.")
    grade: str = Field(..., min_length=1, description="The grade the student is enrolled in, e.g. '3'.")
    rollNumber: str = Field(..., min_length=1, description="The class roll number assigned by the school.")
    subjects: List[str] = Field(default_factory=list)

class StudentCreate(StudentBase):
    """The model used for creating a new student. Inherits all fields from the base."""
    pass

class StudentUpdate(BaseModel):
    """
    The model for updating a student. All fields are optional to allow for
    partial updates.
    """
    model_config = ConfigDict(from_attributes=True)

    name: Optional[str] = Field(default=None, min_length=1)
    grade: Optional[str] = Field(default=None)
    rollNumber: Optional[str] = Field(default=None)
    subjects: Optional[List[str]] = Field(default=None)
    performance: Optional[Dict[str, float]] = Field(default=None)

class Student(StudentBase):
    """
    The full representation of a Student resource, as stored in the backend or
    in the offline queue and returned by the API.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Backend ID, or a timestamp-based ID while the record is queued offline.")
    teacherId: str
    performance: Dict[str, float] = Field(default_factory=dict)
    createdAt: Optional[datetime] = None
    lastAssessment: Optional[datetime] = None
    isOffline: bool = Field(default=False, description="True while the record only exists in the offline queue.")
