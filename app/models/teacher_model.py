# /sahayak-backend/app/models/teacher_model.py

from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional


class TeacherPreferences(BaseModel):
    """Settings page state persisted with the teacher profile."""
    notifications: bool = True
    autoSave: bool = True
    offlineMode: bool = False
    theme: str = "light"
    language: str = "english"


class TeacherPreferencesUpdate(BaseModel):
    notifications: Optional[bool] = None
    autoSave: Optional[bool] = None
    offlineMode: Optional[bool] = None
    theme: Optional[str] = None
    language: Optional[str] = None


class TeacherProfileFields(BaseModel):
    name: str = Field(..., min_length=1)
    school: Optional[str] = None
    subjects: List[str] = Field(default_factory=list)
    experience: Optional[str] = None
    phone: Optional[str] = None


class TeacherCreate(TeacherProfileFields):
    """Signup payload: account credentials plus the initial profile."""
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)


class TeacherUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    school: Optional[str] = None
    subjects: Optional[List[str]] = None
    experience: Optional[str] = None
    phone: Optional[str] = None


class Teacher(TeacherProfileFields):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    createdAt: Optional[datetime] = None
    lastLogin: Optional[datetime] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
