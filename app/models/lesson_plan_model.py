# /sahayak-backend/app/models/lesson_plan_model.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional


class LessonPlanStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


class LessonPlanCreate(BaseModel):
    title: str = Field(..., min_length=1)
    subject: str
    grade: str
    week: str = Field(default="", description="Free-form week label, e.g. 'Week 3'.")
    objectives: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)
    assessment: str = ""
    status: LessonPlanStatus = LessonPlanStatus.DRAFT


class LessonPlanUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    subject: Optional[str] = None
    grade: Optional[str] = None
    week: Optional[str] = None
    objectives: Optional[List[str]] = None
    activities: Optional[List[str]] = None
    resources: Optional[List[str]] = None
    assessment: Optional[str] = None
    status: Optional[LessonPlanStatus] = None


class LessonPlan(LessonPlanCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    teacherId: str
    createdAt: Optional[datetime] = None
    isOffline: bool = False
