# /sahayak-backend/app/models/dashboard_model.py

# --- Core Imports ---
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

# --- Model Definitions ---

class RecentActivity(BaseModel):
    type: str
    title: str
    date: Optional[datetime] = None


class TeacherStats(BaseModel):
    """
    Defines the data contract for the dashboard statistics endpoint. Counts
    include records that are still waiting in the offline queue.
    """
    totalContent: int = Field(..., examples=[12])
    totalStudents: int = Field(..., examples=[34])
    totalAssessments: int = Field(..., examples=[20])
    totalLessonPlans: int = Field(..., examples=[4])
    contentByType: Dict[str, int] = Field(default_factory=dict)
    studentsByGrade: Dict[str, int] = Field(default_factory=dict)
    recentActivity: List[RecentActivity] = Field(default_factory=list)
