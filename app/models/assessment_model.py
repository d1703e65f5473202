# /sahayak-backend/app/models/assessment_model.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, Optional

# --- Core Enumerations ---
class AssessmentType(str, Enum):
    READING = "reading"
    COMPREHENSION = "comprehension"
    SPEAKING = "speaking"

# --- API Contract Models ---

class AssessmentCreate(BaseModel):
    studentId: str
    type: AssessmentType
    subject: str
    score: float = Field(..., ge=0, le=100)
    feedback: str = ""
    audioUrl: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

class Assessment(AssessmentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    teacherId: str
    createdAt: Optional[datetime] = None
    isOffline: bool = False

class ReadingScores(BaseModel):
    """Sub-scores produced by a reading scorer, all on a 0-100 scale."""
    accuracy: int = Field(..., ge=0, le=100)
    fluency: int = Field(..., ge=0, le=100)
    pronunciation: int = Field(..., ge=0, le=100)
    overallScore: int = Field(..., ge=0, le=100)
    feedback: str

class ReadingAssessmentResponse(BaseModel):
    assessment: Assessment
    result: ReadingScores
