# /sahayak-backend/app/models/content_model.py

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional


class ContentType(str, Enum):
    STORY = "story"
    WORKSHEET = "worksheet"
    VISUAL_AID = "visual-aid"
    CONCEPT_EXPLANATION = "concept-explanation"


class GeneratedContentCreate(BaseModel):
    """
    The payload a generation page sends when the teacher presses "save".
    `content` is plain text, or serialized JSON for structured generations.
    """
    type: ContentType
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    subject: str = ""
    grade: str = ""
    language: str = ""
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class GeneratedContent(GeneratedContentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    teacherId: str
    createdAt: Optional[datetime] = None
    isOffline: bool = False
