# /sahayak-backend/app/models/tool_model.py

# --- Core Imports ---
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from enum import Enum

# --- Enumerations ---
class GameType(str, Enum):
    MATH = "math"
    PUZZLE = "puzzle"
    WORD = "word"

class CallableName(str, Enum):
    GENERATE_STORY = "generateStory"
    GENERATE_PERSONALIZED_STORY = "generatePersonalizedStory"
    GENERATE_WORKSHEET = "generateWorksheet"
    GENERATE_DIFFERENTIATED_WORKSHEET = "generateDifferentiatedWorksheet"
    GENERATE_VISUAL_AID = "generateVisualAid"
    GENERATE_VISUAL_AID_WITH_IMAGE = "generateVisualAidWithImage"
    EXPLAIN_CONCEPT = "explainConcept"
    EXPLAIN_CONCEPT_ADAPTIVELY = "explainConceptAdaptively"
    GENERATE_EDUCATIONAL_IMAGE = "generateEducationalImage"
    TRANSLATE_CONTENT = "translateContent"
    GENERATE_EDUCATIONAL_GAME = "generateEducationalGame"
    GENERATE_LEARNING_PATH = "generateLearningPath"


class _Request(BaseModel):
    # Grades arrive as "3" from forms and 3 from scripts.
    model_config = ConfigDict(coerce_numbers_to_str=True)

# --- Stories ---
class StoryRequest(_Request):
    prompt: str = Field(..., min_length=1)
    language: str = "english"
    grade: str
    subject: str = "general"

class PersonalizedStoryRequest(StoryRequest):
    studentName: Optional[str] = None
    localContext: Optional[str] = None
    previousFeedback: List[str] = Field(default_factory=list)

# --- Worksheets ---
class WorksheetRequest(_Request):
    imageData: Optional[str] = Field(default=None, description="Base64 or data URL of a textbook page.")
    subject: str
    grade: str
    language: str = "english"
    topic: Optional[str] = None

class DifferentiatedWorksheetRequest(_Request):
    imageData: Optional[str] = None
    topic: str = Field(..., min_length=1)
    subject: str
    grades: List[str] = Field(..., min_length=1)
    language: str = "english"
    difficulty: str = "medium"
    includeVisuals: bool = False

# --- Visual aids ---
class VisualAidRequest(_Request):
    topic: str = Field(..., min_length=1)
    subject: str
    grade: str
    language: str = "english"

class VisualAidWithImageRequest(VisualAidRequest):
    includeImage: bool = False

class VisualAidPackage(BaseModel):
    instructions: str
    materials: List[str] = Field(default_factory=list)
    timeEstimate: str = ""
    difficulty: str = ""
    teachingTips: List[str] = Field(default_factory=list)
    studentEngagement: List[str] = Field(default_factory=list)
    variations: List[str] = Field(default_factory=list)
    imageBase64: Optional[str] = None

# --- Concept explanation ---
class ExplainConceptRequest(_Request):
    question: str = Field(..., min_length=1)
    difficulty: str = "beginner"
    subject: Optional[str] = None

class AdaptiveExplanationRequest(ExplainConceptRequest):
    language: str = "english"
    studentLevel: Optional[str] = None
    previousQuestions: List[str] = Field(default_factory=list)
    learningStyle: Optional[str] = None

class AdaptiveExplanation(BaseModel):
    explanation: str
    visualAids: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    assessmentQuestions: List[str] = Field(default_factory=list)
    nextTopics: List[str] = Field(default_factory=list)

# --- Images and translation ---
class EducationalImageRequest(_Request):
    prompt: str = Field(..., min_length=1)
    aspectRatio: str = "4:3"
    style: str = "diagram"
    language: Optional[str] = None

class TranslationRequest(_Request):
    text: str = Field(..., min_length=1)
    targetLanguage: str = Field(..., min_length=1)

# --- Games ---
class EducationalGameRequest(_Request):
    gameType: GameType
    grade: str
    difficulty: str = "easy"
    subject: Optional[str] = None

class EducationalGame(BaseModel):
    title: str
    instructions: str
    questions: List[Dict[str, Any]] = Field(default_factory=list)
    timeLimit: int = 60
    totalQuestions: int = 0

# --- Learning paths ---
class StudentProfile(_Request):
    grade: str
    subjects: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)

class LearningPathRequest(_Request):
    studentProfile: StudentProfile
    language: str = "english"
    duration: str = "month"

class LearningPathWeek(BaseModel):
    week: int
    topics: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    assessments: List[str] = Field(default_factory=list)
    resources: List[str] = Field(default_factory=list)

class LearningPath(BaseModel):
    path: List[LearningPathWeek]
    adaptations: List[str] = Field(default_factory=list)
    parentGuidance: List[str] = Field(default_factory=list)

# --- Callable wire protocol ---
class CallableResponse(BaseModel):
    result: Dict[str, Any]

class HealthStatus(BaseModel):
    status: str
    timestamp: str
    version: str
    services: Dict[str, str]
    endpoints: List[str]
