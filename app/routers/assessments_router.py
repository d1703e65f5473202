# /sahayak-backend/app/routers/assessments_router.py

"""
Endpoints for student assessments: listing, manual entry and the voice-based
reading assessment. Every call is scoped to the authenticated teacher through
the injected DataService.
"""

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Query
from typing import List, Optional

# --- Application-specific Imports ---
from ..core.deps import get_data_service
from ..models import assessment_model
from ..services import voice_assessment_service
from ..services.data_service import DataService
from ..services.voice_assessment_service import ReadingScorer, get_reading_scorer

router = APIRouter()


@router.get("", response_model=List[assessment_model.Assessment], summary="Get Assessments")
def get_assessments(
    studentId: Optional[str] = Query(default=None, description="Only return this student's assessments."),
    data: DataService = Depends(get_data_service),
):
    return data.get_assessments(studentId)


@router.post("", response_model=assessment_model.Assessment, status_code=status.HTTP_201_CREATED, summary="Record an Assessment")
def save_assessment(assessment: assessment_model.AssessmentCreate, data: DataService = Depends(get_data_service)):
    saved = data.save_assessment(assessment.model_dump(mode="json"))
    if saved is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {assessment.studentId} not found")
    return saved


@router.post(
    "/reading",
    response_model=assessment_model.ReadingAssessmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Score a Recorded Reading",
)
async def run_reading_assessment(
    studentId: str = Form(...),
    text: str = Form(..., description="The passage the student was asked to read."),
    language: str = Form("english"),
    grade: str = Form(""),
    audio: UploadFile = File(..., description="The student's recording."),
    data: DataService = Depends(get_data_service),
    scorer: ReadingScorer = Depends(get_reading_scorer),
):
    audio_bytes = await audio.read()
    try:
        return await voice_assessment_service.run_reading_assessment(
            data=data,
            scorer=scorer,
            student_id=studentId,
            audio=audio_bytes,
            audio_filename=audio.filename or "recording.webm",
            text=text,
            language=language,
            grade=grade,
        )
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
