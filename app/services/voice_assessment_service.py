# /sahayak-backend/app/services/voice_assessment_service.py

"""
Reading assessment from a recorded audio clip.

Scoring is behind the `ReadingScorer` interface. The only implementation
today, `PlaceholderReadingScorer`, does not analyse the audio: it waits a
fixed delay and draws sub-scores from fixed ranges. A real speech model
plugs in by implementing `score()`.
"""

import asyncio
import logging
import random
import time
from typing import Any, Dict, Optional

from ..core import config
from ..models.assessment_model import AssessmentType, ReadingScores
from . import storage_service
from .data_service import DataService

logger = logging.getLogger(__name__)

EXCELLENT_FEEDBACK = "Excellent reading! Your pronunciation and fluency are very good. Keep up the great work!"
GOOD_FEEDBACK = "Good reading! Focus on pronunciation of difficult words. Practice reading aloud daily."
PRACTICE_FEEDBACK = "Keep practicing! Try reading slowly and clearly. Focus on each word pronunciation."


def feedback_for(overall_score: int) -> str:
    if overall_score >= 90:
        return EXCELLENT_FEEDBACK
    if overall_score >= 75:
        return GOOD_FEEDBACK
    return PRACTICE_FEEDBACK


class ReadingScorer:
    name = "base"

    async def score(self, audio: bytes, target_text: str, language: str) -> ReadingScores:
        raise NotImplementedError


class PlaceholderReadingScorer(ReadingScorer):
    name = "placeholder"

    # Half-open ranges: the top value is never drawn.
    ACCURACY_RANGE = (80, 100)
    FLUENCY_RANGE = (75, 100)
    PRONUNCIATION_RANGE = (70, 100)

    def __init__(self, delay_seconds: Optional[float] = None, rng: Optional[random.Random] = None):
        self.delay_seconds = config.READING_ASSESSMENT_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.rng = rng or random.Random()

    async def score(self, audio: bytes, target_text: str, language: str) -> ReadingScores:
        if not audio:
            raise ValueError("An audio recording is required for a reading assessment.")
        if not target_text or not target_text.strip():
            raise ValueError("The text the student read is required for a reading assessment.")

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        accuracy = self.rng.randrange(*self.ACCURACY_RANGE)
        fluency = self.rng.randrange(*self.FLUENCY_RANGE)
        pronunciation = self.rng.randrange(*self.PRONUNCIATION_RANGE)
        overall = round((accuracy + fluency + pronunciation) / 3)
        return ReadingScores(
            accuracy=accuracy,
            fluency=fluency,
            pronunciation=pronunciation,
            overallScore=overall,
            feedback=feedback_for(overall),
        )


def get_reading_scorer() -> ReadingScorer:
    return PlaceholderReadingScorer()


async def run_reading_assessment(
    data: DataService,
    scorer: ReadingScorer,
    student_id: str,
    audio: bytes,
    audio_filename: str,
    text: str,
    language: str,
    grade: str,
) -> Dict[str, Any]:
    """
    Scores a reading, stores the recording and records the assessment.

    Returns a dict with `assessment` (the saved record) and `result` (the
    scores). Raises ValueError for bad input and LookupError if the student
    does not belong to the current teacher.
    """
    if not data.get_student(student_id):
        raise LookupError(f"Student with ID {student_id} not found.")

    scores = await scorer.score(audio, text, language)

    extension = audio_filename.rsplit(".", 1)[-1] if "." in audio_filename else "webm"
    audio_path = f"audio/{data.teacher_id}/{student_id}/{int(time.time() * 1000)}.{extension}"
    audio_url = storage_service.upload_file(audio, audio_path)

    assessment = data.save_assessment({
        "studentId": student_id,
        "type": AssessmentType.READING.value,
        "subject": "reading",
        "score": scores.overallScore,
        "feedback": scores.feedback,
        "audioUrl": audio_url,
        "metadata": {
            "accuracy": scores.accuracy,
            "fluency": scores.fluency,
            "pronunciation": scores.pronunciation,
            "text": text,
            "language": language,
            "grade": grade,
            "scorer": scorer.name,
        },
    })
    if assessment is None:
        raise LookupError(f"Student with ID {student_id} not found.")
    logger.info("Reading assessment for student %s scored %d.", student_id, scores.overallScore)
    return {"assessment": assessment, "result": scores}
