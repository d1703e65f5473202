# /sahayak-backend/app/services/tool_service.py

"""
Teaching-content generators exposed as named callables.

Each handler takes a validated request model, issues one model call per unit
of output (differentiated worksheets issue one per grade) and returns the
unwrapped result. Transport and model failures surface as `GenerationError`
carrying a user-facing "Failed to generate <thing>." message; nothing is
retried.
"""

import base64
import binascii
import io
import json
import logging
from contextlib import contextmanager
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ValidationError

from ..models.tool_model import (
    AdaptiveExplanation, AdaptiveExplanationRequest, CallableName,
    DifferentiatedWorksheetRequest, EducationalGame, EducationalGameRequest,
    EducationalImageRequest, ExplainConceptRequest, LearningPath,
    LearningPathRequest, PersonalizedStoryRequest, StoryRequest,
    TranslationRequest, VisualAidPackage, VisualAidRequest,
    VisualAidWithImageRequest, WorksheetRequest,
)
from . import gemini_service, prompt_library

logger = logging.getLogger(__name__)

DEFAULT_VISUAL_AID_MATERIALS = ["Blackboard", "Chalk", "Ruler"]


class GenerationError(Exception):
    """A generation call failed; `str(error)` is safe to show to users."""


class UnknownFunctionError(LookupError):
    pass


@contextmanager
def _generating(thing: str):
    try:
        yield
    except GenerationError:
        raise
    except Exception as e:
        logger.error("Failed to generate %s: %s", thing, e)
        raise GenerationError(f"Failed to generate {thing}.") from e


def _decode_image(image_data: Optional[str]) -> List[Image.Image]:
    """Turns an optional base64 string or data URL into a list of Pillow images."""
    if not image_data:
        return []
    payload = image_data.split(",", 1)[1] if image_data.startswith("data:") else image_data
    try:
        image = Image.open(io.BytesIO(base64.b64decode(payload, validate=True)))
        image.load()
    except (binascii.Error, UnidentifiedImageError, OSError) as e:
        raise ValueError(f"imageData is not a readable image: {e}") from e
    return [image]


async def _generate_text(prompt: str, images: List[Image.Image]) -> str:
    if images:
        return await gemini_service.generate_multimodal_response(prompt, images)
    return await gemini_service.generate_text(prompt)


# --- Stories ---

async def _handle_story(request: StoryRequest) -> Dict[str, Any]:
    prompt = prompt_library.STORY_PROMPT.format(
        language=request.language, grade=request.grade,
        prompt=request.prompt, subject=request.subject,
    )
    with _generating("story"):
        story = await gemini_service.generate_text(prompt)
    return {"story": story}


async def _handle_personalized_story(request: PersonalizedStoryRequest) -> Dict[str, Any]:
    lines = []
    if request.studentName:
        lines.append(f"- Student name: {request.studentName}")
    if request.localContext:
        lines.append(f"- Local context: {request.localContext}")
    if request.previousFeedback:
        lines.append(f"- Previous feedback: {', '.join(request.previousFeedback)}")
    prompt = prompt_library.PERSONALIZED_STORY_PROMPT.format(
        language=request.language, grade=request.grade,
        prompt=request.prompt, subject=request.subject,
        personalization="\n".join(lines) or "- None provided.",
    )
    with _generating("personalized story"):
        story = await gemini_service.generate_text(prompt)
    return {"story": story}


# --- Worksheets ---

async def _handle_worksheet(request: WorksheetRequest) -> Dict[str, Any]:
    images = _decode_image(request.imageData)
    prompt = prompt_library.WORKSHEET_PROMPT.format(
        grade=request.grade, subject=request.subject, language=request.language,
        topic_line=f"Topic: {request.topic}" if request.topic else "",
        image_line="Base the questions on the attached textbook page." if images else "",
    )
    with _generating("worksheet"):
        worksheet = await _generate_text(prompt, images)
    return {"worksheet": worksheet}


async def _handle_differentiated_worksheet(request: DifferentiatedWorksheetRequest) -> Dict[str, Any]:
    images = _decode_image(request.imageData)
    worksheets: Dict[str, str] = {}
    with _generating("differentiated worksheet"):
        for grade in request.grades:
            prompt = prompt_library.DIFFERENTIATED_WORKSHEET_PROMPT.format(
                grade=grade, subject=request.subject, language=request.language,
                topic=request.topic, difficulty=request.difficulty,
                image_line="Base the questions on the attached textbook page." if images else "",
                visuals_line="- Suggestions for visual elements and diagrams." if request.includeVisuals else "",
            )
            worksheets[grade] = await _generate_text(prompt, images)
    return {"worksheets": worksheets}


# --- Visual aids ---

async def _handle_visual_aid(request: VisualAidRequest) -> Dict[str, Any]:
    prompt = prompt_library.VISUAL_AID_PROMPT.format(
        topic=request.topic, grade=request.grade,
        subject=request.subject, language=request.language,
    )
    with _generating("visual aid"):
        visual_aid = await gemini_service.generate_text(prompt)
    return {"visualAid": visual_aid}


async def _handle_visual_aid_with_image(request: VisualAidWithImageRequest) -> Dict[str, Any]:
    prompt = prompt_library.VISUAL_AID_PACKAGE_PROMPT.format(
        topic=request.topic, grade=request.grade,
        subject=request.subject, language=request.language,
    )
    with _generating("visual aid"):
        text = await gemini_service.generate_json_text(prompt)

    try:
        package = VisualAidPackage.model_validate(gemini_service.parse_json_text(text))
    except (json.JSONDecodeError, ValidationError):
        logger.warning("Visual aid package was not valid JSON; returning raw instructions.")
        package = VisualAidPackage(
            instructions=text,
            materials=list(DEFAULT_VISUAL_AID_MATERIALS),
            timeEstimate="15 minutes",
            difficulty="Medium",
            teachingTips=["Practice drawing before class"],
            studentEngagement=["Ask students to help with drawing"],
            variations=["Use colors if available"],
        )
    package.imageBase64 = None

    if request.includeImage:
        try:
            package.imageBase64 = await gemini_service.generate_image(
                prompt_library.VISUAL_AID_IMAGE_PROMPT.format(topic=request.topic)
            )
        except Exception as e:
            logger.warning("Image generation for visual aid '%s' failed, returning without image: %s", request.topic, e)

    return package.model_dump(exclude_none=True)


# --- Concept explanation ---

async def _handle_explain_concept(request: ExplainConceptRequest) -> Dict[str, Any]:
    prompt = prompt_library.EXPLAIN_CONCEPT_PROMPT.format(
        difficulty=request.difficulty, question=request.question,
        subject_line=f"Subject context: {request.subject}" if request.subject else "",
    )
    with _generating("concept explanation"):
        explanation = await gemini_service.generate_text(prompt)
    return {"explanation": explanation}


async def _handle_explain_concept_adaptively(request: AdaptiveExplanationRequest) -> Dict[str, Any]:
    prompt = prompt_library.ADAPTIVE_EXPLANATION_PROMPT.format(
        question=request.question,
        difficulty=request.difficulty,
        subject=request.subject or "general",
        language=request.language,
        student_level=request.studentLevel or "beginner",
        learning_style=request.learningStyle or "mixed",
        previous_questions=", ".join(request.previousQuestions) or "none",
    )
    with _generating("adaptive explanation"):
        text = await gemini_service.generate_json_text(prompt)

    try:
        explanation = AdaptiveExplanation.model_validate(gemini_service.parse_json_text(text))
    except (json.JSONDecodeError, ValidationError):
        logger.warning("Adaptive explanation was not valid JSON; wrapping raw text.")
        explanation = AdaptiveExplanation(explanation=text)
    return explanation.model_dump()


# --- Images and translation ---

async def _handle_educational_image(request: EducationalImageRequest) -> Dict[str, Any]:
    prompt = prompt_library.EDUCATIONAL_IMAGE_PROMPT.format(
        prompt=request.prompt, style=request.style,
        aspect_ratio=request.aspectRatio, language=request.language or "universal",
    )
    with _generating("educational image"):
        image_base64 = await gemini_service.generate_image(prompt)
    return {"imageBase64": image_base64}


async def _handle_translation(request: TranslationRequest) -> Dict[str, Any]:
    prompt = prompt_library.TRANSLATION_PROMPT.format(
        target_language=request.targetLanguage, text=request.text,
    )
    with _generating("translation"):
        translated = await gemini_service.generate_text(prompt, temperature=0.2)
    return {"translatedText": translated}


# --- Games and learning paths ---

async def _handle_educational_game(request: EducationalGameRequest) -> Dict[str, Any]:
    prompt = prompt_library.EDUCATIONAL_GAME_PROMPT.format(
        game_type=request.gameType.value, grade=request.grade,
        difficulty=request.difficulty, subject=request.subject or "general",
        game_rules=prompt_library.GAME_TYPE_RULES[request.gameType.value],
    )
    with _generating("educational game"):
        raw = await gemini_service.generate_json(prompt)
        game = EducationalGame.model_validate(raw)
    game.totalQuestions = len(game.questions)
    return {"game": game.model_dump()}


async def _handle_learning_path(request: LearningPathRequest) -> Dict[str, Any]:
    profile = request.studentProfile
    prompt = prompt_library.LEARNING_PATH_PROMPT.format(
        grade=profile.grade,
        subjects=", ".join(profile.subjects) or "none listed",
        strengths=", ".join(profile.strengths) or "none listed",
        challenges=", ".join(profile.challenges) or "none listed",
        interests=", ".join(profile.interests) or "none listed",
        duration=request.duration,
        language=request.language,
    )
    # No raw-text fallback: a path that cannot be parsed is a failed generation.
    with _generating("learning path"):
        raw = await gemini_service.generate_json(prompt)
        path = LearningPath.model_validate(raw)
    return {"learningPath": path.model_dump()}


# --- Callable Registry ---
Handler = Callable[[Any], Awaitable[Dict[str, Any]]]

FUNCTIONS: Dict[str, Tuple[Type[BaseModel], Handler]] = {
    CallableName.GENERATE_STORY.value: (StoryRequest, _handle_story),
    CallableName.GENERATE_PERSONALIZED_STORY.value: (PersonalizedStoryRequest, _handle_personalized_story),
    CallableName.GENERATE_WORKSHEET.value: (WorksheetRequest, _handle_worksheet),
    CallableName.GENERATE_DIFFERENTIATED_WORKSHEET.value: (DifferentiatedWorksheetRequest, _handle_differentiated_worksheet),
    CallableName.GENERATE_VISUAL_AID.value: (VisualAidRequest, _handle_visual_aid),
    CallableName.GENERATE_VISUAL_AID_WITH_IMAGE.value: (VisualAidWithImageRequest, _handle_visual_aid_with_image),
    CallableName.EXPLAIN_CONCEPT.value: (ExplainConceptRequest, _handle_explain_concept),
    CallableName.EXPLAIN_CONCEPT_ADAPTIVELY.value: (AdaptiveExplanationRequest, _handle_explain_concept_adaptively),
    CallableName.GENERATE_EDUCATIONAL_IMAGE.value: (EducationalImageRequest, _handle_educational_image),
    CallableName.TRANSLATE_CONTENT.value: (TranslationRequest, _handle_translation),
    CallableName.GENERATE_EDUCATIONAL_GAME.value: (EducationalGameRequest, _handle_educational_game),
    CallableName.GENERATE_LEARNING_PATH.value: (LearningPathRequest, _handle_learning_path),
}


async def invoke_function(name: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validates `data` against the named callable's request model and runs it.

    Raises:
        UnknownFunctionError: no callable is registered under `name`.
        ValueError: the payload does not satisfy the request model.
        GenerationError: the model call failed.
    """
    entry = FUNCTIONS.get(name)
    if entry is None:
        raise UnknownFunctionError(f"Function '{name}' does not exist.")
    request_model, handler = entry
    try:
        request = request_model.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(f"Invalid arguments for {name}: {e.errors(include_url=False)}") from e
    return await handler(request)
