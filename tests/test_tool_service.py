# /tests/test_tool_service.py

import base64
import io
import json

import pytest
from PIL import Image

from app.services import tool_service
from app.services.tool_service import GenerationError, UnknownFunctionError

GEMINI = "app.services.gemini_service"


@pytest.fixture
def page_image_b64():
    """A tiny PNG, standing in for a photographed textbook page."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "white").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


# --- Stories ---

@pytest.mark.asyncio
async def test_generate_story_end_to_end(mocker):
    """
    GIVEN a story request in Hindi for grade 3
    WHEN generateStory is invoked
    THEN the model is called once with the language and grade in the prompt
    AND the story text comes back under `story`.
    """
    mock_text = mocker.patch(f"{GEMINI}.generate_text", return_value="एक किसान था...")

    result = await tool_service.invoke_function("generateStory", {
        "prompt": "Tell a story about a farmer and rain", "language": "hindi", "grade": 3,
    })

    assert result == {"story": "एक किसान था..."}
    mock_text.assert_awaited_once()
    prompt = mock_text.call_args.args[0]
    assert "hindi" in prompt
    assert "3" in prompt
    assert "farmer and rain" in prompt
    print("\n✅ SUCCESS: test_generate_story_end_to_end passed.")


@pytest.mark.asyncio
async def test_story_failure_is_reported_as_generation_error(mocker):
    mocker.patch(f"{GEMINI}.generate_text", side_effect=RuntimeError("quota exceeded"))

    with pytest.raises(GenerationError, match=r"^Failed to generate story\.$"):
        await tool_service.invoke_function("generateStory", {"prompt": "Rain", "grade": "3"})


@pytest.mark.asyncio
async def test_personalized_story_includes_student_details(mocker):
    mock_text = mocker.patch(f"{GEMINI}.generate_text", return_value="Asha and the river")

    await tool_service.invoke_function("generatePersonalizedStory", {
        "prompt": "A river adventure", "grade": "4",
        "studentName": "Asha", "localContext": "a village near the Ganga",
    })

    prompt = mock_text.call_args.args[0]
    assert "Asha" in prompt
    assert "a village near the Ganga" in prompt


# --- Worksheets ---

@pytest.mark.asyncio
async def test_differentiated_worksheet_makes_one_call_per_grade(mocker):
    mock_text = mocker.patch(f"{GEMINI}.generate_text", side_effect=["Sheet for 2", "Sheet for 4", "Sheet for 6"])

    result = await tool_service.invoke_function("generateDifferentiatedWorksheet", {
        "topic": "Fractions", "subject": "math", "grades": ["2", "4", "6"],
    })

    assert mock_text.await_count == 3
    assert result == {"worksheets": {"2": "Sheet for 2", "4": "Sheet for 4", "6": "Sheet for 6"}}


@pytest.mark.asyncio
async def test_worksheet_with_image_uses_multimodal_call(mocker, page_image_b64):
    mock_multi = mocker.patch(f"{GEMINI}.generate_multimodal_response", return_value="Q1. ...")
    mock_text = mocker.patch(f"{GEMINI}.generate_text")

    result = await tool_service.invoke_function("generateWorksheet", {
        "imageData": f"data:image/png;base64,{page_image_b64}", "subject": "science", "grade": "5",
    })

    assert result == {"worksheet": "Q1. ..."}
    images = mock_multi.call_args.args[1]
    assert len(images) == 1
    mock_text.assert_not_called()


@pytest.mark.asyncio
async def test_worksheet_rejects_unreadable_image(mocker):
    mocker.patch(f"{GEMINI}.generate_multimodal_response")

    with pytest.raises(ValueError) as excinfo:
        await tool_service.invoke_function("generateWorksheet", {
            "imageData": "bm90IGFuIGltYWdl", "subject": "science", "grade": "5",
        })
    assert excinfo.value.__cause__ is not None


# --- Visual aids ---

@pytest.mark.asyncio
async def test_visual_aid_package_falls_back_to_raw_text(mocker):
    """
    GIVEN the model returns prose instead of JSON
    WHEN a visual aid package is requested
    THEN the prose becomes the instructions and default materials are filled in.
    """
    mocker.patch(f"{GEMINI}.generate_json_text", return_value="Draw a large circle for the sun.")

    result = await tool_service.invoke_function("generateVisualAidWithImage", {
        "topic": "Solar system", "subject": "science", "grade": "5",
    })

    assert result["instructions"] == "Draw a large circle for the sun."
    assert result["materials"] == ["Blackboard", "Chalk", "Ruler"]
    assert "imageBase64" not in result


@pytest.mark.asyncio
async def test_visual_aid_image_failure_still_returns_instructions(mocker):
    package = {"instructions": "Draw the water cycle.", "materials": ["Chalk"], "timeEstimate": "10 minutes"}
    mocker.patch(f"{GEMINI}.generate_json_text", return_value=json.dumps(package))
    mock_image = mocker.patch(f"{GEMINI}.generate_image", side_effect=RuntimeError("image model unavailable"))

    result = await tool_service.invoke_function("generateVisualAidWithImage", {
        "topic": "Water cycle", "subject": "science", "grade": "4", "includeImage": True,
    })

    mock_image.assert_awaited_once()
    assert result["instructions"] == "Draw the water cycle."
    assert result["materials"] == ["Chalk"]
    assert "imageBase64" not in result


@pytest.mark.asyncio
async def test_visual_aid_image_is_attached_when_generated(mocker):
    mocker.patch(f"{GEMINI}.generate_json_text", return_value='```json\n{"instructions": "Draw a leaf."}\n```')
    mocker.patch(f"{GEMINI}.generate_image", return_value="aW1hZ2U=")

    result = await tool_service.invoke_function("generateVisualAidWithImage", {
        "topic": "Leaves", "subject": "science", "grade": "3", "includeImage": True,
    })

    assert result["imageBase64"] == "aW1hZ2U="


# --- Explanations ---

@pytest.mark.asyncio
async def test_adaptive_explanation_wraps_unparseable_text(mocker):
    mocker.patch(f"{GEMINI}.generate_json_text", return_value="Photosynthesis is how plants make food.")

    result = await tool_service.invoke_function("explainConceptAdaptively", {"question": "What is photosynthesis?"})

    assert result["explanation"] == "Photosynthesis is how plants make food."
    assert result["activities"] == []


# --- Games and learning paths ---

@pytest.mark.asyncio
async def test_game_total_questions_matches_question_list(mocker):
    mocker.patch(f"{GEMINI}.generate_json", return_value={
        "title": "Quick Sums", "instructions": "Answer fast",
        "questions": [{"q": "2+2", "a": "4"}, {"q": "3+5", "a": "8"}],
        "totalQuestions": 10,
    })

    result = await tool_service.invoke_function("generateEducationalGame", {"gameType": "math", "grade": "2"})

    assert result["game"]["totalQuestions"] == 2
    assert result["game"]["timeLimit"] == 60


@pytest.mark.asyncio
async def test_learning_path_parse_failure_is_a_generation_error(mocker):
    mocker.patch(f"{GEMINI}.generate_json", side_effect=json.JSONDecodeError("bad", "not json", 0))

    with pytest.raises(GenerationError, match="learning path"):
        await tool_service.invoke_function("generateLearningPath", {"studentProfile": {"grade": "5"}})


@pytest.mark.asyncio
async def test_learning_path_is_returned_week_by_week(mocker):
    mocker.patch(f"{GEMINI}.generate_json", return_value={
        "path": [{"week": 1, "topics": ["Fractions"]}, {"week": 2, "topics": ["Decimals"]}],
        "adaptations": ["Use visuals"],
    })

    result = await tool_service.invoke_function("generateLearningPath", {
        "studentProfile": {"grade": "5", "interests": ["cricket"]}, "duration": "2 weeks",
    })

    assert [w["week"] for w in result["learningPath"]["path"]] == [1, 2]
    assert result["learningPath"]["parentGuidance"] == []


# --- Registry ---

@pytest.mark.asyncio
async def test_unknown_function_name():
    with pytest.raises(UnknownFunctionError):
        await tool_service.invoke_function("generatePoem", {})


@pytest.mark.asyncio
async def test_missing_required_argument_is_a_value_error(mocker):
    mock_text = mocker.patch(f"{GEMINI}.generate_text")

    with pytest.raises(ValueError, match="generateStory") as excinfo:
        await tool_service.invoke_function("generateStory", {"grade": "3"})
    assert excinfo.value.__cause__ is not None
    mock_text.assert_not_called()


def test_registry_covers_every_callable_name():
    from app.models.tool_model import CallableName

    assert set(tool_service.FUNCTIONS) == {name.value for name in CallableName}
