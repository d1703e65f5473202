# /sahayak-backend/app/services/gemini_service.py

"""
Thin transport layer over the Gemini API. Every function here performs exactly
one model call and returns the raw result; prompt construction and result
shaping live in `tool_service` and `prompt_library`.
"""

import base64
import json
import logging
from typing import Dict, List, Optional

import google.generativeai as genai
from google.generativeai.types import GenerationConfig
from PIL import Image

# --- Local Imports ---
from ..core import config

logger = logging.getLogger(__name__)

_configured_key: Optional[str] = None


def is_configured() -> bool:
    return bool(config.GOOGLE_API_KEY)


def _get_model(model_name: Optional[str] = None) -> genai.GenerativeModel:
    """
    Configures the SDK on first use. A missing key only fails the call that
    needs it, so the rest of the service keeps running without AI features.
    """
    global _configured_key
    if not config.GOOGLE_API_KEY:
        raise ValueError("GOOGLE_API_KEY environment variable is not set.")
    if _configured_key != config.GOOGLE_API_KEY:
        genai.configure(api_key=config.GOOGLE_API_KEY)
        _configured_key = config.GOOGLE_API_KEY
    return genai.GenerativeModel(model_name or config.GEMINI_MODEL)


# --- CORE GENERATIVE FUNCTIONS ---

async def generate_text(prompt: str, temperature: float = 0.7) -> str:
    """The workhorse for text-only, non-streaming tasks."""
    try:
        model = _get_model()
        generation_config = GenerationConfig(temperature=temperature)
        response = await model.generate_content_async(prompt, generation_config=generation_config)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception as e:
        logger.error("generate_text failed: %s", e)
        raise


async def generate_multimodal_response(prompt: str, images: List[Image.Image], temperature: float = 0.7) -> str:
    """
    The specialist for multi-modal requests. It accepts a LIST of Pillow Image objects.
    """
    try:
        model = _get_model()
        generation_config = GenerationConfig(temperature=temperature)
        response = await model.generate_content_async([prompt, *images], generation_config=generation_config)
        if not response.parts:
            raise ValueError("AI model returned an empty response for the multi-modal request.")
        return response.text
    except Exception as e:
        logger.error("generate_multimodal_response failed (%d images): %s", len(images), e)
        raise


async def generate_json_text(prompt: str, temperature: float = 0.4) -> str:
    """
    Calls the model in the Gemini API's JSON Mode and returns the raw text, so
    callers that accept a plain-text fallback still have something to show.
    """
    try:
        model = _get_model()
        generation_config = GenerationConfig(
            temperature=temperature,
            response_mime_type="application/json"
        )
        response = await model.generate_content_async(prompt, generation_config=generation_config)
        if not response.parts:
            raise ValueError("AI model returned an empty response.")
        return response.text
    except Exception as e:
        logger.error("generate_json_text failed: %s", e)
        raise


async def generate_json(prompt: str, temperature: float = 0.4) -> Dict:
    """
    Generates a response in JSON Mode and parses it. Raises
    `json.JSONDecodeError` when the model still returns unparseable text.
    """
    return parse_json_text(await generate_json_text(prompt, temperature))


def parse_json_text(text: str) -> Dict:
    """Parses model output as JSON, tolerating a surrounding ```json fence."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]
    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise json.JSONDecodeError("Expected a JSON object.", cleaned, 0)
    return parsed


async def generate_image(prompt: str) -> str:
    """
    Requests a single illustration from the image-capable model and returns it
    as a base64 string (no data-URL prefix).
    """
    try:
        model = _get_model(config.GEMINI_IMAGE_MODEL)
        response = await model.generate_content_async(prompt)
        for candidate in response.candidates:
            for part in candidate.content.parts:
                inline = getattr(part, "inline_data", None)
                if inline and inline.data and inline.mime_type.startswith("image/"):
                    data = inline.data
                    if isinstance(data, str):
                        return data
                    return base64.b64encode(data).decode("ascii")
        raise ValueError("AI model returned no image data.")
    except Exception as e:
        logger.error("generate_image failed: %s", e)
        raise
