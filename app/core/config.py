# /sahayak-backend/app/core/config.py

"""
Central runtime configuration.

Every value is read once from the environment (optionally populated from a
local `.env` file). API keys and project identifiers are supplied at deploy
time; nothing here is editable at runtime.
"""

import os
from dotenv import load_dotenv

load_dotenv()

APP_NAME = "Sahayak Backend API"
APP_VERSION = os.getenv("APP_VERSION", "2.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Generative AI ---
# GOOGLE_API_KEY is the canonical name; GEMINI_API_KEY is accepted for
# deployments that were configured for the serverless functions.
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.0-flash-preview-image-generation")

# --- Persistence ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./sahayak.db")
OFFLINE_STORE_DIR = os.getenv("OFFLINE_STORE_DIR", "offline_store")

# --- Blob storage ---
MEDIA_ROOT = os.getenv("MEDIA_ROOT", "media")
MEDIA_URL = os.getenv("MEDIA_URL", "/media")

# --- Auth ---
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# --- Feature tuning ---
READING_ASSESSMENT_DELAY_SECONDS = float(os.getenv("READING_ASSESSMENT_DELAY_SECONDS", "3"))
EXPORT_FONT_PATH = os.getenv("EXPORT_FONT_PATH")
