# /sahayak-backend/app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core import config
from .db.base import Base
from .db.database import engine

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    students_router,
    content_router,
    lesson_plans_router,
    assessments_router,
    dashboard_router,
    sync_router,
    export_router,
    functions_router,
    media_router,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup.
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started (gemini model: %s).", config.APP_NAME, config.APP_VERSION, config.GEMINI_MODEL)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=config.APP_NAME,
    description="Teaching-content generation, student tracking and offline-first storage for Sahayak.",
    version=config.APP_VERSION,
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(students_router.router, prefix="/api/students", tags=["Students"])
app.include_router(content_router.router, prefix="/api/content", tags=["Generated Content"])
app.include_router(lesson_plans_router.router, prefix="/api/lesson-plans", tags=["Lesson Plans"])
app.include_router(assessments_router.router, prefix="/api/assessments", tags=["Assessments"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(sync_router.router, prefix="/api/sync", tags=["Offline Sync"])
app.include_router(export_router.router, prefix="/api/export", tags=["Export"])

# Callable functions and the health check sit at the root, like the hosted functions they replace.
app.include_router(functions_router.router, tags=["Functions"])

# Uploaded media is served per teacher, behind the same bearer token as the API.
app.include_router(media_router.router, prefix=config.MEDIA_URL.rstrip("/"), tags=["Media"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Sahayak Backend is running!", "version": app.version}
