# /sahayak-backend/app/routers/auth_router.py

"""
This module defines the public-facing API for authentication and the
teacher's own account.

It includes endpoints for:
- Teacher registration (`/register`)
- Login and token generation (`/token`)
- Reading and editing the profile (`/me`)
- Settings (`/me/preferences`) and the personal data export (`/me/export`)
"""

import json

from fastapi import APIRouter, Depends, HTTPException, status, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

# --- Application-specific Imports ---
from app.core import security
from app.core.deps import get_current_teacher, get_offline_store
from app.db.database import get_db
from app.db.models.teacher_models import Teacher as TeacherModel
from app.models.teacher_model import (
    Teacher, TeacherCreate, TeacherPreferences, TeacherPreferencesUpdate, TeacherUpdate, Token,
)
from app.services import teacher_service
from app.services.database_helpers.offline_repository import OfflineStore

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=Teacher, status_code=status.HTTP_201_CREATED)
def register_teacher(teacher_in: TeacherCreate, db: Session = Depends(get_db)):
    """
    Handles new teacher registration. The service raises ValueError when the
    email is already registered, which becomes a 400.
    """
    try:
        return teacher_service.create_teacher(db=db, teacher=teacher_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    """OAuth2 password flow: the email goes in the `username` field."""
    teacher = teacher_service.authenticate_teacher(db, email=form_data.username, password=form_data.password)
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=security.create_access_token(subject=teacher.id), token_type="bearer")


@router.get("/me", response_model=Teacher)
def read_current_teacher(current_teacher: TeacherModel = Depends(get_current_teacher)):
    return current_teacher


@router.put("/me", response_model=Teacher)
def update_current_teacher(
    update: TeacherUpdate,
    current_teacher: TeacherModel = Depends(get_current_teacher),
    db: Session = Depends(get_db),
):
    return teacher_service.update_profile(db, current_teacher.id, update)


@router.get("/me/preferences", response_model=TeacherPreferences)
def read_preferences(current_teacher: TeacherModel = Depends(get_current_teacher)):
    return teacher_service.get_preferences(current_teacher)


@router.put("/me/preferences", response_model=TeacherPreferences)
def update_preferences(
    update: TeacherPreferencesUpdate,
    current_teacher: TeacherModel = Depends(get_current_teacher),
    db: Session = Depends(get_db),
    store: OfflineStore = Depends(get_offline_store),
):
    return teacher_service.update_preferences(db, store, current_teacher, update)


@router.get("/me/export", summary="Download Profile and Settings as JSON")
def export_my_data(current_teacher: TeacherModel = Depends(get_current_teacher)):
    payload = teacher_service.export_teacher_data(current_teacher)
    return Response(
        content=json.dumps(payload, indent=2, ensure_ascii=False),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={teacher_service.EXPORT_FILENAME}"},
    )
