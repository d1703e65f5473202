# /sahayak-backend/app/services/teacher_service.py

"""
Account and settings logic for teachers: signup, password login, profile
edits, preferences and the personal data export.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..core import security
from ..db.models.teacher_models import Teacher as TeacherModel
from ..models.teacher_model import (
    Teacher, TeacherCreate, TeacherPreferences, TeacherPreferencesUpdate, TeacherUpdate,
)
from .database_helpers.offline_repository import OfflineStore
from .database_helpers.teacher_repository_sql import TeacherRepositorySQL

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "sahayak-ai-data.json"


def create_teacher(db: Session, teacher: TeacherCreate) -> TeacherModel:
    """Registers a teacher. Raises ValueError if the email is already taken."""
    repo = TeacherRepositorySQL(db)
    if repo.get_by_email(teacher.email):
        raise ValueError("A teacher with this email already exists.")
    record = teacher.model_dump(exclude={"password"})
    record["hashed_password"] = security.hash_password(teacher.password)
    record["preferences"] = TeacherPreferences().model_dump()
    new_teacher = repo.add_teacher(record)
    logger.info("Registered teacher %s", new_teacher.id)
    return new_teacher


def authenticate_teacher(db: Session, email: str, password: str) -> Optional[TeacherModel]:
    """Returns the teacher on a correct email/password pair and records the login."""
    repo = TeacherRepositorySQL(db)
    teacher = repo.get_by_email(email)
    if not teacher or not security.verify_password(password, teacher.hashed_password):
        return None
    return repo.record_login(teacher)


def get_teacher(db: Session, teacher_id: str) -> Optional[TeacherModel]:
    return TeacherRepositorySQL(db).get_by_id(teacher_id)


def update_profile(db: Session, teacher_id: str, update: TeacherUpdate) -> Optional[TeacherModel]:
    return TeacherRepositorySQL(db).update_teacher(teacher_id, update.model_dump(exclude_unset=True))


def get_preferences(teacher: TeacherModel) -> TeacherPreferences:
    return TeacherPreferences(**(teacher.preferences or {}))


def update_preferences(
    db: Session, store: OfflineStore, teacher: TeacherModel, update: TeacherPreferencesUpdate
) -> TeacherPreferences:
    """
    Merges the changed settings into the stored preferences. Changing
    `offlineMode` also flips the teacher's forced-offline flag in the outbox.
    """
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    merged = get_preferences(teacher).model_copy(update=changes)
    TeacherRepositorySQL(db).update_teacher(teacher.id, {"preferences": merged.model_dump()})
    if "offlineMode" in changes:
        store.set_forced_offline(teacher.id, merged.offlineMode)
    return merged


def export_teacher_data(teacher: TeacherModel) -> Dict[str, Any]:
    return {
        "profile": Teacher.model_validate(teacher).model_dump(mode="json"),
        "settings": get_preferences(teacher).model_dump(),
        "exportDate": datetime.now(timezone.utc).isoformat(),
    }
