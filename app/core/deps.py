# /sahayak-backend/app/core/deps.py

"""
FastAPI dependencies shared by the routers: the authenticated teacher, the
offline store, and the tenant-bound data services built from them.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core import config, security
from app.db.database import get_db
from app.db.models.teacher_models import Teacher
from app.services.data_service import DataService
from app.services.database_service import DatabaseService
from app.services.database_helpers.offline_repository import OfflineStore
from app.services.database_helpers.teacher_repository_sql import TeacherRepositorySQL

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_current_teacher_id(token: str = Depends(oauth2_scheme)) -> str:
    teacher_id = security.decode_access_token(token)
    if not teacher_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return teacher_id


def get_current_teacher(
    teacher_id: str = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
) -> Teacher:
    teacher = TeacherRepositorySQL(db).get_by_id(teacher_id)
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return teacher


@lru_cache()
def get_offline_store() -> OfflineStore:
    return OfflineStore(config.OFFLINE_STORE_DIR)


def get_database_service(
    teacher_id: str = Depends(get_current_teacher_id),
    db: Session = Depends(get_db),
) -> DatabaseService:
    return DatabaseService(db_session=db, teacher_id=teacher_id)


def get_data_service(
    db: DatabaseService = Depends(get_database_service),
    store: OfflineStore = Depends(get_offline_store),
) -> DataService:
    return DataService(db, store)
