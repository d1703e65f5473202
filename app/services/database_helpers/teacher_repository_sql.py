# /sahayak-backend/app/services/database_helpers/teacher_repository_sql.py

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.db.models.teacher_models import Teacher


class TeacherRepositorySQL:
    """Account lookups. Not tenant-scoped: this is where the tenant comes from."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return self.db.query(Teacher).filter(Teacher.email == email.lower()).first()

    def get_by_id(self, teacher_id: str) -> Optional[Teacher]:
        return self.db.query(Teacher).filter(Teacher.id == teacher_id).first()

    def add_teacher(self, record: Dict) -> Teacher:
        new_teacher = Teacher(id=f"tch_{uuid.uuid4().hex[:12]}", **record)
        new_teacher.email = new_teacher.email.lower()
        self.db.add(new_teacher)
        self.db.commit()
        self.db.refresh(new_teacher)
        return new_teacher

    def update_teacher(self, teacher_id: str, update_data: Dict) -> Optional[Teacher]:
        teacher = self.get_by_id(teacher_id)
        if not teacher:
            return None
        for key, value in update_data.items():
            setattr(teacher, key, value)
        teacher.updatedAt = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(teacher)
        return teacher

    def record_login(self, teacher: Teacher) -> Teacher:
        teacher.lastLogin = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(teacher)
        return teacher
