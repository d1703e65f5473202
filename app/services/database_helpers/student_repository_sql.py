# /sahayak-backend/app/services/database_helpers/student_repository_sql.py

from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.db.models.student_models import Student
from .tenant_repository_sql import TenantRepositorySQL


class StudentRepositorySQL(TenantRepositorySQL):
    model = Student
    id_prefix = "stu"

    def get_students(self, limit: Optional[int] = None) -> List[Dict]:
        """Retrieves the teacher's students, alphabetically by name."""
        return self.list(order_by=Student.name.asc(), limit=limit)

    def touch_last_assessment(self, student_id: str, when: Optional[datetime] = None) -> bool:
        """Stamps `lastAssessment` without committing; the caller owns the transaction."""
        student = self._get_row(student_id)
        if not student:
            return False
        student.lastAssessment = when or datetime.now(timezone.utc)
        return True

    # Deleting a student goes through the ORM so the `assessments`
    # relationship cascade removes that student's assessments too.
