# /sahayak-backend/app/services/database_helpers/assessment_repository_sql.py

from typing import Dict, List, Optional

from app.db.models.student_models import Assessment
from .tenant_repository_sql import TenantRepositorySQL, to_record


class AssessmentRepositorySQL(TenantRepositorySQL):
    model = Assessment
    id_prefix = "asm"

    def add_pending(self, record: Dict) -> Assessment:
        """Adds an assessment row to the session without committing it."""
        columns = self._to_columns(self._stamp(record))
        columns["id"] = self.new_id()
        row = Assessment(**columns)
        self.db.add(row)
        return row

    def get_assessments(self, student_id: Optional[str] = None, limit: Optional[int] = 100) -> List[Dict]:
        """
        Retrieves assessments, newest first. A per-student history is returned
        in full; the unfiltered listing is capped at `limit`.
        """
        if student_id:
            return self.list(order_by=Assessment.createdAt.desc(), studentId=student_id)
        return self.list(order_by=Assessment.createdAt.desc(), limit=limit)

    def refreshed(self, row: Assessment) -> Dict:
        self.db.refresh(row)
        return to_record(row)
