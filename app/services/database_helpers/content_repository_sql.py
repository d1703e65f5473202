# /sahayak-backend/app/services/database_helpers/content_repository_sql.py

from typing import Dict, List, Optional

from app.db.models.content_models import GeneratedContent, LessonPlan
from .tenant_repository_sql import TenantRepositorySQL


class GeneratedContentRepositorySQL(TenantRepositorySQL):
    model = GeneratedContent
    id_prefix = "gen"

    def get_generated_content(self, content_type: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]:
        """Retrieves saved generations, most recent first, optionally of one type."""
        filters = {"type": content_type} if content_type else {}
        return self.list(order_by=GeneratedContent.createdAt.desc(), limit=limit, **filters)


class LessonPlanRepositorySQL(TenantRepositorySQL):
    model = LessonPlan
    id_prefix = "lp"

    def add(self, record: Dict) -> Dict:
        record = dict(record)
        record.setdefault("status", "draft")
        return super().add(record)

    def get_lesson_plans(self, limit: Optional[int] = None) -> List[Dict]:
        return self.list(order_by=LessonPlan.createdAt.desc(), limit=limit)
