# /sahayak-backend/app/services/dashboard_service.py

# --- Core Imports ---
import logging

import pandas as pd

from ..models.dashboard_model import RecentActivity, TeacherStats
from .database_service import ASSESSMENTS, CONTENT, LESSON_PLANS, STUDENTS
from .data_service import DataService

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 5


def _counts_by(df: pd.DataFrame, column: str) -> dict:
    if df.empty or column not in df.columns:
        return {}
    return {str(k): int(v) for k, v in df.groupby(column).size().to_dict().items()}


def get_teacher_stats(data: DataService) -> TeacherStats:
    """
    Aggregates the dashboard numbers for the current teacher. Counts are taken
    over the merged view, so records still waiting in the offline queue are
    included.

    Args:
        data: The tenant-bound DataService, provided by dependency injection.

    Returns:
        A TeacherStats object with totals, per-type and per-grade breakdowns,
        and the five most recent generations.
    """
    try:
        content_df = pd.DataFrame(data.get_all(CONTENT))
        students_df = pd.DataFrame(data.get_all(STUDENTS))
        assessment_count = len(data.get_all(ASSESSMENTS))
        lesson_plan_count = len(data.get_all(LESSON_PLANS))

        recent = []
        if not content_df.empty:
            content_df["createdAt"] = pd.to_datetime(content_df["createdAt"], utc=True, errors="coerce", format="mixed")
            latest = content_df.sort_values("createdAt", ascending=False, na_position="last").head(RECENT_ACTIVITY_LIMIT)
            recent = [
                RecentActivity(
                    type=row["type"],
                    title=row["title"],
                    date=None if pd.isna(row["createdAt"]) else row["createdAt"].to_pydatetime(),
                )
                for _, row in latest.iterrows()
            ]

        return TeacherStats(
            totalContent=len(content_df),
            totalStudents=len(students_df),
            totalAssessments=assessment_count,
            totalLessonPlans=lesson_plan_count,
            contentByType=_counts_by(content_df, "type"),
            studentsByGrade=_counts_by(students_df, "grade"),
            recentActivity=recent,
        )
    except Exception as e:
        logger.error("Error calculating teacher stats for %s: %s", data.teacher_id, e)
        raise
