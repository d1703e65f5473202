# /sahayak-backend/app/services/database_service.py

from typing import Dict, List, Optional

from sqlalchemy.orm import Session

# --- Repository Imports ---
from .database_helpers.student_repository_sql import StudentRepositorySQL
from .database_helpers.assessment_repository_sql import AssessmentRepositorySQL
from .database_helpers.content_repository_sql import GeneratedContentRepositorySQL, LessonPlanRepositorySQL
from .database_helpers.tenant_repository_sql import TenantRepositorySQL

STUDENTS = "students"
CONTENT = "content"
LESSON_PLANS = "lesson_plans"
ASSESSMENTS = "assessments"


class DatabaseService:
    def __init__(self, db_session: Session, teacher_id: str):
        """
        Binds every repository to one teacher. The tenant is fixed here and
        cannot be chosen per call.
        """
        if not teacher_id:
            raise ValueError("DatabaseService requires the authenticated teacher's id.")
        self.db = db_session
        self.teacher_id = teacher_id
        self.student_repo = StudentRepositorySQL(db_session, teacher_id)
        self.assessment_repo = AssessmentRepositorySQL(db_session, teacher_id)
        self.content_repo = GeneratedContentRepositorySQL(db_session, teacher_id)
        self.lesson_plan_repo = LessonPlanRepositorySQL(db_session, teacher_id)
        self._repos: Dict[str, TenantRepositorySQL] = {
            STUDENTS: self.student_repo,
            CONTENT: self.content_repo,
            LESSON_PLANS: self.lesson_plan_repo,
            ASSESSMENTS: self.assessment_repo,
        }

    def repo_for(self, collection: str) -> TenantRepositorySQL:
        try:
            return self._repos[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}")

    def rollback(self) -> None:
        self.db.rollback()

    # --- GENERATED CONTENT METHODS (DELEGATED) ---
    def save_generated_content(self, record: Dict) -> Dict: return self.content_repo.add(record)
    def get_generated_content(self, content_type: Optional[str] = None, limit: Optional[int] = 50) -> List[Dict]: return self.content_repo.get_generated_content(content_type, limit)
    def get_generated_content_by_id(self, content_id: str) -> Optional[Dict]: return self.content_repo.get_by_id(content_id)
    def delete_generated_content(self, content_id: str) -> bool: return self.content_repo.delete(content_id)

    # --- STUDENT METHODS (DELEGATED) ---
    def add_student(self, record: Dict) -> Dict: return self.student_repo.add(record)
    def get_students(self, limit: Optional[int] = None) -> List[Dict]: return self.student_repo.get_students(limit)
    def get_student_by_id(self, student_id: str) -> Optional[Dict]: return self.student_repo.get_by_id(student_id)
    def update_student(self, student_id: str, update_data: Dict) -> Optional[Dict]: return self.student_repo.update(student_id, update_data)
    def delete_student(self, student_id: str) -> bool: return self.student_repo.delete(student_id)

    # --- LESSON PLAN METHODS (DELEGATED) ---
    def save_lesson_plan(self, record: Dict) -> Dict: return self.lesson_plan_repo.add(record)
    def get_lesson_plans(self, limit: Optional[int] = None) -> List[Dict]: return self.lesson_plan_repo.get_lesson_plans(limit)
    def update_lesson_plan(self, plan_id: str, update_data: Dict) -> Optional[Dict]: return self.lesson_plan_repo.update(plan_id, update_data)
    def delete_lesson_plan(self, plan_id: str) -> bool: return self.lesson_plan_repo.delete(plan_id)

    # --- ASSESSMENT METHODS ---
    def get_assessments(self, student_id: Optional[str] = None, limit: Optional[int] = 100) -> List[Dict]:
        return self.assessment_repo.get_assessments(student_id, limit)

    def save_assessment(self, record: Dict) -> Optional[Dict]:
        """
        Inserts the assessment and stamps the student's `lastAssessment` in one
        commit. Returns None when the student does not belong to this teacher.
        """
        student = self.student_repo.get_by_id(record.get("studentId"))
        if not student:
            return None
        row = self.assessment_repo.add_pending(record)
        self.db.flush()
        self.student_repo.touch_last_assessment(student["id"], row.createdAt)
        self.db.commit()
        return self.assessment_repo.refreshed(row)

    # --- GENERIC ACCESS (used by the sync replay) ---
    def create(self, collection: str, record: Dict) -> Optional[Dict]:
        if collection == ASSESSMENTS:
            return self.save_assessment(record)
        return self.repo_for(collection).add(record)

    def update(self, collection: str, record_id: str, update_data: Dict) -> Optional[Dict]:
        return self.repo_for(collection).update(record_id, update_data)

    def delete(self, collection: str, record_id: str) -> bool:
        return self.repo_for(collection).delete(record_id)

    def get_by_id(self, collection: str, record_id: str) -> Optional[Dict]:
        return self.repo_for(collection).get_by_id(record_id)

    def get_by_client_ref(self, collection: str, client_ref: str) -> Optional[Dict]:
        return self.repo_for(collection).get_by_client_ref(client_ref)

    def existing_client_refs(self, collection: str, client_refs) -> set:
        return self.repo_for(collection).existing_client_refs(client_refs)

