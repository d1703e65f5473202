# /sahayak-backend/app/services/data_service.py

"""
Tenant-scoped data access with an offline outbox.

`DataService` sits in front of `DatabaseService`. Every write is attempted
against the backend first; if the backend is unreachable (or the teacher has
switched to offline mode) the write is queued in the `OfflineStore` and the
call still returns a record, marked `isOffline`. Reads merge backend rows with
the teacher's queued rows. `sync_service` later replays the queue.
"""

import hashlib
import json
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Set

from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import InterfaceError, OperationalError

from .database_service import ASSESSMENTS, CONTENT, LESSON_PLANS, STUDENTS, DatabaseService
from .database_helpers import offline_repository as keys
from .database_helpers.offline_repository import OfflineStore

logger = logging.getLogger(__name__)

COLLECTION_KEYS = {
    STUDENTS: keys.OFFLINE_STUDENTS,
    CONTENT: keys.OFFLINE_CONTENT,
    LESSON_PLANS: keys.OFFLINE_LESSON_PLANS,
    ASSESSMENTS: keys.OFFLINE_ASSESSMENTS,
}


class BackendUnavailableError(Exception):
    """The backend cannot be reached, or the teacher has chosen to work offline."""


OFFLINE_ERRORS = (OperationalError, InterfaceError, BackendUnavailableError)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def synthetic_id() -> str:
    """Timestamp-derived id for records that exist only in the offline queue."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


def client_ref_for(record: Dict[str, Any], queued_at: str) -> str:
    """Idempotency key: SHA-256 of the canonical record JSON plus its queue time."""
    canonical = json.dumps(jsonable_encoder(record), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(f"{canonical}|{queued_at}".encode("utf-8")).hexdigest()


class DataService:
    def __init__(self, db: DatabaseService, store: OfflineStore):
        self.db = db
        self.store = store
        self.teacher_id = db.teacher_id

    # --- Backend access ---
    def _attempt(self, operation: Callable[[], Any]) -> Any:
        """
        Runs a backend operation. Connectivity failures roll the session back
        and surface as `BackendUnavailableError`; every other error propagates.
        """
        if self.store.is_forced_offline(self.teacher_id):
            raise BackendUnavailableError("Offline mode is enabled.")
        try:
            return operation()
        except (OperationalError, InterfaceError) as e:
            self.db.rollback()
            logger.warning("Backend unavailable for teacher %s: %s", self.teacher_id, e)
            raise BackendUnavailableError(str(e)) from e

    # --- Queue helpers ---
    def _owned(self, entry: Dict[str, Any]) -> bool:
        return entry.get("teacherId") == self.teacher_id

    def _queued(self, collection: str) -> List[Dict[str, Any]]:
        return [e for e in self.store.get_list(COLLECTION_KEYS[collection]) if self._owned(e)]

    def _find_queued(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        entry = self.store.find(COLLECTION_KEYS[collection], record_id)
        return entry if entry and self._owned(entry) else None

    def _queue_create(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        queued_at = _now_iso()
        body = jsonable_encoder(record)
        body.setdefault("createdAt", queued_at)
        entry = {
            **body,
            "id": synthetic_id(),
            "teacherId": self.teacher_id,
            "isOffline": True,
            "queuedAt": queued_at,
            "clientRef": client_ref_for(body, queued_at),
        }
        self.store.append(COLLECTION_KEYS[collection], entry)
        logger.info("Queued offline %s %s for teacher %s", collection, entry["id"], self.teacher_id)
        return entry

    def _pending_deletions(self, collection: str) -> Set[str]:
        return {
            e["docId"] for e in self.store.get_list(keys.PENDING_DELETIONS)
            if self._owned(e) and e.get("collection") == collection
        }

    def _pending_updates(self, collection: str) -> Dict[str, Dict[str, Any]]:
        """Every queued change per record, folded in queue order."""
        folded: Dict[str, Dict[str, Any]] = {}
        for e in self.store.get_list(keys.PENDING_UPDATES):
            if self._owned(e) and e.get("collection") == collection:
                folded[e["docId"]] = {**folded.get(e["docId"], {}), **e["data"]}
        return folded

    def _hidden(self, collection: str, row: Dict[str, Any], deleted: Set[str], deleted_students: Set[str]) -> bool:
        """A row is hidden if it, or for an assessment its student, has a pending deletion."""
        if row["id"] in deleted:
            return True
        return collection == ASSESSMENTS and row.get("studentId") in deleted_students

    # --- Generic operations ---
    def _create(self, collection: str, record: Dict[str, Any], operation: Callable[[], Dict]) -> Dict[str, Any]:
        try:
            return self._attempt(operation)
        except BackendUnavailableError:
            return self._queue_create(collection, record)

    def _update(self, collection: str, record_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        queued = self._find_queued(collection, record_id)
        if queued:
            merged = {**queued, **jsonable_encoder(update_data), "updatedAt": _now_iso()}
            self.store.replace_entry(COLLECTION_KEYS[collection], record_id, merged)
            return merged

        backend_id = self.store.resolve_id(record_id)
        try:
            return self._attempt(lambda: self.db.update(collection, backend_id, update_data))
        except BackendUnavailableError:
            entry = {
                "id": synthetic_id(),
                "collection": collection,
                "docId": backend_id,
                "data": jsonable_encoder(update_data),
                "teacherId": self.teacher_id,
                "queuedAt": _now_iso(),
            }
            self.store.append(keys.PENDING_UPDATES, entry)
            return {**entry["data"], "id": backend_id, "isOffline": True}

    def _delete(self, collection: str, record_id: str) -> bool:
        if self._find_queued(collection, record_id):
            self.store.remove_entry(COLLECTION_KEYS[collection], record_id)
            self._forget_pending(collection, record_id)
            return True

        backend_id = self.store.resolve_id(record_id)
        try:
            deleted = self._attempt(lambda: self.db.delete(collection, backend_id))
        except BackendUnavailableError:
            self.store.append(keys.PENDING_DELETIONS, {
                "id": synthetic_id(),
                "collection": collection,
                "docId": backend_id,
                "teacherId": self.teacher_id,
                "queuedAt": _now_iso(),
            })
            return True
        if deleted:
            self._forget_pending(collection, backend_id)
        return deleted

    def _forget_pending(self, collection: str, record_id: str) -> None:
        self.store.remove_where(
            keys.PENDING_UPDATES,
            lambda e: self._owned(e) and e.get("collection") == collection and e.get("docId") == record_id,
        )

    def _read(
        self,
        collection: str,
        operation: Callable[[], List[Dict]],
        queued_filter: Optional[Callable[[Dict], bool]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Backend rows followed by this teacher's queued rows. Queued rows that
        already reached the backend (matched by `clientRef`) and rows with a
        pending deletion are left out; pending updates are overlaid.
        Assessments of a student with a pending deletion are left out too.
        """
        queued = [e for e in self._queued(collection) if queued_filter is None or queued_filter(e)]
        try:
            backend = self._attempt(operation)
            replayed = self._attempt(lambda: self.db.existing_client_refs(collection, [e.get("clientRef") for e in queued]))
        except BackendUnavailableError:
            backend, replayed = [], set()

        deleted = self._pending_deletions(collection)
        deleted_students = self._pending_deletions(STUDENTS) if collection == ASSESSMENTS else set()
        updates = self._pending_updates(collection)

        merged = []
        for row in backend:
            if self._hidden(collection, row, deleted, deleted_students):
                continue
            if row["id"] in updates:
                row = {**row, **updates[row["id"]]}
            merged.append(row)
        merged.extend(
            e for e in queued
            if e.get("clientRef") not in replayed and not self._hidden(collection, e, deleted, deleted_students)
        )
        return merged

    def _get_one(self, collection: str, record_id: str) -> Optional[Dict[str, Any]]:
        queued = self._find_queued(collection, record_id)
        if queued:
            return queued
        backend_id = self.store.resolve_id(record_id)
        deleted = self._pending_deletions(collection)
        if backend_id in deleted:
            return None
        try:
            row = self._attempt(lambda: self.db.get_by_id(collection, backend_id))
        except BackendUnavailableError:
            return None
        if row is None:
            return None
        deleted_students = self._pending_deletions(STUDENTS) if collection == ASSESSMENTS else set()
        if self._hidden(collection, row, deleted, deleted_students):
            return None
        return {**row, **self._pending_updates(collection).get(backend_id, {})}

    # --- GENERATED CONTENT ---
    def save_generated_content(self, content: Dict[str, Any]) -> Dict[str, Any]:
        record = dict(content)
        return self._create(CONTENT, record, lambda: self.db.save_generated_content(record))

    def get_generated_content(self, content_type: Optional[str] = None) -> List[Dict[str, Any]]:
        return self._read(
            CONTENT,
            lambda: self.db.get_generated_content(content_type, limit=50),
            (lambda e: e.get("type") == content_type) if content_type else None,
        )

    def get_generated_content_by_id(self, content_id: str) -> Optional[Dict[str, Any]]:
        return self._get_one(CONTENT, content_id)

    def delete_generated_content(self, content_id: str) -> bool:
        return self._delete(CONTENT, content_id)

    # --- STUDENTS ---
    def add_student(self, student: Dict[str, Any]) -> Dict[str, Any]:
        record = {"subjects": [], "performance": {}, **student}
        return self._create(STUDENTS, record, lambda: self.db.add_student(record))

    def get_students(self) -> List[Dict[str, Any]]:
        return self._read(STUDENTS, self.db.get_students)

    def get_student(self, student_id: str) -> Optional[Dict[str, Any]]:
        return self._get_one(STUDENTS, student_id)

    def update_student(self, student_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._update(STUDENTS, student_id, update_data)

    def delete_student(self, student_id: str) -> bool:
        """Deletes the student together with every assessment recorded for it."""
        backend_id = self.store.resolve_id(student_id)
        deleted = self._delete(STUDENTS, student_id)
        if deleted:
            self.store.remove_where(
                keys.OFFLINE_ASSESSMENTS,
                lambda e: self._owned(e) and e.get("studentId") in (student_id, backend_id),
            )
        return deleted

    # --- ASSESSMENTS ---
    def save_assessment(self, assessment: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Records an assessment and stamps the student's `lastAssessment`.
        Returns None if the student does not exist for this teacher.
        """
        record = {"metadata": {}, **assessment}
        queued_student = self._find_queued(STUDENTS, record["studentId"])
        if queued_student:
            # The student only exists locally, so the assessment must wait for it.
            entry = self._queue_create(ASSESSMENTS, record)
            queued_student["lastAssessment"] = entry["createdAt"]
            self.store.replace_entry(keys.OFFLINE_STUDENTS, queued_student["id"], queued_student)
            return entry

        record["studentId"] = self.store.resolve_id(record["studentId"])
        return self._create(ASSESSMENTS, record, lambda: self.db.save_assessment(record))

    def get_assessments(self, student_id: Optional[str] = None) -> List[Dict[str, Any]]:
        if not student_id:
            return self._read(ASSESSMENTS, lambda: self.db.get_assessments(limit=100))
        backend_id = self.store.resolve_id(student_id)
        return self._read(
            ASSESSMENTS,
            lambda: self.db.get_assessments(backend_id),
            lambda e: e.get("studentId") in (student_id, backend_id),
        )

    # --- LESSON PLANS ---
    def save_lesson_plan(self, plan: Dict[str, Any]) -> Dict[str, Any]:
        record = {"status": "draft", **plan}
        return self._create(LESSON_PLANS, record, lambda: self.db.save_lesson_plan(record))

    def get_lesson_plans(self) -> List[Dict[str, Any]]:
        return self._read(LESSON_PLANS, self.db.get_lesson_plans)

    def update_lesson_plan(self, plan_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self._update(LESSON_PLANS, plan_id, update_data)

    def delete_lesson_plan(self, plan_id: str) -> bool:
        return self._delete(LESSON_PLANS, plan_id)

    # --- FULL SNAPSHOTS (dashboard) ---
    def get_all(self, collection: str) -> List[Dict[str, Any]]:
        """Every record in a collection, uncapped, merged with the queue."""
        return self._read(collection, lambda: self.db.repo_for(collection).list())

    # --- NETWORK MODE ---
    def enable_offline_mode(self) -> Dict[str, Any]:
        self.store.set_forced_offline(self.teacher_id, True)
        logger.info("Teacher %s switched to offline mode.", self.teacher_id)
        return self.get_offline_status()

    def enable_online_mode(self):
        """Leaves offline mode and immediately replays the queue."""
        from . import sync_service

        self.store.set_forced_offline(self.teacher_id, False)
        logger.info("Teacher %s switched to online mode; syncing.", self.teacher_id)
        return sync_service.sync_pending(self.db, self.store)

    def get_offline_status(self) -> Dict[str, Any]:
        pending = {
            key: sum(1 for e in self.store.get_list(key) if self._owned(e))
            for key in keys.LIST_KEYS
        }
        return {
            "forcedOffline": self.store.is_forced_offline(self.teacher_id),
            "pending": pending,
            "totalPending": sum(pending.values()),
        }
