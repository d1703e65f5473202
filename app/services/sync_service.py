# /sahayak-backend/app/services/sync_service.py

"""
Replays one teacher's offline outbox against the backend.

Order: students, content, lesson plans, assessments, then pending updates and
pending deletions. Each entry leaves the store only after its backend write
succeeds. A queued create whose `clientRef` is already in the backend is
treated as done, so running sync again after a partial failure never inserts
a record twice. An assessment whose student exists neither in the queue nor
in the backend is dropped rather than retried.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..models.sync_model import SyncReport
from .database_service import ASSESSMENTS, CONTENT, LESSON_PLANS, STUDENTS, DatabaseService
from .database_helpers import offline_repository as keys
from .database_helpers.offline_repository import OfflineStore
from .data_service import COLLECTION_KEYS

logger = logging.getLogger(__name__)

REPLAY_ORDER = (STUDENTS, CONTENT, LESSON_PLANS, ASSESSMENTS)


class _ReplayDeferred(Exception):
    """The entry depends on a record that has not reached the backend yet."""


class _ReplayOrphaned(Exception):
    """The entry depends on a record that is neither queued nor in the backend."""


def _count_remaining(store: OfflineStore, teacher_id: str) -> int:
    return sum(
        1 for key in keys.LIST_KEYS for e in store.get_list(key)
        if e.get("teacherId") == teacher_id
    )


def _replay_create(db: DatabaseService, store: OfflineStore, collection: str, entry: Dict) -> Optional[str]:
    """
    Writes one queued create. Returns the backend id, and None if the record
    was already present (a duplicate of an earlier, interrupted sync).
    """
    existing = db.get_by_client_ref(collection, entry["clientRef"])
    if existing:
        store.record_synced_id(entry["id"], existing["id"])
        return None

    record = {k: v for k, v in entry.items() if k not in ("id", "teacherId")}
    if collection == ASSESSMENTS:
        student_id = store.resolve_id(record["studentId"])
        if store.find(keys.OFFLINE_STUDENTS, student_id):
            raise _ReplayDeferred(f"student {student_id} has not been synced yet")
        record["studentId"] = student_id

    created = db.create(collection, record)
    if created is None:
        raise _ReplayOrphaned(f"student {record.get('studentId')} does not exist")
    store.record_synced_id(entry["id"], created["id"])
    return created["id"]


def sync_pending(db: DatabaseService, store: OfflineStore) -> SyncReport:
    teacher_id = db.teacher_id
    report = SyncReport()

    if store.is_forced_offline(teacher_id):
        report.errors.append("Offline mode is enabled; nothing was synced.")
        report.remaining = _count_remaining(store, teacher_id)
        return report

    def failed(entry: Dict, reason) -> None:
        report.failed += 1
        report.errors.append(f"{entry['id']}: {reason}")
        logger.warning("Sync of offline entry %s failed: %s", entry["id"], reason)

    # --- Queued creates ---
    for collection in REPLAY_ORDER:
        key = COLLECTION_KEYS[collection]
        for entry in store.get_list(key):
            if entry.get("teacherId") != teacher_id:
                continue
            try:
                backend_id = _replay_create(db, store, collection, entry)
            except _ReplayDeferred as e:
                failed(entry, e)
                continue
            except _ReplayOrphaned as e:
                # Retrying can never succeed.
                logger.info("Offline %s %s dropped: %s", key, entry["id"], e)
                store.remove_entry(key, entry["id"])
                report.dropped += 1
                report.errors.append(f"{entry['id']}: dropped, {e}")
                continue
            except SQLAlchemyError as e:
                db.rollback()
                failed(entry, e)
                continue
            store.remove_entry(key, entry["id"])
            if backend_id is None:
                report.skippedDuplicates += 1
            else:
                report.synced[key] = report.synced.get(key, 0) + 1

    # --- Pending updates and deletions ---
    for key in (keys.PENDING_UPDATES, keys.PENDING_DELETIONS):
        for entry in store.get_list(key):
            if entry.get("teacherId") != teacher_id:
                continue
            doc_id = store.resolve_id(entry["docId"])
            try:
                if key == keys.PENDING_UPDATES:
                    applied = db.update(entry["collection"], doc_id, entry["data"]) is not None
                else:
                    applied = db.delete(entry["collection"], doc_id)
            except SQLAlchemyError as e:
                db.rollback()
                failed(entry, e)
                continue
            if not applied:
                # Target already gone.
                logger.info("Offline %s %s targets missing record %s; dropping.", key, entry["id"], doc_id)
            store.remove_entry(key, entry["id"])
            report.synced[key] = report.synced.get(key, 0) + 1

    report.remaining = _count_remaining(store, teacher_id)
    logger.info(
        "Sync for teacher %s finished: %s synced, %d duplicates skipped, %d dropped, %d failed, %d remaining.",
        teacher_id, report.synced, report.skippedDuplicates, report.dropped, report.failed, report.remaining,
    )
    return report
