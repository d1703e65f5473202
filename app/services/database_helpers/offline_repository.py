# /sahayak-backend/app/services/database_helpers/offline_repository.py

"""
File-backed local store for the offline outbox.

Each storage key is one JSON document under `root_dir`: lists for the queued
entity writes and pending updates/deletions, objects for `synced_ids` and
`network_state`. Writes go through a temp file and `os.replace` so a crash
never leaves a half-written document behind.
"""

import json
import logging
import os
import tempfile
import threading
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

OFFLINE_CONTENT = "offline_content"
OFFLINE_STUDENTS = "offline_students"
OFFLINE_LESSON_PLANS = "offline_lesson_plans"
OFFLINE_ASSESSMENTS = "offline_assessments"
PENDING_UPDATES = "pending_updates"
PENDING_DELETIONS = "pending_deletions"
SYNCED_IDS = "synced_ids"
NETWORK_STATE = "network_state"

LIST_KEYS = (
    OFFLINE_STUDENTS, OFFLINE_CONTENT, OFFLINE_LESSON_PLANS,
    OFFLINE_ASSESSMENTS, PENDING_UPDATES, PENDING_DELETIONS,
)
MAPPING_KEYS = (SYNCED_IDS, NETWORK_STATE)


class OfflineStore:
    def __init__(self, root_dir: str):
        self.root_dir = root_dir
        self._lock = threading.RLock()
        os.makedirs(root_dir, exist_ok=True)

    def _path(self, key: str) -> str:
        if key not in LIST_KEYS and key not in MAPPING_KEYS:
            raise ValueError(f"Unknown offline storage key: {key}")
        return os.path.join(self.root_dir, f"{key}.json")

    def _read(self, key: str, default):
        path = self._path(key)
        if not os.path.exists(path):
            return default
        with open(path, "r", encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                # Corrupt documents are left in place for inspection.
                logger.error("Offline store document %s is corrupt: %s", path, e)
                raise

    def _write(self, key: str, value) -> None:
        path = self._path(key)
        fd, tmp_path = tempfile.mkstemp(dir=self.root_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    # --- Lists ---
    def get_list(self, key: str) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._read(key, []))

    def append(self, key: str, entry: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            entries = self._read(key, [])
            entries.append(entry)
            self._write(key, entries)
        return entry

    def find(self, key: str, entry_id: str) -> Optional[Dict[str, Any]]:
        return next((e for e in self.get_list(key) if e.get("id") == entry_id), None)

    def replace_entry(self, key: str, entry_id: str, entry: Dict[str, Any]) -> bool:
        with self._lock:
            entries = self._read(key, [])
            for index, existing in enumerate(entries):
                if existing.get("id") == entry_id:
                    entries[index] = entry
                    self._write(key, entries)
                    return True
        return False

    def remove_where(self, key: str, predicate: Callable[[Dict[str, Any]], bool]) -> int:
        with self._lock:
            entries = self._read(key, [])
            kept = [e for e in entries if not predicate(e)]
            removed = len(entries) - len(kept)
            if removed:
                self._write(key, kept)
        return removed

    def remove_entry(self, key: str, entry_id: str) -> bool:
        return self.remove_where(key, lambda e: e.get("id") == entry_id) > 0

    # --- Mappings ---
    def get_mapping(self, key: str) -> Dict[str, Any]:
        with self._lock:
            return dict(self._read(key, {}))

    def set_mapping_value(self, key: str, name: str, value: Any) -> None:
        with self._lock:
            mapping = self._read(key, {})
            mapping[name] = value
            self._write(key, mapping)

    # --- Synthetic id resolution ---
    def resolve_id(self, record_id: str) -> str:
        """Returns the backend id a synced offline entry was stored under, if any."""
        return self.get_mapping(SYNCED_IDS).get(record_id, record_id)

    def record_synced_id(self, offline_id: str, backend_id: str) -> None:
        self.set_mapping_value(SYNCED_IDS, offline_id, backend_id)

    # --- Network state ---
    def is_forced_offline(self, teacher_id: str) -> bool:
        return bool(self.get_mapping(NETWORK_STATE).get(teacher_id, {}).get("forcedOffline", False))

    def set_forced_offline(self, teacher_id: str, forced: bool) -> None:
        self.set_mapping_value(NETWORK_STATE, teacher_id, {"forcedOffline": forced})
