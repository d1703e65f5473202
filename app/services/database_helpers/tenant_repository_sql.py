# /sahayak-backend/app/services/database_helpers/tenant_repository_sql.py

"""
Shared base for every repository whose rows belong to a teacher.

A repository instance is bound to one `teacher_id` for its whole life. All
reads go through `_scoped()` and all inserts through `_stamp()`, so no query
in a subclass can see or write another teacher's rows.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import DateTime, inspect
from sqlalchemy.orm import Query, Session

# The ORM attribute `meta` is exposed to the rest of the app as `metadata`.
_ATTRIBUTE_TO_FIELD = {"meta": "metadata"}
_FIELD_TO_ATTRIBUTE = {v: k for k, v in _ATTRIBUTE_TO_FIELD.items()}

# Fields that only exist on queued offline entries.
LOCAL_ONLY_FIELDS = {"isOffline", "queuedAt"}


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def to_record(obj) -> Dict[str, Any]:
    """Converts an ORM row into a plain dict keyed by API field names."""
    record = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        if isinstance(value, datetime):
            value = _as_utc(value)
        record[_ATTRIBUTE_TO_FIELD.get(attr.key, attr.key)] = value
    return record


class TenantRepositorySQL:
    model = None
    id_prefix = "rec"

    def __init__(self, db_session: Session, teacher_id: str):
        if not teacher_id:
            raise ValueError("A teacher_id is required for tenant-scoped data access.")
        self.db = db_session
        self.teacher_id = teacher_id

    # --- Tenant guards ---
    def _scoped(self) -> Query:
        return self.db.query(self.model).filter(self.model.teacherId == self.teacher_id)

    def _stamp(self, record: Dict[str, Any]) -> Dict[str, Any]:
        stamped = dict(record)
        stamped["teacherId"] = self.teacher_id
        return stamped

    # --- Conversion ---
    def _to_columns(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Maps API field names onto ORM attributes, dropping unknown and local-only keys."""
        columns = {}
        mapper = inspect(self.model)
        for field, value in record.items():
            if field in LOCAL_ONLY_FIELDS:
                continue
            attr = _FIELD_TO_ATTRIBUTE.get(field, field)
            if attr not in mapper.column_attrs:
                continue
            column_type = mapper.column_attrs[attr].columns[0].type
            if isinstance(column_type, DateTime) and isinstance(value, str):
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            columns[attr] = value
        return columns

    def new_id(self) -> str:
        return f"{self.id_prefix}_{uuid.uuid4().hex[:12]}"

    # --- Generic CRUD ---
    def add(self, record: Dict[str, Any]) -> Dict[str, Any]:
        columns = self._to_columns(self._stamp(record))
        columns["id"] = self.new_id()
        row = self.model(**columns)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return to_record(row)

    def _get_row(self, record_id: str):
        return self._scoped().filter(self.model.id == record_id).first()

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        row = self._get_row(record_id)
        return to_record(row) if row else None

    def get_by_client_ref(self, client_ref: str) -> Optional[Dict[str, Any]]:
        row = self._scoped().filter(self.model.clientRef == client_ref).first()
        return to_record(row) if row else None

    def existing_client_refs(self, client_refs: Iterable[str]) -> Set[str]:
        refs = [ref for ref in client_refs if ref]
        if not refs:
            return set()
        rows = self._scoped().with_entities(self.model.clientRef).filter(self.model.clientRef.in_(refs)).all()
        return {row[0] for row in rows}

    def update(self, record_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        row = self._get_row(record_id)
        if not row:
            return None
        columns = self._to_columns(update_data)
        # Ownership and identity never change through an update.
        for protected in ("id", "teacherId", "clientRef", "createdAt"):
            columns.pop(protected, None)
        for attr, value in columns.items():
            setattr(row, attr, value)
        if hasattr(self.model, "updatedAt"):
            row.updatedAt = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(row)
        return to_record(row)

    def delete(self, record_id: str) -> bool:
        row = self._get_row(record_id)
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        return True

    def list(self, order_by=None, limit: Optional[int] = None, **filters) -> List[Dict[str, Any]]:
        query = self._scoped()
        for attr, value in filters.items():
            query = query.filter(getattr(self.model, attr) == value)
        if order_by is not None:
            query = query.order_by(order_by)
        if limit:
            query = query.limit(limit)
        return [to_record(row) for row in query.all()]
