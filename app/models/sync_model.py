# /sahayak-backend/app/models/sync_model.py

from pydantic import BaseModel, Field
from typing import Dict, List


class OfflineStatus(BaseModel):
    """Snapshot of the offline queue for one teacher."""
    forcedOffline: bool
    pending: Dict[str, int] = Field(default_factory=dict, description="Queued entries per storage key.")
    totalPending: int


class SyncReport(BaseModel):
    synced: Dict[str, int] = Field(default_factory=dict, description="Entries replayed successfully per storage key.")
    skippedDuplicates: int = Field(default=0, description="Queued creates whose idempotency key already existed in the backend.")
    dropped: int = Field(default=0, description="Queued creates discarded because the record they depend on no longer exists.")
    failed: int = 0
    errors: List[str] = Field(default_factory=list)
    remaining: int = 0
