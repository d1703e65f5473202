# /sahayak-backend/app/routers/sync_router.py

from fastapi import APIRouter, Depends

from ..core.deps import get_data_service
from ..models.sync_model import OfflineStatus, SyncReport
from ..services import sync_service
from ..services.data_service import DataService

router = APIRouter()


@router.get("/status", response_model=OfflineStatus, summary="Get Offline Queue Status")
def get_offline_status(data: DataService = Depends(get_data_service)):
    return data.get_offline_status()


@router.post("", response_model=SyncReport, summary="Replay the Offline Queue")
def sync_now(data: DataService = Depends(get_data_service)):
    return sync_service.sync_pending(data.db, data.store)


@router.post("/offline", response_model=OfflineStatus, summary="Switch to Offline Mode")
def enable_offline_mode(data: DataService = Depends(get_data_service)):
    return data.enable_offline_mode()


@router.post("/online", response_model=SyncReport, summary="Switch to Online Mode and Sync")
def enable_online_mode(data: DataService = Depends(get_data_service)):
    return data.enable_online_mode()
