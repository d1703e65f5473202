# /sahayak-backend/app/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends, HTTPException, status

# --- Service and Model Imports ---
from ..services import dashboard_service
from ..services.data_service import DataService
from ..core.deps import get_data_service
from ..models.dashboard_model import TeacherStats

router = APIRouter()

# --- Endpoint Definition ---
@router.get(
    "/stats",
    response_model=TeacherStats,
    summary="Get Teacher Statistics",
    description="Totals and breakdowns for the dashboard, including records still queued offline."
)
def get_teacher_stats(data: DataService = Depends(get_data_service)):
    """
    Thin router layer: the aggregation lives in `dashboard_service`.
    """
    try:
        return dashboard_service.get_teacher_stats(data)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to calculate statistics: {e}")
