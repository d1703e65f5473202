# /sahayak-backend/app/routers/functions_router.py

"""
Callable-function endpoints. A client posts `{"data": {...}}` to
`/functions/{name}` and receives `{"result": {...}}`, or an error envelope
`{"error": {"status": ..., "message": ...}}` with a matching HTTP status.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core import config
from ..db.database import get_db
from ..models.tool_model import CallableResponse, HealthStatus
from ..services import gemini_service, tool_service
from ..services.tool_service import GenerationError, UnknownFunctionError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(http_status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=http_status, content={"error": {"status": code, "message": message}})


@router.post("/functions/{name}", response_model=CallableResponse, summary="Invoke a Generation Function")
async def invoke_function(name: str, request: Request):
    try:
        body = await request.json()
    except ValueError:
        return _error(status.HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT", "Request body must be a JSON object.")
    if not isinstance(body, dict) or not isinstance(body.get("data") or {}, dict):
        return _error(status.HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT", "Request body must be {\"data\": {...}}.")

    try:
        result = await tool_service.invoke_function(name, body.get("data") or {})
    except UnknownFunctionError as e:
        return _error(status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(e))
    except GenerationError as e:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL", str(e))
    except ValueError as e:
        return _error(status.HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT", str(e))
    return {"result": result}


@router.get("/healthCheck", response_model=HealthStatus, summary="Service Health")
def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        database = "unavailable"
    return HealthStatus(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=config.APP_VERSION,
        services={
            "gemini": "configured" if gemini_service.is_configured() else "not configured",
            "database": database,
            "functions": "operational",
        },
        endpoints=sorted(tool_service.FUNCTIONS),
    )
