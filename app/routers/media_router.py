# /sahayak-backend/app/routers/media_router.py

import mimetypes

from fastapi import APIRouter, Depends, HTTPException, status, Response

from ..core.deps import get_current_teacher_id
from ..services import storage_service

router = APIRouter()


@router.get("/{path:path}", summary="Download a Stored File")
def get_media(path: str, teacher_id: str = Depends(get_current_teacher_id)):
    """
    Serves an uploaded file, such as a reading recording, to the teacher who
    owns it. Other teachers get the same 404 as for a missing file.
    """
    try:
        body = storage_service.read_file(path) if storage_service.owner_of(path) == teacher_id else None
    except (ValueError, FileNotFoundError):
        body = None
    if body is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    media_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
    return Response(content=body, media_type=media_type)
