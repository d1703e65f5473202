# /sahayak-backend/app/routers/export_router.py

from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status, Response
from pydantic import BaseModel, Field

from ..core.deps import get_current_teacher_id
from ..services import export_service

router = APIRouter(dependencies=[Depends(get_current_teacher_id)])


class ExportRequest(BaseModel):
    content: str = Field(..., min_length=1)
    title: str = "document"
    language: str = "english"
    kind: str = Field(default="content", description="Prefix for the download filename, e.g. 'worksheet'.")


def attachment(filename: str) -> dict:
    """Content-Disposition that survives non-ASCII titles."""
    return {"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}


@router.post("/pdf", summary="Render Text as a PDF")
def export_pdf(request: ExportRequest):
    try:
        body = export_service.render_pdf(request.content, request.title, request.language)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to export PDF: {e}")
    filename = export_service.build_filename(request.kind, request.title, "pdf")
    return Response(content=body, media_type="application/pdf", headers=attachment(filename))


@router.post("/image", summary="Render Text as a PNG Image")
def export_image(request: ExportRequest):
    try:
        body = export_service.render_image(request.content, request.title)
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to export image: {e}")
    filename = export_service.build_filename(request.kind, request.title, "png")
    return Response(content=body, media_type="image/png", headers=attachment(filename))
