# /sahayak-backend/app/routers/content_router.py

from fastapi import APIRouter, Depends, HTTPException, Query, status, Response
from typing import List, Literal, Optional

from ..core.deps import get_data_service
from ..models import content_model
from ..services import export_service
from ..services.data_service import DataService
from .export_router import attachment

router = APIRouter()


@router.get("", response_model=List[content_model.GeneratedContent], summary="Get Saved Content")
def get_generated_content(
    type: Optional[content_model.ContentType] = Query(default=None, description="Only return content of this type."),
    data: DataService = Depends(get_data_service),
):
    """Returns up to 50 saved items, newest first, followed by any still queued offline."""
    return data.get_generated_content(type.value if type else None)

@router.post("", response_model=content_model.GeneratedContent, status_code=status.HTTP_201_CREATED, summary="Save Generated Content")
def save_generated_content(content: content_model.GeneratedContentCreate, data: DataService = Depends(get_data_service)):
    return data.save_generated_content(content.model_dump(mode="json"))

@router.get("/{content_id}", response_model=content_model.GeneratedContent, summary="Get a Single Saved Item")
def get_generated_content_by_id(content_id: str, data: DataService = Depends(get_data_service)):
    item = data.get_generated_content_by_id(content_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Content with ID {content_id} not found")
    return item

@router.delete("/{content_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Saved Content")
def delete_generated_content(content_id: str, data: DataService = Depends(get_data_service)):
    if not data.delete_generated_content(content_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Content with ID {content_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{content_id}/export", summary="Download Saved Content as PDF or PNG")
def export_generated_content(
    content_id: str,
    format: Literal["pdf", "png"] = Query(default="pdf"),
    data: DataService = Depends(get_data_service),
):
    item = data.get_generated_content_by_id(content_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Content with ID {content_id} not found")
    try:
        if format == "pdf":
            body = export_service.render_pdf(item["content"], item["title"], item.get("language") or "english")
            media_type = "application/pdf"
        else:
            body = export_service.render_image(item["content"], item["title"])
            media_type = "image/png"
    except Exception as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to export content: {e}")
    filename = export_service.build_filename(item["type"], item["title"], format)
    return Response(content=body, media_type=media_type, headers=attachment(filename))
