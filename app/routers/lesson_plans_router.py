# /sahayak-backend/app/routers/lesson_plans_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from typing import Any, Dict, List

from ..core.deps import get_data_service
from ..models import lesson_plan_model
from ..services.data_service import DataService

router = APIRouter()


@router.get("", response_model=List[lesson_plan_model.LessonPlan], summary="Get All Lesson Plans")
def get_lesson_plans(data: DataService = Depends(get_data_service)):
    return data.get_lesson_plans()

@router.post("", response_model=lesson_plan_model.LessonPlan, status_code=status.HTTP_201_CREATED, summary="Save a Lesson Plan")
def save_lesson_plan(plan: lesson_plan_model.LessonPlanCreate, data: DataService = Depends(get_data_service)):
    return data.save_lesson_plan(plan.model_dump(mode="json"))

@router.put("/{plan_id}", response_model=Dict[str, Any], summary="Update a Lesson Plan")
def update_lesson_plan(plan_id: str, plan_update: lesson_plan_model.LessonPlanUpdate, data: DataService = Depends(get_data_service)):
    update_data = plan_update.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update were provided.")
    updated = data.update_lesson_plan(plan_id, update_data)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lesson plan with ID {plan_id} not found")
    return updated

@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Lesson Plan")
def delete_lesson_plan(plan_id: str, data: DataService = Depends(get_data_service)):
    if not data.delete_lesson_plan(plan_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Lesson plan with ID {plan_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
