# /sahayak-backend/app/routers/students_router.py

from fastapi import APIRouter, Depends, HTTPException, status, Response
from typing import Any, Dict, List

from ..core.deps import get_data_service
from ..models import student_model
from ..services.data_service import DataService

router = APIRouter()

# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.Student], summary="Get All Students")
def get_students(data: DataService = Depends(get_data_service)):
    return data.get_students()

@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Add a Student")
def add_student(student_create: student_model.StudentCreate, data: DataService = Depends(get_data_service)):
    return data.add_student(student_create.model_dump(mode="json"))

# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(student_id: str, data: DataService = Depends(get_data_service)):
    student = data.get_student(student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return student

@router.put("/{student_id}", response_model=Dict[str, Any], summary="Update a Student")
def update_student(student_id: str, student_update: student_model.StudentUpdate, data: DataService = Depends(get_data_service)):
    update_data = student_update.model_dump(mode="json", exclude_unset=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update were provided.")
    updated = data.update_student(student_id, update_data)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return updated

@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student and their Assessments")
def delete_student(student_id: str, data: DataService = Depends(get_data_service)):
    if not data.delete_student(student_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
