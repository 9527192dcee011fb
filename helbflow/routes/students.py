# This project was developed with assistance from AI tools.
"""Student registration and lookup routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.student import StudentCreate, StudentResponse
from ..services import student as student_service
from ..services.student import DuplicateStudentError

router = APIRouter()


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    body: StudentCreate,
    session: AsyncSession = Depends(get_db),
) -> StudentResponse:
    """Register a student. Returns 409 if the student number is taken."""
    try:
        student = await student_service.create_student(session, body)
    except DuplicateStudentError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return StudentResponse.model_validate(student)


@router.get("", response_model=list[StudentResponse])
async def list_students(session: AsyncSession = Depends(get_db)) -> list[StudentResponse]:
    students = await student_service.list_students(session)
    return [StudentResponse.model_validate(s) for s in students]


@router.get("/by-student-id/{student_number}", response_model=StudentResponse)
async def get_student_by_number(
    student_number: str,
    session: AsyncSession = Depends(get_db),
) -> StudentResponse:
    student = await student_service.get_student_by_number(session, student_number)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return StudentResponse.model_validate(student)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> StudentResponse:
    student = await student_service.get_student(session, student_id)
    if student is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
    return StudentResponse.model_validate(student)
