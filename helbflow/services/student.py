# This project was developed with assistance from AI tools.
"""Student registration and lookup."""

import logging

from helbflow_db import Student
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.student import StudentCreate

logger = logging.getLogger(__name__)


class DuplicateStudentError(ValueError):
    """Raised when a student number is already registered."""

    pass


async def create_student(session: AsyncSession, data: StudentCreate) -> Student:
    """Register a student. Raises DuplicateStudentError on a reused student number."""
    student = Student(**data.model_dump())
    session.add(student)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateStudentError(
            f"Student number '{data.student_number}' is already registered"
        ) from exc
    await session.refresh(student)
    logger.info("Registered student %s (id=%s)", student.student_number, student.id)
    return student


async def list_students(session: AsyncSession) -> list[Student]:
    """Return all students, newest first."""
    result = await session.execute(select(Student).order_by(Student.created_at.desc()))
    return list(result.scalars().all())


async def get_student(session: AsyncSession, student_id: int) -> Student | None:
    return await session.get(Student, student_id)


async def get_student_by_number(session: AsyncSession, student_number: str) -> Student | None:
    """Look up a student by their institution-issued student number."""
    result = await session.execute(
        select(Student).where(Student.student_number == student_number)
    )
    return result.scalar_one_or_none()
