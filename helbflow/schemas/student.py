# This project was developed with assistance from AI tools.
"""Student request/response schemas."""

from datetime import datetime

from pydantic import Field

from . import ApiModel


class StudentCreate(ApiModel):
    """Register a student."""

    student_number: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str | None = Field(default=None, max_length=255)
    course: str = Field(min_length=1)
    institution: str = Field(min_length=1)
    region: str = Field(min_length=1)
    year: int = Field(ge=1, le=8)
    semester: int = Field(ge=1, le=3)
    account_number: str | None = None
    bank_name: str | None = None


class StudentResponse(ApiModel):
    """Single student."""

    id: int
    student_number: str
    first_name: str
    last_name: str
    email: str | None = None
    course: str
    institution: str
    region: str
    year: int
    semester: int
    account_number: str | None = None
    bank_name: str | None = None
    created_at: datetime | None = None
