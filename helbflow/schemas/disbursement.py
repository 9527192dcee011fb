# This project was developed with assistance from AI tools.
"""Disbursement request/response schemas, including AI sizing output."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from helbflow_db.enums import DisbursementStatus, DisbursementType, Recipient
from pydantic import Field

from . import ApiModel


class DisbursementCreate(ApiModel):
    """Record a disbursement for a student."""

    student_id: int
    type: DisbursementType
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    status: DisbursementStatus = DisbursementStatus.PENDING
    recipient: Recipient | None = None
    ai_recommendation: dict[str, Any] | None = None


class DisbursementStatusUpdate(ApiModel):
    """Move a disbursement to a new status."""

    status: DisbursementStatus


class DisbursementResponse(ApiModel):
    """Single disbursement."""

    id: int
    student_id: int
    type: DisbursementType
    amount: Decimal
    status: DisbursementStatus
    recipient: Recipient | None = None
    ai_recommendation: dict[str, Any] | None = None
    processed_at: datetime | None = None
    created_at: datetime | None = None


class RecentDisbursement(DisbursementResponse):
    """Disbursement with the recipient student's name for the dashboard feed."""

    student_name: str


class DisbursementCalculationRequest(ApiModel):
    """Student profile used to size a disbursement."""

    student_id: int | None = None
    course: str = Field(min_length=1)
    institution: str = Field(min_length=1)
    region: str = Field(min_length=1)
    year: int = Field(ge=1, le=8)
    semester: int = Field(ge=1, le=3)


class DisbursementCalculation(ApiModel):
    """Suggested disbursement breakdown (KSh)."""

    tuition: Decimal = Field(ge=0)
    upkeep: Decimal = Field(ge=0)
    books: Decimal = Field(ge=0)
    supplies: Decimal = Field(ge=0)
    accommodation: Decimal | None = Field(default=None, ge=0)
    total: Decimal = Field(ge=0)
    reasoning: str = ""
    is_fallback: bool = False
