# This project was developed with assistance from AI tools.
"""Repayment request/response schemas."""

from datetime import datetime
from decimal import Decimal

from helbflow_db.enums import PaymentMethod, RepaymentStatus
from pydantic import Field

from . import ApiModel


class RepaymentCreate(ApiModel):
    """Schedule or record a repayment against a loan."""

    loan_id: int
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payment_method: PaymentMethod = PaymentMethod.MANUAL
    status: RepaymentStatus = RepaymentStatus.PENDING
    due_date: datetime


class RepaymentStatusUpdate(ApiModel):
    """Move a repayment to a new status."""

    status: RepaymentStatus


class RepaymentResponse(ApiModel):
    """Single repayment."""

    id: int
    loan_id: int
    amount: Decimal
    payment_method: PaymentMethod
    status: RepaymentStatus
    due_date: datetime
    paid_date: datetime | None = None
    created_at: datetime | None = None


class UpcomingRepayment(RepaymentResponse):
    """Pending repayment with its loan's student for the collections view."""

    student_id: int
    student_name: str
