# This project was developed with assistance from AI tools.
"""Loan and repayment schedule schemas."""

from datetime import date, datetime
from decimal import Decimal

from helbflow_db.enums import LoanStatus
from pydantic import Field, model_validator

from . import ApiModel


class LoanCreate(ApiModel):
    """Create a loan. ``outstanding_amount`` defaults to ``total_amount``."""

    student_id: int
    total_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    outstanding_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    interest_rate: Decimal = Field(ge=0, le=100, max_digits=5, decimal_places=2)
    status: LoanStatus = LoanStatus.ACTIVE
    graduation_date: datetime | None = None
    repayment_start_date: datetime | None = None
    monthly_repayment: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def _outstanding_within_total(self) -> "LoanCreate":
        if self.outstanding_amount is not None and self.outstanding_amount > self.total_amount:
            raise ValueError("outstanding_amount cannot exceed total_amount")
        return self


class LoanResponse(ApiModel):
    """Single loan."""

    id: int
    student_id: int
    total_amount: Decimal
    outstanding_amount: Decimal
    interest_rate: Decimal
    status: LoanStatus
    graduation_date: datetime | None = None
    repayment_start_date: datetime | None = None
    monthly_repayment: Decimal | None = None
    created_at: datetime | None = None


class LoanTermsRequest(ApiModel):
    """Ad-hoc terms for a schedule preview.

    Range checks are left to the amortization engine so that the preview and
    the stored-loan schedule report the same errors.
    """

    principal: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    repayment_start_date: date


class ScheduleEntryResponse(ApiModel):
    """One month of a repayment schedule."""

    month: int
    due_date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


class RepaymentScheduleResponse(ApiModel):
    """Full schedule plus summary.

    ``incomplete`` is true when the 120-month cap was reached with a balance
    outstanding; ``remaining_balance_at_cap`` then holds that balance.
    """

    loan_id: int | None = None
    schedule: list[ScheduleEntryResponse]
    months: int
    incomplete: bool
    remaining_balance_at_cap: Decimal | None = None
    warning: str | None = None
    total_interest: Decimal
    total_paid: Decimal
    payoff_date: date | None = None
