# This project was developed with assistance from AI tools.
"""Budget request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from . import ApiModel


class BudgetCreate(ApiModel):
    """Set a monthly budget ceiling for one category."""

    student_id: int
    category: str = Field(min_length=1, max_length=100)
    budget_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2000, le=2100)
    alert_threshold: Decimal | None = Field(default=None, ge=0, le=100)


class BudgetResponse(ApiModel):
    """Single budget."""

    id: int
    student_id: int
    category: str
    budget_amount: Decimal
    month: int
    year: int
    alert_threshold: Decimal
    created_at: datetime | None = None


class BudgetStatusItem(ApiModel):
    """Computed spend status for one category.

    ``percent_used`` is null when the budget is zero.
    """

    category: str
    budget_amount: Decimal
    spent_amount: Decimal
    remaining_amount: Decimal
    percent_used: Decimal | None = None
    state: str
    variance_amount: Decimal
    alert_threshold_percent: Decimal
