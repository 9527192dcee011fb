# This project was developed with assistance from AI tools.
"""AI advice schemas: stored advice rows and advisory oracle payloads."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from helbflow_db.enums import AdviceType
from pydantic import Field

from . import ApiModel


class AdviceResponse(ApiModel):
    """Stored advice message."""

    id: int
    student_id: int
    type: AdviceType
    message: str
    category: str | None = None
    suggested_action: str | None = None
    is_read: bool = False
    created_at: datetime | None = None


class BudgetAdviceItem(ApiModel):
    """One piece of budget advice returned by the oracle."""

    category: str = "general"
    message: str = Field(min_length=1)
    type: Literal["warning", "tip", "alert"] = "tip"
    suggested_action: str = ""


class SpendingAnalysis(ApiModel):
    """Spending trend analysis over a student's transactions."""

    overspending_categories: list[str] = []
    savings_opportunities: list[str] = []
    recommendations: list[str] = []
    predicted_spending: Decimal = Decimal("0")
    is_fallback: bool = False
