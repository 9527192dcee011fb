# This project was developed with assistance from AI tools.
"""Transaction request/response schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from . import ApiModel


class TransactionCreate(ApiModel):
    """Record a spending transaction. A blank category is auto-categorized."""

    student_id: int
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None
    merchant_name: str | None = Field(default=None, max_length=255)


class TransactionResponse(ApiModel):
    """Single transaction."""

    id: int
    student_id: int
    amount: Decimal
    category: str
    description: str | None = None
    merchant_name: str | None = None
    date: datetime | None = None
    is_auto_categorized: bool = False
