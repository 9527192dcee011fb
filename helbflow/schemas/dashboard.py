# This project was developed with assistance from AI tools.
"""Dashboard statistics schema."""

from decimal import Decimal

from . import ApiModel


class DashboardStats(ApiModel):
    """Headline figures for the operations dashboard."""

    total_students: int
    total_active_loans: Decimal
    monthly_disbursements: Decimal
    repayment_rate: Decimal
