# This project was developed with assistance from AI tools.
"""Dashboard statistics -- read-only aggregate queries."""

from datetime import UTC, datetime
from decimal import ROUND_HALF_EVEN, Decimal

from helbflow_db import Disbursement, Loan, Repayment, Student
from helbflow_db.enums import DisbursementStatus, LoanStatus, RepaymentStatus
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.dashboard import DashboardStats
from .transaction import month_bounds


async def get_dashboard_stats(
    session: AsyncSession, now: datetime | None = None
) -> DashboardStats:
    """Compute headline figures.

    ``repayment_rate`` is completed over all repayments as a percentage,
    rounded to one decimal place, and 0 when there are no repayments.
    """
    now = now or datetime.now(UTC)
    start, end = month_bounds(now.year, now.month)

    total_students = (await session.execute(select(func.count(Student.id)))).scalar() or 0

    active_stmt = select(func.coalesce(func.sum(Loan.outstanding_amount), 0)).where(
        Loan.status == LoanStatus.ACTIVE
    )
    total_active = (await session.execute(active_stmt)).scalar() or 0

    monthly_stmt = select(func.coalesce(func.sum(Disbursement.amount), 0)).where(
        Disbursement.status == DisbursementStatus.COMPLETED,
        Disbursement.created_at >= start,
        Disbursement.created_at < end,
    )
    monthly = (await session.execute(monthly_stmt)).scalar() or 0

    total_repayments = (await session.execute(select(func.count(Repayment.id)))).scalar() or 0
    completed_stmt = select(func.count(Repayment.id)).where(
        Repayment.status == RepaymentStatus.COMPLETED
    )
    completed = (await session.execute(completed_stmt)).scalar() or 0

    rate = Decimal("0")
    if total_repayments > 0:
        rate = (Decimal(completed) / Decimal(total_repayments) * 100).quantize(
            Decimal("0.1"), rounding=ROUND_HALF_EVEN
        )

    return DashboardStats(
        total_students=total_students,
        total_active_loans=Decimal(total_active),
        monthly_disbursements=Decimal(monthly),
        repayment_rate=rate,
    )
