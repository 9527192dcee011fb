# This project was developed with assistance from AI tools.
"""Loans and their repayment schedules."""

import logging

from helbflow_db import Loan
from helbflow_db.enums import LoanStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.loan import LoanCreate
from .amortization import LoanTerms, ScheduleResult, generate_schedule

logger = logging.getLogger(__name__)


class LoanTermsUnavailable(ValueError):
    """Raised when a stored loan lacks the fields needed to build a schedule."""

    pass


async def create_loan(session: AsyncSession, data: LoanCreate) -> Loan:
    """Create a loan. Outstanding amount defaults to the full loan amount."""
    values = data.model_dump()
    if values["outstanding_amount"] is None:
        values["outstanding_amount"] = data.total_amount
    loan = Loan(**values)
    session.add(loan)
    await session.commit()
    await session.refresh(loan)
    return loan


async def get_loan(session: AsyncSession, loan_id: int) -> Loan | None:
    return await session.get(Loan, loan_id)


async def get_loan_for_student(session: AsyncSession, student_id: int) -> Loan | None:
    """Return the student's most recent loan, if any."""
    stmt = (
        select(Loan)
        .where(Loan.student_id == student_id)
        .order_by(Loan.created_at.desc())
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def list_active_loans(session: AsyncSession) -> list[Loan]:
    stmt = (
        select(Loan)
        .where(Loan.status == LoanStatus.ACTIVE)
        .order_by(Loan.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


def loan_terms(loan: Loan) -> LoanTerms:
    """Build schedule inputs from a stored loan.

    The outstanding amount is amortized from the repayment start date.

    Raises:
        LoanTermsUnavailable: no repayment start date or monthly repayment.
        InvalidLoanTerms: stored values are out of range.
    """
    if loan.repayment_start_date is None or loan.monthly_repayment is None:
        raise LoanTermsUnavailable(
            f"Loan {loan.id} has no repayment start date or monthly repayment set"
        )
    return LoanTerms.create(
        principal=loan.outstanding_amount,
        annual_interest_rate_percent=loan.interest_rate,
        monthly_payment=loan.monthly_repayment,
        repayment_start_date=loan.repayment_start_date.date(),
    )


def build_schedule(loan: Loan) -> ScheduleResult:
    """Amortize a stored loan's outstanding balance."""
    result = generate_schedule(loan_terms(loan))
    logger.info("Built %d-month schedule for loan %s", result.months, loan.id)
    return result
