# This project was developed with assistance from AI tools.
"""Loan repayments."""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from helbflow_db import Loan, Repayment
from helbflow_db.enums import LoanStatus, RepaymentStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..schemas.repayment import RepaymentCreate
from .disbursement import InvalidStatusTransition

logger = logging.getLogger(__name__)


def _apply_payment(loan: Loan, amount: Decimal) -> None:
    """Reduce a loan's outstanding balance; mark it paid at zero."""
    loan.outstanding_amount = max(Decimal(loan.outstanding_amount) - amount, Decimal("0"))
    if loan.outstanding_amount == 0:
        loan.status = LoanStatus.PAID
        logger.info("Loan %s fully repaid", loan.id)


async def create_repayment(session: AsyncSession, data: RepaymentCreate) -> Repayment:
    repayment = Repayment(**data.model_dump())
    if repayment.status == RepaymentStatus.COMPLETED:
        repayment.paid_date = datetime.now(UTC)
        loan = await session.get(Loan, data.loan_id)
        if loan is not None:
            _apply_payment(loan, data.amount)
    session.add(repayment)
    await session.commit()
    await session.refresh(repayment)
    return repayment


async def list_repayments(session: AsyncSession, loan_id: int) -> list[Repayment]:
    """Return a loan's repayments in due-date order."""
    stmt = (
        select(Repayment)
        .where(Repayment.loan_id == loan_id)
        .order_by(Repayment.due_date)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def upcoming_repayments(session: AsyncSession) -> list[Repayment]:
    """Return pending repayments due from now on, with loan and student loaded."""
    stmt = (
        select(Repayment)
        .options(joinedload(Repayment.loan).joinedload(Loan.student))
        .where(
            Repayment.status == RepaymentStatus.PENDING,
            Repayment.due_date >= datetime.now(UTC),
        )
        .order_by(Repayment.due_date)
    )
    result = await session.execute(stmt)
    return list(result.unique().scalars().all())


async def update_repayment_status(
    session: AsyncSession,
    repayment_id: int,
    new_status: RepaymentStatus,
) -> Repayment | None:
    """Move a repayment to ``new_status``. Returns None if it does not exist.

    Completing a repayment records the paid date and reduces the loan's
    outstanding amount. Completed is terminal, so that happens at most once.

    Raises InvalidStatusTransition if the move is not allowed.
    """
    repayment = await session.get(Repayment, repayment_id)
    if repayment is None:
        return None

    current = repayment.status or RepaymentStatus.PENDING
    allowed = RepaymentStatus.valid_transitions().get(current, frozenset())
    if new_status not in allowed:
        raise InvalidStatusTransition(
            f"Cannot move repayment from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}."
        )

    if new_status == RepaymentStatus.COMPLETED:
        repayment.paid_date = datetime.now(UTC)
        loan = await session.get(Loan, repayment.loan_id)
        if loan is not None:
            _apply_payment(loan, Decimal(repayment.amount))

    repayment.status = new_status
    await session.commit()
    await session.refresh(repayment)
    logger.info("Repayment %s moved %s -> %s", repayment_id, current.value, new_status.value)
    return repayment
