# This project was developed with assistance from AI tools.
"""Spending transactions."""

from datetime import UTC, datetime

from helbflow_db import Transaction
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.transaction import TransactionCreate
from .budget_variance import normalize_category


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Return the half-open UTC interval [start, next month start) for a month."""
    start = datetime(year, month, 1, tzinfo=UTC)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=UTC)
    else:
        end = datetime(year, month + 1, 1, tzinfo=UTC)
    return start, end


async def create_transaction(
    session: AsyncSession,
    data: TransactionCreate,
    *,
    auto_category: str | None = None,
) -> Transaction:
    """Record a transaction.

    When ``data.category`` is blank the caller-supplied ``auto_category`` is
    used and the row is flagged as auto-categorized.
    """
    category = normalize_category(data.category or "")
    is_auto = False
    if not category:
        category = normalize_category(auto_category or "other") or "other"
        is_auto = True

    transaction = Transaction(
        student_id=data.student_id,
        amount=data.amount,
        category=category,
        description=data.description,
        merchant_name=data.merchant_name,
        is_auto_categorized=is_auto,
    )
    session.add(transaction)
    await session.commit()
    await session.refresh(transaction)
    return transaction


async def list_transactions(session: AsyncSession, student_id: int) -> list[Transaction]:
    """Return a student's transactions, newest first."""
    stmt = (
        select(Transaction)
        .where(Transaction.student_id == student_id)
        .order_by(Transaction.date.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_transactions_for_month(
    session: AsyncSession, student_id: int, year: int, month: int
) -> list[Transaction]:
    start, end = month_bounds(year, month)
    stmt = (
        select(Transaction)
        .where(
            Transaction.student_id == student_id,
            Transaction.date >= start,
            Transaction.date < end,
        )
        .order_by(Transaction.date.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
