# This project was developed with assistance from AI tools.
"""Monthly budgets and their computed spend status."""

import logging

from helbflow_db import Budget
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.budget import BudgetCreate
from .budget_variance import (
    BudgetPeriod,
    BudgetStatus,
    DuplicateCategory,
    TransactionLine,
    evaluate,
    normalize_category,
)
from .transaction import list_transactions_for_month

logger = logging.getLogger(__name__)


async def create_budget(session: AsyncSession, data: BudgetCreate) -> Budget:
    """Create a category budget for one month.

    Raises DuplicateCategory if the student already has a budget for this
    category and month.
    """
    threshold = data.alert_threshold
    if threshold is None:
        threshold = settings.DEFAULT_ALERT_THRESHOLD
    category = normalize_category(data.category)

    budget = Budget(
        student_id=data.student_id,
        category=category,
        budget_amount=data.budget_amount,
        month=data.month,
        year=data.year,
        alert_threshold=threshold,
    )
    session.add(budget)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise DuplicateCategory(category) from exc
    await session.refresh(budget)
    return budget


async def list_budgets(session: AsyncSession, student_id: int) -> list[Budget]:
    """Return all of a student's budgets, latest period first."""
    stmt = (
        select(Budget)
        .where(Budget.student_id == student_id)
        .order_by(Budget.year.desc(), Budget.month.desc(), Budget.category)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_budgets_for_month(
    session: AsyncSession, student_id: int, year: int, month: int
) -> list[Budget]:
    stmt = (
        select(Budget)
        .where(
            Budget.student_id == student_id,
            Budget.year == year,
            Budget.month == month,
        )
        .order_by(Budget.category)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_budget_status(
    session: AsyncSession, student_id: int, year: int, month: int
) -> list[BudgetStatus]:
    """Evaluate every budget of the month against the month's transactions.

    Spent amounts are always computed from transactions, never stored.
    """
    budgets = await list_budgets_for_month(session, student_id, year, month)
    transactions = await list_transactions_for_month(session, student_id, year, month)
    lines = tuple(TransactionLine(amount=t.amount, category=t.category) for t in transactions)

    periods = [
        BudgetPeriod(
            category=b.category,
            budget_amount=b.budget_amount,
            alert_threshold_percent=b.alert_threshold,
            transactions=lines,
        )
        for b in budgets
    ]
    statuses = evaluate(periods)
    logger.debug(
        "Budget status for student %s %d-%02d: %d categories",
        student_id,
        year,
        month,
        len(statuses),
    )
    return statuses
