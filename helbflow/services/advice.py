# This project was developed with assistance from AI tools.
"""AI advice service: oracle calls with explicit fallbacks, and advice storage.

Every oracle call here is wrapped so that an ``OracleError`` degrades to a
static default (or, for budget advice, to alerts derived from the budget
variance engine). Nothing in this module raises because the oracle failed.
"""

import logging
from datetime import UTC, date, datetime
from decimal import Decimal

from helbflow_db import AiAdvice, Transaction
from helbflow_db.enums import AdviceType
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..schemas.advice import BudgetAdviceItem, SpendingAnalysis
from ..schemas.disbursement import DisbursementCalculation, DisbursementCalculationRequest
from .budget import get_budget_status, list_budgets_for_month
from .budget_variance import BudgetState, BudgetStatus
from .oracle import AdvisoryOracle, OracleError
from .transaction import list_transactions, list_transactions_for_month

logger = logging.getLogger(__name__)

KNOWN_CATEGORIES = frozenset(
    {
        "food",
        "transport",
        "entertainment",
        "accommodation",
        "books",
        "supplies",
        "utilities",
        "healthcare",
        "clothing",
        "other",
    }
)
FALLBACK_CATEGORY = "other"

FALLBACK_TIP = "Consider tracking your daily expenses to identify areas for savings."


def fallback_disbursement() -> DisbursementCalculation:
    """Average-cost breakdown used when the oracle is unavailable."""
    return DisbursementCalculation(
        tuition=Decimal("85000"),
        upkeep=Decimal("12500"),
        books=Decimal("8000"),
        supplies=Decimal("5000"),
        total=Decimal("110500"),
        reasoning="Default calculation based on average costs",
        is_fallback=True,
    )


async def suggest_disbursement(
    oracle: AdvisoryOracle, profile: DisbursementCalculationRequest
) -> DisbursementCalculation:
    """Return the oracle's disbursement breakdown, or the static fallback."""
    try:
        return await oracle.suggest_disbursement(profile)
    except OracleError:
        logger.warning("Disbursement sizing fell back to defaults", exc_info=True)
        return fallback_disbursement()


async def categorize_transaction(
    oracle: AdvisoryOracle, description: str, merchant_name: str | None = None
) -> str:
    """Return a known category for a transaction, defaulting to ``other``."""
    try:
        category = await oracle.categorize_transaction(description, merchant_name)
    except OracleError:
        logger.warning(
            "Transaction categorization fell back to '%s'", FALLBACK_CATEGORY, exc_info=True
        )
        return FALLBACK_CATEGORY
    if category not in KNOWN_CATEGORIES:
        logger.info("Oracle suggested unknown category %r, using '%s'", category, FALLBACK_CATEGORY)
        return FALLBACK_CATEGORY
    return category


def alerts_from_statuses(statuses: list[BudgetStatus]) -> list[BudgetAdviceItem]:
    """Derive deterministic advice from budget variance results."""
    items: list[BudgetAdviceItem] = []
    for status in statuses:
        if status.state is BudgetState.OVER:
            items.append(
                BudgetAdviceItem(
                    category=status.category,
                    type="alert",
                    message=(
                        f"You have overspent your {status.category} budget by "
                        f"KSh {status.variance_amount}."
                    ),
                    suggested_action=f"Pause non-essential {status.category} spending this month.",
                )
            )
        elif status.state is BudgetState.NEAR_LIMIT:
            items.append(
                BudgetAdviceItem(
                    category=status.category,
                    type="warning",
                    message=(
                        f"You have used {status.percent_used}% of your {status.category} "
                        f"budget; KSh {status.remaining_amount} remains."
                    ),
                    suggested_action=f"Plan the rest of this month's {status.category} spending.",
                )
            )
    return items


def _transaction_payload(transactions: list[Transaction]) -> list[dict]:
    return [
        {
            "amount": str(t.amount),
            "category": t.category,
            "description": t.description,
            "merchant": t.merchant_name,
            "date": t.date.isoformat() if t.date else None,
        }
        for t in transactions
    ]


async def analyze_budget(
    session: AsyncSession,
    oracle: AdvisoryOracle,
    student_id: int,
    *,
    today: date | None = None,
) -> list[AiAdvice]:
    """Analyze the current month's budget and store the resulting advice.

    Falls back to variance-engine alerts when the oracle fails.
    """
    today = today or datetime.now(UTC).date()
    statuses = await get_budget_status(session, student_id, today.year, today.month)
    transactions = await list_transactions_for_month(session, student_id, today.year, today.month)
    budgets = await list_budgets_for_month(session, student_id, today.year, today.month)

    try:
        items = await oracle.analyze_budget(
            spending=_transaction_payload(transactions),
            budgets=[
                {
                    "category": b.category,
                    "budgetAmount": str(b.budget_amount),
                    "alertThreshold": str(b.alert_threshold),
                }
                for b in budgets
            ],
            monthly_income=settings.DEFAULT_MONTHLY_INCOME,
        )
    except OracleError:
        logger.warning(
            "Budget analysis for student %s fell back to alerts", student_id, exc_info=True
        )
        items = alerts_from_statuses(statuses)

    records = [
        AiAdvice(
            student_id=student_id,
            type=AdviceType(item.type),
            message=item.message,
            category=item.category,
            suggested_action=item.suggested_action or None,
            is_read=False,
        )
        for item in items
    ]
    session.add_all(records)
    await session.commit()
    for record in records:
        await session.refresh(record)
    return records


async def generate_tip(
    session: AsyncSession, oracle: AdvisoryOracle, student_id: int
) -> AiAdvice:
    """Generate and store a financial tip from the student's transactions."""
    transactions = await list_transactions(session, student_id)
    try:
        tip = await oracle.generate_tip(_transaction_payload(transactions))
    except OracleError:
        logger.warning("Financial tip for student %s fell back", student_id, exc_info=True)
        tip = FALLBACK_TIP

    advice = AiAdvice(
        student_id=student_id, type=AdviceType.FINANCIAL_TIP, message=tip, is_read=False
    )
    session.add(advice)
    await session.commit()
    await session.refresh(advice)
    return advice


async def analyze_spending_trends(
    session: AsyncSession, oracle: AdvisoryOracle, student_id: int
) -> SpendingAnalysis:
    """Return the oracle's spending-trend analysis, or an empty one."""
    transactions = await list_transactions(session, student_id)
    try:
        return await oracle.analyze_spending_trends(_transaction_payload(transactions))
    except OracleError:
        logger.warning("Spending trends for student %s fell back", student_id, exc_info=True)
        return SpendingAnalysis(is_fallback=True)


async def list_advice(session: AsyncSession, student_id: int) -> list[AiAdvice]:
    """Return a student's advice, newest first."""
    stmt = (
        select(AiAdvice)
        .where(AiAdvice.student_id == student_id)
        .order_by(AiAdvice.created_at.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def mark_advice_read(session: AsyncSession, advice_id: int) -> AiAdvice | None:
    """Mark an advice row as read. Returns None if it does not exist."""
    advice = await session.get(AiAdvice, advice_id)
    if advice is None:
        return None
    advice.is_read = True
    await session.commit()
    await session.refresh(advice)
    return advice
