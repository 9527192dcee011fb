# This project was developed with assistance from AI tools.
"""Budget variance evaluation.

Pure math, no I/O. Computes per-category spend status for one budget period
(a student's month) from budget ceilings and the transactions recorded
against them.

Transactions are always re-filtered by the period's own category, so a
caller may pass either a pre-filtered list or the student's whole month.
"""

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation

DEFAULT_ALERT_THRESHOLD = Decimal("80")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_PERCENT_PLACES = Decimal("0.1")

# Fixed context so results never depend on the caller's decimal settings
_CTX = Context(prec=28, rounding=ROUND_HALF_EVEN)


class DuplicateCategory(ValueError):
    """Raised when two periods normalize to the same category."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Budget category '{category}' appears more than once")


class InvalidBudgetPeriod(ValueError):
    """Raised when a budget amount or alert threshold is out of range."""

    pass


class BudgetState(str, enum.Enum):
    UNDER = "under"
    NEAR_LIMIT = "near-limit"
    OVER = "over"


def normalize_category(category: str) -> str:
    """Case-normalize a category label for matching."""
    return (category or "").strip().lower()


@dataclass(frozen=True, slots=True)
class TransactionLine:
    """Minimal transaction view: amount and category label."""

    amount: Decimal
    category: str


@dataclass(frozen=True, slots=True)
class BudgetPeriod:
    """A category budget and the transactions recorded in its period."""

    category: str
    budget_amount: Decimal
    alert_threshold_percent: Decimal = DEFAULT_ALERT_THRESHOLD
    transactions: Sequence[TransactionLine] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    """Spend status for one category.

    ``percent_used`` is ``None`` when the budget is zero; no division is
    attempted in that case.
    """

    category: str
    budget_amount: Decimal
    spent_amount: Decimal
    remaining_amount: Decimal
    percent_used: Decimal | None
    state: BudgetState
    variance_amount: Decimal
    alert_threshold_percent: Decimal

    @property
    def percent_defined(self) -> bool:
        return self.percent_used is not None


def _as_decimal(name: str, value) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidBudgetPeriod(f"{name} must be a decimal amount, got {value!r}")
    try:
        # str() first so 0.1 stays 0.1 instead of its binary expansion
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidBudgetPeriod(f"{name} must be a decimal amount, got {value!r}") from exc
    if not result.is_finite():
        raise InvalidBudgetPeriod(f"{name} must be finite, got {value!r}")
    return result


def _classify(spent: Decimal, budget: Decimal, threshold: Decimal) -> BudgetState:
    if spent > budget:
        return BudgetState.OVER
    if budget == 0:
        return BudgetState.UNDER
    # spent/budget*100 >= threshold, cross-multiplied so rounding never moves the boundary
    if _CTX.multiply(spent, _HUNDRED) >= _CTX.multiply(threshold, budget):
        return BudgetState.NEAR_LIMIT
    return BudgetState.UNDER


def evaluate_period(period: BudgetPeriod) -> BudgetStatus:
    """Compute the spend status for a single period.

    Amounts may be Decimal, int, str or float; floats are read through their
    shortest repr.

    Raises:
        InvalidBudgetPeriod: negative budget, threshold outside 0-100, or an
            amount that is not a finite number.
    """
    category = normalize_category(period.category)
    budget = _as_decimal("budget_amount", period.budget_amount)
    threshold = _as_decimal("alert_threshold_percent", period.alert_threshold_percent)

    if budget < 0:
        raise InvalidBudgetPeriod(f"Budget for '{category}' must not be negative")
    if not _ZERO <= threshold <= _HUNDRED:
        raise InvalidBudgetPeriod(
            f"Alert threshold for '{category}' must be between 0 and 100, got {threshold}"
        )

    spent = _ZERO
    for txn in period.transactions:
        if normalize_category(txn.category) == category:
            spent = _CTX.add(spent, _as_decimal("amount", txn.amount))

    percent_used = None
    if budget != 0:
        percent_used = _CTX.multiply(_CTX.divide(spent, budget), _HUNDRED).quantize(
            _PERCENT_PLACES, rounding=ROUND_HALF_EVEN, context=_CTX
        )

    return BudgetStatus(
        category=category,
        budget_amount=budget,
        spent_amount=spent,
        remaining_amount=max(_CTX.subtract(budget, spent), _ZERO),
        percent_used=percent_used,
        state=_classify(spent, budget, threshold),
        variance_amount=_CTX.subtract(spent, budget),
        alert_threshold_percent=threshold,
    )


def evaluate_map(periods: Iterable[BudgetPeriod]) -> dict[str, BudgetStatus]:
    """Evaluate every period, keyed by normalized category.

    Raises:
        DuplicateCategory: two periods share a normalized category.
    """
    statuses: dict[str, BudgetStatus] = {}
    for period in periods:
        key = normalize_category(period.category)
        if key in statuses:
            raise DuplicateCategory(key)
        statuses[key] = evaluate_period(period)
    return statuses


def evaluate(periods: Iterable[BudgetPeriod]) -> list[BudgetStatus]:
    """Evaluate every period; results are ordered by category."""
    statuses = evaluate_map(periods)
    return [statuses[key] for key in sorted(statuses)]
