# This project was developed with assistance from AI tools.
"""Loan repayment schedule generation.

Pure math, no I/O. Shared by the loan schedule route and the schedule
preview endpoint.

Money is ``Decimal`` throughout and quantized to cents with banker's rounding
(ROUND_HALF_EVEN). Interest is rounded once per month; the principal portion
is the exact cent difference between the payment and that interest, so the
principal portions of a completed schedule sum to the original principal.
"""

import calendar
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation

logger = logging.getLogger(__name__)

MAX_SCHEDULE_MONTHS = 120

CENTS = Decimal("0.01")
_ZERO = Decimal("0")

# Fixed arithmetic context so results never depend on the caller's decimal context
_CTX = Context(prec=28, rounding=ROUND_HALF_EVEN)


class InvalidLoanTerms(ValueError):
    """Raised when loan terms are malformed or out of range."""

    pass


class NonAmortizingPayment(ValueError):
    """Raised when the monthly payment does not cover the accruing interest."""

    def __init__(self, monthly_payment: Decimal, interest: Decimal, month: int = 1):
        self.monthly_payment = monthly_payment
        self.interest = interest
        self.month = month
        super().__init__(
            f"Payment too low to amortize: monthly payment {monthly_payment} does not "
            f"exceed month {month} interest of {interest}."
        )


class ScheduleIncomplete(UserWarning):
    """Schedule reached the month cap with a balance still outstanding.

    Non-fatal: the partial schedule is still returned to the caller.
    """

    def __init__(self, remaining_balance: Decimal, months: int = MAX_SCHEDULE_MONTHS):
        self.remaining_balance = remaining_balance
        self.months = months
        super().__init__(
            f"Schedule truncated at {months} months with {remaining_balance} outstanding."
        )


def to_money(value) -> Decimal:
    """Quantize a monetary value to cents using banker's rounding."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_EVEN, context=_CTX)


def add_months(start: date, months: int) -> date:
    """Return ``start`` shifted by whole calendar months, clamping the day."""
    index = start.month - 1 + months
    year = start.year + index // 12
    month = index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _as_decimal(name: str, value) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidLoanTerms(f"{name} must be a decimal amount, got {value!r}")
    try:
        # str() first so floats arrive as their shortest repr, not binary noise
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidLoanTerms(f"{name} must be a decimal amount, got {value!r}") from exc
    if not result.is_finite():
        raise InvalidLoanTerms(f"{name} must be finite, got {value!r}")
    return result


@dataclass(frozen=True, slots=True)
class LoanTerms:
    """Inputs for one schedule computation."""

    principal: Decimal
    annual_interest_rate_percent: Decimal
    monthly_payment: Decimal
    repayment_start_date: date

    @classmethod
    def create(
        cls,
        principal,
        annual_interest_rate_percent,
        monthly_payment,
        repayment_start_date: date,
    ) -> "LoanTerms":
        """Validate and normalize raw values into ``LoanTerms``.

        Raises:
            InvalidLoanTerms: when any value is malformed or out of range.
        """
        principal = to_money(_as_decimal("principal", principal))
        rate = _as_decimal("annual_interest_rate_percent", annual_interest_rate_percent)
        payment = to_money(_as_decimal("monthly_payment", monthly_payment))

        if principal <= 0:
            raise InvalidLoanTerms("principal must be greater than zero")
        if payment <= 0:
            raise InvalidLoanTerms("monthly_payment must be greater than zero")
        if rate < 0:
            raise InvalidLoanTerms("annual_interest_rate_percent must not be negative")
        if not isinstance(repayment_start_date, date):
            raise InvalidLoanTerms("repayment_start_date must be a date")

        return cls(
            principal=principal,
            annual_interest_rate_percent=rate,
            monthly_payment=payment,
            repayment_start_date=repayment_start_date,
        )

    @property
    def monthly_rate(self) -> Decimal:
        return _CTX.divide(self.annual_interest_rate_percent, Decimal(1200))

    def first_month_interest(self) -> Decimal:
        return _interest(self.principal, self.monthly_rate)


@dataclass(frozen=True, slots=True)
class ScheduleEntry:
    """One month of a repayment schedule."""

    month: int
    due_date: date
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance: Decimal


@dataclass(frozen=True)
class ScheduleResult:
    """A materialized schedule plus the truncation warning, if any."""

    terms: LoanTerms
    entries: tuple[ScheduleEntry, ...]
    warning: ScheduleIncomplete | None = None

    @property
    def incomplete(self) -> bool:
        return self.warning is not None

    @property
    def months(self) -> int:
        return len(self.entries)

    @property
    def total_interest(self) -> Decimal:
        return sum((e.interest_portion for e in self.entries), _ZERO)

    @property
    def total_principal(self) -> Decimal:
        return sum((e.principal_portion for e in self.entries), _ZERO)

    @property
    def total_paid(self) -> Decimal:
        return self.total_principal + self.total_interest

    @property
    def payoff_date(self) -> date | None:
        if self.incomplete or not self.entries:
            return None
        return self.entries[-1].due_date


def _interest(balance: Decimal, monthly_rate: Decimal) -> Decimal:
    return _CTX.multiply(balance, monthly_rate).quantize(CENTS, rounding=ROUND_HALF_EVEN)


def _amortize(terms: LoanTerms, max_months: int) -> Iterator[ScheduleEntry]:
    balance = terms.principal
    monthly_rate = terms.monthly_rate

    for month in range(1, max_months + 1):
        interest = _interest(balance, monthly_rate)
        principal_portion = min(terms.monthly_payment - interest, balance)
        if principal_portion <= 0:
            raise NonAmortizingPayment(terms.monthly_payment, interest, month)

        balance = max(balance - principal_portion, _ZERO)
        yield ScheduleEntry(
            month=month,
            due_date=add_months(terms.repayment_start_date, month - 1),
            payment_amount=terms.monthly_payment,
            principal_portion=principal_portion,
            interest_portion=interest,
            remaining_balance=balance,
        )
        if balance == 0:
            return


class RepaymentSchedule:
    """Lazy, restartable repayment schedule.

    Iterating re-runs the computation from the terms, so the same object can
    be streamed more than once. Non-amortizing terms are rejected up front,
    before any entry is produced.
    """

    def __init__(self, terms: LoanTerms, *, max_months: int = MAX_SCHEDULE_MONTHS):
        if max_months < 1:
            raise InvalidLoanTerms("max_months must be at least 1")
        first_interest = terms.first_month_interest()
        if terms.monthly_payment <= first_interest:
            raise NonAmortizingPayment(terms.monthly_payment, first_interest)
        self.terms = terms
        self.max_months = max_months

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return _amortize(self.terms, self.max_months)

    def materialize(self) -> ScheduleResult:
        entries = tuple(self)
        warning = None
        if entries and entries[-1].remaining_balance > 0:
            warning = ScheduleIncomplete(entries[-1].remaining_balance, len(entries))
        return ScheduleResult(terms=self.terms, entries=entries, warning=warning)


def generate_schedule(terms: LoanTerms) -> ScheduleResult:
    """Build the full month-by-month schedule for ``terms``.

    Raises:
        NonAmortizingPayment: payment does not exceed first-month interest.

    A schedule that hits the month cap is returned with ``incomplete`` set
    and a ``ScheduleIncomplete`` warning attached.
    """
    result = RepaymentSchedule(terms).materialize()
    if result.incomplete:
        logger.warning(
            "Repayment schedule truncated at %d months (remaining balance %s)",
            result.months,
            result.warning.remaining_balance,
        )
    return result
