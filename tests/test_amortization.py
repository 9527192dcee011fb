# This project was developed with assistance from AI tools.
"""Tests for repayment schedule generation."""

from datetime import date
from decimal import Decimal

import pytest

from helbflow.services.amortization import (
    MAX_SCHEDULE_MONTHS,
    InvalidLoanTerms,
    LoanTerms,
    NonAmortizingPayment,
    RepaymentSchedule,
    ScheduleIncomplete,
    add_months,
    generate_schedule,
)


def _terms(principal="100000", rate="12", payment="3000", start=date(2024, 1, 1)):
    return LoanTerms.create(principal, rate, payment, start)


# ---------------------------------------------------------------------------
# Terms validation
# ---------------------------------------------------------------------------


class TestLoanTerms:
    def test_quantizes_money_to_cents(self):
        terms = _terms(principal="1000.005", payment="250.015")
        assert terms.principal == Decimal("1000.00")
        assert terms.monthly_payment == Decimal("250.02")

    def test_float_input_uses_shortest_repr(self):
        terms = _terms(principal=1000.1)
        assert terms.principal == Decimal("1000.10")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"principal": "0"},
            {"principal": "-5"},
            {"payment": "0"},
            {"rate": "-1"},
            {"principal": "abc"},
            {"principal": "NaN"},
            {"principal": True},
            {"payment": None},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(InvalidLoanTerms):
            _terms(**kwargs)

    def test_monthly_rate(self):
        assert _terms(rate="12").monthly_rate == Decimal("0.01")


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_first_month_split(self):
        """100000 at 12% paying 3000: month 1 is 1000 interest, 2000 principal."""
        first = generate_schedule(_terms()).entries[0]
        assert first.month == 1
        assert first.due_date == date(2024, 1, 1)
        assert first.interest_portion == Decimal("1000.00")
        assert first.principal_portion == Decimal("2000.00")
        assert first.remaining_balance == Decimal("98000.00")
        assert first.payment_amount == Decimal("3000.00")

    def test_payment_below_interest_is_rejected(self):
        """5000 at 24% accrues 100 a month, so a 90 payment never amortizes."""
        with pytest.raises(NonAmortizingPayment) as exc_info:
            generate_schedule(_terms(principal="5000", rate="24", payment="90"))
        assert exc_info.value.interest == Decimal("100.00")
        assert "Payment too low to amortize" in str(exc_info.value)

    def test_payment_equal_to_interest_is_rejected(self):
        with pytest.raises(NonAmortizingPayment):
            generate_schedule(_terms(principal="5000", rate="24", payment="100"))

    def test_rejected_before_any_entry(self):
        with pytest.raises(NonAmortizingPayment):
            RepaymentSchedule(_terms(principal="5000", rate="24", payment="90"))


# ---------------------------------------------------------------------------
# Schedule properties
# ---------------------------------------------------------------------------


class TestScheduleProperties:
    def test_completes_with_zero_balance(self):
        result = generate_schedule(_terms())
        assert not result.incomplete
        assert result.warning is None
        assert result.entries[-1].remaining_balance == Decimal("0")
        assert result.months < MAX_SCHEDULE_MONTHS

    @pytest.mark.parametrize(
        "principal,rate,payment",
        [
            ("100000", "12", "3000"),
            ("250000", "4.35", "3500"),
            ("47350.75", "7.9", "1234.56"),
            ("8000", "18.5", "275.10"),
            ("1000", "0", "300"),
        ],
    )
    def test_principal_portions_sum_to_principal(self, principal, rate, payment):
        result = generate_schedule(_terms(principal=principal, rate=rate, payment=payment))
        assert not result.incomplete
        assert result.total_principal == result.terms.principal
        assert result.total_paid == result.total_principal + result.total_interest

        balance = result.terms.principal
        for entry in result.entries:
            balance -= entry.principal_portion
            assert entry.remaining_balance == balance
        assert balance == Decimal("0")

    def test_balance_non_increasing_and_non_negative(self):
        balances = [e.remaining_balance for e in generate_schedule(_terms()).entries]
        assert all(b >= 0 for b in balances)
        assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))

    def test_split_matches_payment_except_final_period(self):
        entries = generate_schedule(_terms()).entries
        for entry in entries[:-1]:
            assert entry.principal_portion + entry.interest_portion == entry.payment_amount
        last = entries[-1]
        assert last.principal_portion + last.interest_portion <= last.payment_amount

    def test_deterministic(self):
        assert generate_schedule(_terms()).entries == generate_schedule(_terms()).entries

    def test_lazy_schedule_is_restartable(self):
        schedule = RepaymentSchedule(_terms())
        assert list(schedule) == list(schedule)

    def test_zero_interest_schedule(self):
        result = generate_schedule(
            _terms(principal="1000", rate="0", payment="300", start=date(2024, 1, 31))
        )
        assert [e.principal_portion for e in result.entries] == [
            Decimal("300.00"),
            Decimal("300.00"),
            Decimal("300.00"),
            Decimal("100.00"),
        ]
        assert [e.due_date for e in result.entries] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]
        assert result.entries[-1].payment_amount == Decimal("300.00")
        assert result.total_interest == Decimal("0")
        assert result.payoff_date == date(2024, 4, 30)

    def test_interest_uses_bankers_rounding(self):
        """100.50 at 1%/month is 1.005 -> 1.00; then 51.50 -> 0.515 -> 0.52."""
        entries = generate_schedule(_terms(principal="100.50", rate="12", payment="50")).entries
        assert entries[0].interest_portion == Decimal("1.00")
        assert entries[0].remaining_balance == Decimal("51.50")
        assert entries[1].interest_portion == Decimal("0.52")


class TestIncompleteSchedule:
    def test_truncates_at_month_cap(self):
        result = generate_schedule(_terms(principal="100000", rate="12", payment="1001"))
        assert result.incomplete
        assert result.months == MAX_SCHEDULE_MONTHS
        assert result.entries[-1].month == MAX_SCHEDULE_MONTHS
        assert isinstance(result.warning, ScheduleIncomplete)
        assert result.warning.remaining_balance == result.entries[-1].remaining_balance
        assert result.warning.remaining_balance > 0
        assert result.payoff_date is None

    def test_truncation_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="helbflow.services.amortization"):
            generate_schedule(_terms(principal="100000", rate="12", payment="1001"))
        assert "truncated at 120 months" in caplog.text

    def test_custom_cap(self):
        result = RepaymentSchedule(_terms(), max_months=3).materialize()
        assert result.months == 3
        assert result.incomplete


class TestAddMonths:
    def test_clamps_day_to_month_end(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_rolls_over_year(self):
        assert add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
