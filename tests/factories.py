# This project was developed with assistance from AI tools.
"""Shared test factory functions.

ORM objects are real (transient) model instances so response schemas can
validate them with ``from_attributes``. Column defaults only apply on flush,
so every factory sets them explicitly.
"""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock

from helbflow_db import AiAdvice, Budget, Disbursement, Loan, Repayment, Student, Transaction
from helbflow_db.enums import (
    AdviceType,
    DisbursementStatus,
    DisbursementType,
    LoanStatus,
    PaymentMethod,
    RepaymentStatus,
)

from helbflow.schemas.advice import BudgetAdviceItem, SpendingAnalysis
from helbflow.schemas.disbursement import DisbursementCalculation
from helbflow.services.oracle import OracleError

CREATED = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def make_student(id=1, student_number="HELB/2024/001", first_name="Amani", last_name="Wanjiru"):
    return Student(
        id=id,
        student_number=student_number,
        first_name=first_name,
        last_name=last_name,
        email="amani@students.example.ac.ke",
        course="Computer Science",
        institution="University of Nairobi",
        region="Nairobi",
        year=2,
        semester=1,
        account_number=None,
        bank_name=None,
        created_at=CREATED,
    )


def make_disbursement(
    id=10,
    student_id=1,
    status=DisbursementStatus.PENDING,
    amount="25000.00",
    student=None,
):
    d = Disbursement(
        id=id,
        student_id=student_id,
        type=DisbursementType.TUITION,
        amount=Decimal(amount),
        status=status,
        recipient=None,
        ai_recommendation=None,
        processed_at=None,
        created_at=CREATED,
    )
    if student is not None:
        d.student = student
    return d


def make_transaction(id=20, student_id=1, amount="450.00", category="food", description="Lunch"):
    return Transaction(
        id=id,
        student_id=student_id,
        amount=Decimal(amount),
        category=category,
        description=description,
        merchant_name=None,
        date=CREATED,
        is_auto_categorized=False,
    )


def make_budget(id=30, student_id=1, category="food", budget_amount="5000.00", threshold="80.00"):
    return Budget(
        id=id,
        student_id=student_id,
        category=category,
        budget_amount=Decimal(budget_amount),
        month=3,
        year=2026,
        alert_threshold=Decimal(threshold),
        created_at=CREATED,
    )


def make_loan(
    id=40,
    student_id=1,
    total_amount="100000.00",
    outstanding_amount="100000.00",
    interest_rate="12.00",
    monthly_repayment="3000.00",
    repayment_start_date=datetime(2024, 1, 1, tzinfo=UTC),
    status=LoanStatus.ACTIVE,
):
    return Loan(
        id=id,
        student_id=student_id,
        total_amount=Decimal(total_amount),
        outstanding_amount=Decimal(outstanding_amount),
        interest_rate=Decimal(interest_rate),
        status=status,
        graduation_date=None,
        repayment_start_date=repayment_start_date,
        monthly_repayment=Decimal(monthly_repayment) if monthly_repayment else None,
        created_at=CREATED,
    )


def make_repayment(id=50, loan_id=40, amount="3000.00", status=RepaymentStatus.PENDING, loan=None):
    r = Repayment(
        id=id,
        loan_id=loan_id,
        amount=Decimal(amount),
        payment_method=PaymentMethod.STANDING_ORDER,
        status=status,
        due_date=datetime(2030, 1, 1, tzinfo=UTC),
        paid_date=None,
        created_at=CREATED,
    )
    if loan is not None:
        r.loan = loan
    return r


def make_advice(id=60, student_id=1, is_read=False):
    return AiAdvice(
        id=id,
        student_id=student_id,
        type=AdviceType.TIP,
        message="Buy second-hand textbooks.",
        category="books",
        suggested_action=None,
        is_read=is_read,
        created_at=CREATED,
    )


class FakeOracle:
    """In-memory advisory oracle.

    With ``fail=True`` every call raises ``OracleError``. ``calls`` records the
    method names invoked.
    """

    def __init__(self, *, fail=False, category="food", tip="Cook at home twice a week."):
        self.fail = fail
        self.category = category
        self.tip = tip
        self.advice = [
            BudgetAdviceItem(
                category="food",
                message="Food spending is trending high.",
                type="warning",
                suggested_action="Plan weekly meals.",
            )
        ]
        self.calls: list[str] = []

    def _record(self, name):
        self.calls.append(name)
        if self.fail:
            raise OracleError(f"{name} unavailable")

    async def suggest_disbursement(self, profile):
        self._record("suggest_disbursement")
        return DisbursementCalculation(
            tuition=Decimal("90000"),
            upkeep=Decimal("15000"),
            books=Decimal("7000"),
            supplies=Decimal("3000"),
            total=Decimal("115000"),
            reasoning=f"{profile.course} at {profile.institution}",
        )

    async def categorize_transaction(self, description, merchant_name=None):
        self._record("categorize_transaction")
        return self.category

    async def analyze_budget(self, *, spending, budgets, monthly_income):
        self._record("analyze_budget")
        return self.advice

    async def generate_tip(self, spending):
        self._record("generate_tip")
        return self.tip

    async def analyze_spending_trends(self, transactions):
        self._record("analyze_spending_trends")
        return SpendingAnalysis(
            overspending_categories=["entertainment"],
            recommendations=["Set a weekly entertainment cap."],
            predicted_spending=Decimal("14000"),
        )


def mock_result(*, scalars=None, scalar=None, one_or_none=None):
    """Build a mock ``session.execute`` result."""
    result = MagicMock()
    if scalars is not None:
        result.scalars.return_value.all.return_value = scalars
        result.unique.return_value.scalars.return_value.all.return_value = scalars
    result.scalar.return_value = scalar
    result.scalar_one_or_none.return_value = one_or_none
    return result
