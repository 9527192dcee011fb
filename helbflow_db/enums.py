# This project was developed with assistance from AI tools.
"""
Domain enums for student loan disbursement and repayment.

Shared domain types used by both SQLAlchemy models (helbflow_db package)
and Pydantic schemas (helbflow package).
"""

import enum


class DisbursementType(str, enum.Enum):
    TUITION = "tuition"
    UPKEEP = "upkeep"
    BOOKS = "books"
    SUPPLIES = "supplies"
    ACCOMMODATION = "accommodation"


class DisbursementStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def valid_transitions(cls) -> dict["DisbursementStatus", frozenset["DisbursementStatus"]]:
        """Allowed status transitions for a disbursement."""
        return {
            cls.PENDING: frozenset({cls.PROCESSING, cls.COMPLETED, cls.FAILED}),
            cls.PROCESSING: frozenset({cls.COMPLETED, cls.FAILED}),
            cls.COMPLETED: frozenset(),
            cls.FAILED: frozenset({cls.PENDING}),
        }


class Recipient(str, enum.Enum):
    UNIVERSITY = "university"
    STUDENT = "student"


class LoanStatus(str, enum.Enum):
    ACTIVE = "active"
    GRADUATED = "graduated"
    DEFAULTED = "defaulted"
    PAID = "paid"


class PaymentMethod(str, enum.Enum):
    STANDING_ORDER = "standing_order"
    PAYROLL_DEDUCTION = "payroll_deduction"
    MANUAL = "manual"


class RepaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def valid_transitions(cls) -> dict["RepaymentStatus", frozenset["RepaymentStatus"]]:
        """Allowed status transitions for a repayment.

        Completed is terminal: the amount has already been taken off the loan.
        """
        return {
            cls.PENDING: frozenset({cls.COMPLETED, cls.FAILED}),
            cls.COMPLETED: frozenset(),
            cls.FAILED: frozenset({cls.PENDING, cls.COMPLETED}),
        }


class AdviceType(str, enum.Enum):
    BUDGETING = "budgeting"
    OVERSPENDING = "overspending"
    SAVINGS = "savings"
    FINANCIAL_TIP = "financial_tip"
    WARNING = "warning"
    TIP = "tip"
    ALERT = "alert"
