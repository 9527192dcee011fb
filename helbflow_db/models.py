# This project was developed with assistance from AI tools.
"""
HelbFlow -- domain models

Student loan lifecycle models covering student profiles, disbursements,
spending transactions, monthly budgets, loans, repayments, and AI advice.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    AdviceType,
    DisbursementStatus,
    DisbursementType,
    LoanStatus,
    PaymentMethod,
    Recipient,
    RepaymentStatus,
)

# JSONB on PostgreSQL, plain JSON elsewhere
_JSON = JSON().with_variant(JSONB(), "postgresql")


class Student(Base):
    """Student profile with institution and bank details."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_number = Column(String(50), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    course = Column(String(255), nullable=False)
    institution = Column(String(255), nullable=False)
    region = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    semester = Column(Integer, nullable=False)
    account_number = Column(String(50), nullable=True)
    bank_name = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    disbursements = relationship(
        "Disbursement", back_populates="student", cascade="all, delete-orphan",
    )
    transactions = relationship(
        "Transaction", back_populates="student", cascade="all, delete-orphan",
    )
    budgets = relationship("Budget", back_populates="student", cascade="all, delete-orphan")
    loans = relationship("Loan", back_populates="student", cascade="all, delete-orphan")
    advice = relationship("AiAdvice", back_populates="student", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Student(id={self.id}, number='{self.student_number}')>"


class Disbursement(Base):
    """Funds released to a student or their institution."""

    __tablename__ = "disbursements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    type = Column(
        Enum(DisbursementType, name="disbursement_type", native_enum=False),
        nullable=False,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    status = Column(
        Enum(DisbursementStatus, name="disbursement_status", native_enum=False),
        nullable=False,
        default=DisbursementStatus.PENDING,
    )
    recipient = Column(Enum(Recipient, name="recipient", native_enum=False), nullable=True)
    ai_recommendation = Column(_JSON, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="disbursements")

    def __repr__(self):
        return f"<Disbursement(id={self.id}, type='{self.type}', status='{self.status}')>"


class Transaction(Base):
    """A spending transaction recorded against a student."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    merchant_name = Column(String(255), nullable=True)
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    is_auto_categorized = Column(Boolean, nullable=False, default=False)

    student = relationship("Student", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction(id={self.id}, category='{self.category}', amount={self.amount})>"


class Budget(Base):
    """Monthly spending ceiling for one category."""

    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint(
            "student_id", "category", "year", "month", name="uq_budget_student_category_period",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    category = Column(String(100), nullable=False)
    budget_amount = Column(Numeric(12, 2), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    alert_threshold = Column(Numeric(5, 2), nullable=False, default=80)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="budgets")

    def __repr__(self):
        return f"<Budget(id={self.id}, category='{self.category}', {self.year}-{self.month})>"


class Loan(Base):
    """Student loan with repayment terms."""

    __tablename__ = "loans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    total_amount = Column(Numeric(12, 2), nullable=False)
    outstanding_amount = Column(Numeric(12, 2), nullable=False)
    interest_rate = Column(Numeric(5, 2), nullable=False)
    status = Column(
        Enum(LoanStatus, name="loan_status", native_enum=False),
        nullable=False,
        default=LoanStatus.ACTIVE,
    )
    graduation_date = Column(DateTime(timezone=True), nullable=True)
    repayment_start_date = Column(DateTime(timezone=True), nullable=True)
    monthly_repayment = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="loans")
    repayments = relationship(
        "Repayment", back_populates="loan", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Loan(id={self.id}, outstanding={self.outstanding_amount})>"


class Repayment(Base):
    """A realized or scheduled repayment against a loan."""

    __tablename__ = "repayments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    loan_id = Column(
        Integer, ForeignKey("loans.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method", native_enum=False),
        nullable=False,
    )
    status = Column(
        Enum(RepaymentStatus, name="repayment_status", native_enum=False),
        nullable=False,
        default=RepaymentStatus.PENDING,
    )
    due_date = Column(DateTime(timezone=True), nullable=False)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    loan = relationship("Loan", back_populates="repayments")

    def __repr__(self):
        return f"<Repayment(id={self.id}, loan_id={self.loan_id}, status='{self.status}')>"


class AiAdvice(Base):
    """Advice message produced by the advisory oracle (or its fallback)."""

    __tablename__ = "ai_advice"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(
        Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    type = Column(Enum(AdviceType, name="advice_type", native_enum=False), nullable=False)
    message = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)
    suggested_action = Column(Text, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    student = relationship("Student", back_populates="advice")

    def __repr__(self):
        return f"<AiAdvice(id={self.id}, type='{self.type}', read={self.is_read})>"
