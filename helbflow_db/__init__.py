# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, get_db, get_db_service
from .enums import (
    AdviceType,
    DisbursementStatus,
    DisbursementType,
    LoanStatus,
    PaymentMethod,
    Recipient,
    RepaymentStatus,
)
from .models import (
    AiAdvice,
    Budget,
    Disbursement,
    Loan,
    Repayment,
    Student,
    Transaction,
)

__all__ = [
    "Base",
    "DatabaseService",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "AdviceType",
    "DisbursementStatus",
    "DisbursementType",
    "LoanStatus",
    "PaymentMethod",
    "Recipient",
    "RepaymentStatus",
    # Models
    "AiAdvice",
    "Budget",
    "Disbursement",
    "Loan",
    "Repayment",
    "Student",
    "Transaction",
]
