# This project was developed with assistance from AI tools.
"""Loan routes and repayment schedules.

Schedule errors from the amortization engine (``InvalidLoanTerms``,
``NonAmortizingPayment``) propagate to the application-level handlers,
which map them to 422.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.loan import (
    LoanCreate,
    LoanResponse,
    LoanTermsRequest,
    RepaymentScheduleResponse,
    ScheduleEntryResponse,
)
from ..services import loan as loan_service
from ..services.amortization import LoanTerms, ScheduleResult, generate_schedule
from ..services.loan import LoanTermsUnavailable

router = APIRouter()


def _schedule_response(
    result: ScheduleResult, loan_id: int | None = None
) -> RepaymentScheduleResponse:
    return RepaymentScheduleResponse(
        loan_id=loan_id,
        schedule=[ScheduleEntryResponse.model_validate(e) for e in result.entries],
        months=result.months,
        incomplete=result.incomplete,
        remaining_balance_at_cap=result.warning.remaining_balance if result.warning else None,
        warning=str(result.warning) if result.warning else None,
        total_interest=result.total_interest,
        total_paid=result.total_paid,
        payoff_date=result.payoff_date,
    )


@router.post("", response_model=LoanResponse, status_code=status.HTTP_201_CREATED)
async def create_loan(
    body: LoanCreate,
    session: AsyncSession = Depends(get_db),
) -> LoanResponse:
    loan = await loan_service.create_loan(session, body)
    return LoanResponse.model_validate(loan)


@router.get("", response_model=list[LoanResponse])
async def list_active_loans(session: AsyncSession = Depends(get_db)) -> list[LoanResponse]:
    """All loans currently in active status."""
    loans = await loan_service.list_active_loans(session)
    return [LoanResponse.model_validate(loan) for loan in loans]


@router.post("/schedule/preview", response_model=RepaymentScheduleResponse)
async def preview_schedule(body: LoanTermsRequest) -> RepaymentScheduleResponse:
    """Amortize ad-hoc terms without storing anything."""
    terms = LoanTerms.create(
        principal=body.principal,
        annual_interest_rate_percent=body.annual_interest_rate_percent,
        monthly_payment=body.monthly_payment,
        repayment_start_date=body.repayment_start_date,
    )
    return _schedule_response(generate_schedule(terms))


@router.get("/{loan_id}/schedule", response_model=RepaymentScheduleResponse)
async def loan_schedule(
    loan_id: int,
    session: AsyncSession = Depends(get_db),
) -> RepaymentScheduleResponse:
    """Month-by-month schedule for a stored loan's outstanding balance."""
    loan = await loan_service.get_loan(session, loan_id)
    if loan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Loan not found")
    try:
        result = loan_service.build_schedule(loan)
    except LoanTermsUnavailable as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return _schedule_response(result, loan_id=loan.id)


@router.get("/{student_id}", response_model=LoanResponse)
async def get_student_loan(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> LoanResponse:
    """The student's most recent loan."""
    loan = await loan_service.get_loan_for_student(session, student_id)
    if loan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Loan not found")
    return LoanResponse.model_validate(loan)
