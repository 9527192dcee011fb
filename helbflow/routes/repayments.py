# This project was developed with assistance from AI tools.
"""Repayment routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.repayment import (
    RepaymentCreate,
    RepaymentResponse,
    RepaymentStatusUpdate,
    UpcomingRepayment,
)
from ..services import repayment as repayment_service
from ..services.disbursement import InvalidStatusTransition

router = APIRouter()


@router.post("", response_model=RepaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_repayment(
    body: RepaymentCreate,
    session: AsyncSession = Depends(get_db),
) -> RepaymentResponse:
    repayment = await repayment_service.create_repayment(session, body)
    return RepaymentResponse.model_validate(repayment)


@router.get("/upcoming/all", response_model=list[UpcomingRepayment])
async def upcoming_repayments(
    session: AsyncSession = Depends(get_db),
) -> list[UpcomingRepayment]:
    """Pending repayments due from now on, soonest first."""
    repayments = await repayment_service.upcoming_repayments(session)
    return [
        UpcomingRepayment.model_validate(
            {
                **RepaymentResponse.model_validate(r).model_dump(),
                "student_id": r.loan.student_id,
                "student_name": f"{r.loan.student.first_name} {r.loan.student.last_name}",
            }
        )
        for r in repayments
    ]


@router.get("/{loan_id}", response_model=list[RepaymentResponse])
async def list_repayments(
    loan_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[RepaymentResponse]:
    repayments = await repayment_service.list_repayments(session, loan_id)
    return [RepaymentResponse.model_validate(r) for r in repayments]


@router.patch("/{repayment_id}/status", response_model=RepaymentResponse)
async def update_repayment_status(
    repayment_id: int,
    body: RepaymentStatusUpdate,
    session: AsyncSession = Depends(get_db),
) -> RepaymentResponse:
    try:
        repayment = await repayment_service.update_repayment_status(
            session, repayment_id, body.status
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if repayment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Repayment not found")
    return RepaymentResponse.model_validate(repayment)
