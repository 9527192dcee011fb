# This project was developed with assistance from AI tools.
"""Disbursement routes, including AI-assisted sizing."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.disbursement import (
    DisbursementCalculation,
    DisbursementCalculationRequest,
    DisbursementCreate,
    DisbursementResponse,
    DisbursementStatusUpdate,
    RecentDisbursement,
)
from ..services import disbursement as disbursement_service
from ..services.advice import suggest_disbursement
from ..services.disbursement import InvalidStatusTransition
from ..services.oracle import AdvisoryOracle, get_advisory_oracle

router = APIRouter()


@router.post("/calculate", response_model=DisbursementCalculation)
async def calculate_disbursement(
    body: DisbursementCalculationRequest,
    oracle: AdvisoryOracle = Depends(get_advisory_oracle),
) -> DisbursementCalculation:
    """Suggest a disbursement breakdown. Never fails on oracle errors."""
    return await suggest_disbursement(oracle, body)


@router.post("", response_model=DisbursementResponse, status_code=status.HTTP_201_CREATED)
async def create_disbursement(
    body: DisbursementCreate,
    session: AsyncSession = Depends(get_db),
) -> DisbursementResponse:
    disbursement = await disbursement_service.create_disbursement(session, body)
    return DisbursementResponse.model_validate(disbursement)


@router.get("", response_model=list[DisbursementResponse])
async def list_disbursements(
    student_id: int | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> list[DisbursementResponse]:
    disbursements = await disbursement_service.list_disbursements(session, student_id)
    return [DisbursementResponse.model_validate(d) for d in disbursements]


@router.get("/recent", response_model=list[RecentDisbursement])
async def recent_disbursements(
    limit: int = Query(default=10, ge=1, le=100),
    session: AsyncSession = Depends(get_db),
) -> list[RecentDisbursement]:
    """Latest disbursements with student names, for the dashboard feed."""
    disbursements = await disbursement_service.recent_disbursements(session, limit)
    return [
        RecentDisbursement.model_validate(
            {
                **DisbursementResponse.model_validate(d).model_dump(),
                "student_name": f"{d.student.first_name} {d.student.last_name}",
            }
        )
        for d in disbursements
    ]


@router.patch("/{disbursement_id}/status", response_model=DisbursementResponse)
async def update_disbursement_status(
    disbursement_id: int,
    body: DisbursementStatusUpdate,
    session: AsyncSession = Depends(get_db),
) -> DisbursementResponse:
    try:
        disbursement = await disbursement_service.update_disbursement_status(
            session, disbursement_id, body.status
        )
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if disbursement is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Disbursement not found"
        )
    return DisbursementResponse.model_validate(disbursement)
