# This project was developed with assistance from AI tools.
"""AI advice routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.advice import AdviceResponse, SpendingAnalysis
from ..services import advice as advice_service
from ..services.oracle import AdvisoryOracle, get_advisory_oracle

router = APIRouter()


@router.get("/{student_id}", response_model=list[AdviceResponse])
async def list_advice(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[AdviceResponse]:
    advice = await advice_service.list_advice(session, student_id)
    return [AdviceResponse.model_validate(a) for a in advice]


@router.patch("/{advice_id}/read", response_model=AdviceResponse)
async def mark_read(
    advice_id: int,
    session: AsyncSession = Depends(get_db),
) -> AdviceResponse:
    advice = await advice_service.mark_advice_read(session, advice_id)
    if advice is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Advice not found")
    return AdviceResponse.model_validate(advice)


@router.post("/generate-tip/{student_id}", response_model=AdviceResponse)
async def generate_tip(
    student_id: int,
    session: AsyncSession = Depends(get_db),
    oracle: AdvisoryOracle = Depends(get_advisory_oracle),
) -> AdviceResponse:
    """Generate and store a financial tip from the student's spending."""
    advice = await advice_service.generate_tip(session, oracle, student_id)
    return AdviceResponse.model_validate(advice)


@router.post("/spending-trends/{student_id}", response_model=SpendingAnalysis)
async def spending_trends(
    student_id: int,
    session: AsyncSession = Depends(get_db),
    oracle: AdvisoryOracle = Depends(get_advisory_oracle),
) -> SpendingAnalysis:
    return await advice_service.analyze_spending_trends(session, oracle, student_id)
