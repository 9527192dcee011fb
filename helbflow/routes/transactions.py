# This project was developed with assistance from AI tools.
"""Spending transaction routes."""

from fastapi import APIRouter, Depends, Path, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.transaction import TransactionCreate, TransactionResponse
from ..services import transaction as transaction_service
from ..services.advice import categorize_transaction
from ..services.oracle import AdvisoryOracle, get_advisory_oracle

router = APIRouter()


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    body: TransactionCreate,
    session: AsyncSession = Depends(get_db),
    oracle: AdvisoryOracle = Depends(get_advisory_oracle),
) -> TransactionResponse:
    """Record a transaction, auto-categorizing it when no category is given."""
    auto_category = None
    if not (body.category or "").strip():
        auto_category = await categorize_transaction(
            oracle, body.description or "", body.merchant_name
        )
    transaction = await transaction_service.create_transaction(
        session, body, auto_category=auto_category
    )
    return TransactionResponse.model_validate(transaction)


@router.get("/{student_id}", response_model=list[TransactionResponse])
async def list_transactions(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    transactions = await transaction_service.list_transactions(session, student_id)
    return [TransactionResponse.model_validate(t) for t in transactions]


@router.get("/{student_id}/month/{year}/{month}", response_model=list[TransactionResponse])
async def list_transactions_for_month(
    student_id: int,
    year: int = Path(ge=2000, le=2100),
    month: int = Path(ge=1, le=12),
    session: AsyncSession = Depends(get_db),
) -> list[TransactionResponse]:
    transactions = await transaction_service.list_transactions_for_month(
        session, student_id, year, month
    )
    return [TransactionResponse.model_validate(t) for t in transactions]
