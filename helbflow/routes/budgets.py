# This project was developed with assistance from AI tools.
"""Budget routes: CRUD, computed status, and AI analysis."""

from fastapi import APIRouter, Depends, Path, status
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.advice import AdviceResponse
from ..schemas.budget import BudgetCreate, BudgetResponse, BudgetStatusItem
from ..services import budget as budget_service
from ..services.advice import analyze_budget
from ..services.oracle import AdvisoryOracle, get_advisory_oracle

router = APIRouter()


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    body: BudgetCreate,
    session: AsyncSession = Depends(get_db),
) -> BudgetResponse:
    """Create a monthly category budget. Duplicate categories return 409."""
    budget = await budget_service.create_budget(session, body)
    return BudgetResponse.model_validate(budget)


@router.get("/{student_id}", response_model=list[BudgetResponse])
async def list_budgets(
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[BudgetResponse]:
    budgets = await budget_service.list_budgets(session, student_id)
    return [BudgetResponse.model_validate(b) for b in budgets]


@router.get("/{student_id}/month/{year}/{month}", response_model=list[BudgetResponse])
async def list_budgets_for_month(
    student_id: int,
    year: int = Path(ge=2000, le=2100),
    month: int = Path(ge=1, le=12),
    session: AsyncSession = Depends(get_db),
) -> list[BudgetResponse]:
    budgets = await budget_service.list_budgets_for_month(session, student_id, year, month)
    return [BudgetResponse.model_validate(b) for b in budgets]


@router.get(
    "/{student_id}/month/{year}/{month}/status",
    response_model=list[BudgetStatusItem],
)
async def budget_status(
    student_id: int,
    year: int = Path(ge=2000, le=2100),
    month: int = Path(ge=1, le=12),
    session: AsyncSession = Depends(get_db),
) -> list[BudgetStatusItem]:
    """Spend status per category, ordered by category."""
    statuses = await budget_service.get_budget_status(session, student_id, year, month)
    return [
        BudgetStatusItem(
            category=s.category,
            budget_amount=s.budget_amount,
            spent_amount=s.spent_amount,
            remaining_amount=s.remaining_amount,
            percent_used=s.percent_used,
            state=s.state.value,
            variance_amount=s.variance_amount,
            alert_threshold_percent=s.alert_threshold_percent,
        )
        for s in statuses
    ]


@router.post("/analyze/{student_id}", response_model=list[AdviceResponse])
async def analyze(
    student_id: int,
    session: AsyncSession = Depends(get_db),
    oracle: AdvisoryOracle = Depends(get_advisory_oracle),
) -> list[AdviceResponse]:
    """Analyze this month's budget and store the advice produced."""
    records = await analyze_budget(session, oracle, student_id)
    return [AdviceResponse.model_validate(r) for r in records]
