# This project was developed with assistance from AI tools.
"""Dashboard statistics route."""

from fastapi import APIRouter, Depends
from helbflow_db import get_db
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.dashboard import DashboardStats
from ..services.dashboard import get_dashboard_stats

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def stats(session: AsyncSession = Depends(get_db)) -> DashboardStats:
    return await get_dashboard_stats(session)
