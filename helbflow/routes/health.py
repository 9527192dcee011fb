# This project was developed with assistance from AI tools.
"""Health check route."""

from fastapi import APIRouter, Depends
from helbflow_db import DatabaseService, get_db_service

from .. import __version__
from ..schemas.health import HealthItem

router = APIRouter()


@router.get("/", response_model=list[HealthItem])
async def health(db_service: DatabaseService = Depends(get_db_service)) -> list[HealthItem]:
    """Report API and database status."""
    db = await db_service.health_check()
    return [
        HealthItem(
            name="API", status="healthy", message="HelbFlow API is running", version=__version__
        ),
        HealthItem(name="Database", status=db["status"], message=db["message"]),
    ]
