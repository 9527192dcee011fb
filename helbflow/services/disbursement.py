# This project was developed with assistance from AI tools.
"""Disbursement recording and status workflow."""

import logging
from datetime import UTC, datetime

from helbflow_db import Disbursement
from helbflow_db.enums import DisbursementStatus
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..schemas.disbursement import DisbursementCreate

logger = logging.getLogger(__name__)


class InvalidStatusTransition(ValueError):
    """Raised when a disbursement or repayment status change is not allowed."""

    pass


async def create_disbursement(session: AsyncSession, data: DisbursementCreate) -> Disbursement:
    disbursement = Disbursement(**data.model_dump())
    if disbursement.status == DisbursementStatus.COMPLETED:
        disbursement.processed_at = datetime.now(UTC)
    session.add(disbursement)
    await session.commit()
    await session.refresh(disbursement)
    return disbursement


async def list_disbursements(
    session: AsyncSession, student_id: int | None = None
) -> list[Disbursement]:
    """Return disbursements, newest first, optionally for one student."""
    stmt = select(Disbursement).order_by(Disbursement.created_at.desc())
    if student_id is not None:
        stmt = stmt.where(Disbursement.student_id == student_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def recent_disbursements(session: AsyncSession, limit: int = 10) -> list[Disbursement]:
    """Return the latest disbursements with their students loaded."""
    stmt = (
        select(Disbursement)
        .options(joinedload(Disbursement.student))
        .order_by(Disbursement.created_at.desc())
        .limit(limit)
    )
    result = await session.execute(stmt)
    return list(result.unique().scalars().all())


async def update_disbursement_status(
    session: AsyncSession,
    disbursement_id: int,
    new_status: DisbursementStatus,
) -> Disbursement | None:
    """Move a disbursement to ``new_status``.

    Returns None if the disbursement does not exist.
    Raises InvalidStatusTransition if the move is not allowed.
    """
    disbursement = await session.get(Disbursement, disbursement_id)
    if disbursement is None:
        return None

    current = disbursement.status or DisbursementStatus.PENDING
    allowed = DisbursementStatus.valid_transitions().get(current, frozenset())
    if new_status not in allowed:
        raise InvalidStatusTransition(
            f"Cannot move disbursement from '{current.value}' to '{new_status.value}'. "
            f"Allowed: {sorted(s.value for s in allowed) if allowed else 'none (terminal status)'}."
        )

    disbursement.status = new_status
    if new_status == DisbursementStatus.COMPLETED:
        disbursement.processed_at = datetime.now(UTC)
    await session.commit()
    await session.refresh(disbursement)
    logger.info(
        "Disbursement %s moved %s -> %s", disbursement_id, current.value, new_status.value
    )
    return disbursement
