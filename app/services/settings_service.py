# app/services/settings_service.py

from datetime import datetime
from typing import Optional
from uuid import UUID

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import settings
from app.models.system_settings import SystemSettings


# ------------------------------------------------------------
# LOAD (OR CREATE) THE SETTINGS ROW
# ------------------------------------------------------------
async def get_system_settings(session: AsyncSession) -> SystemSettings:
    result = await session.execute(select(SystemSettings).order_by(SystemSettings.id).limit(1))
    row = result.scalar_one_or_none()
    if row:
        return row

    row = SystemSettings(
        registry_can_view_risk_scores=settings.REGISTRY_CAN_VIEW_RISK_SCORES_DEFAULT,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    logger.info("Created default system settings row")
    return row


# ------------------------------------------------------------
# REGISTRY RISK SCORE VISIBILITY
# ------------------------------------------------------------
async def get_registry_risk_visibility(session: AsyncSession) -> bool:
    """Always a fresh read: the toggle may be flipped between requests."""
    row = await get_system_settings(session)
    await session.refresh(row)
    return bool(row.registry_can_view_risk_scores)


async def set_registry_risk_visibility(
    session: AsyncSession,
    enabled: bool,
    actor_id: Optional[UUID] = None,
) -> SystemSettings:
    row = await get_system_settings(session)
    row.registry_can_view_risk_scores = enabled
    row.updated_by = actor_id
    row.updated_at = datetime.utcnow()

    session.add(row)
    await session.commit()
    await session.refresh(row)

    logger.info(f"Registry risk score visibility set to {enabled} by {actor_id}")
    return row
