# app/api/endpoints/system_settings.py

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.rbac import AllowRoles
from app.models.enums import UserRole
from app.permissions.principal import Principal
from app.schemas.settings import RegistryRiskVisibilityRead, RegistryRiskVisibilityUpdate
from app.services.settings_service import get_system_settings, set_registry_risk_visibility

router = APIRouter(prefix="/api/settings", tags=["System Settings"])


@router.get("/registry-risk-visibility", response_model=RegistryRiskVisibilityRead)
async def read_registry_risk_visibility(
    session: AsyncSession = Depends(get_db_session),
    _: Principal = Depends(AllowRoles(UserRole.IT_ADMIN)),
):
    return await get_system_settings(session)


@router.put("/registry-risk-visibility", response_model=RegistryRiskVisibilityRead)
async def update_registry_risk_visibility(
    payload: RegistryRiskVisibilityUpdate,
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(AllowRoles(UserRole.IT_ADMIN)),
):
    """Takes effect on the next request; nothing caches the old value."""
    return await set_registry_risk_visibility(session, payload.enabled, actor_id=uuid.UUID(principal.user_id))
