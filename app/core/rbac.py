# app/core/rbac.py

from fastapi import Depends, HTTPException, status
from loguru import logger

from app.api.deps import get_current_principal
from app.models.enums import UserRole
from app.permissions.principal import Principal


def AllowRoles(*allowed_roles: UserRole):
    """
    Coarse role gate for a route.
    - No role bypasses the list
    - Unrecognized roles are always rejected
    """
    allowed = frozenset(UserRole(r) for r in allowed_roles)

    async def role_checker(principal: Principal = Depends(get_current_principal)) -> Principal:
        if principal.role is None:
            logger.error(f"Rejected request from user {principal.user_id} with unknown role '{principal.raw_role}'")
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Access denied")

        if principal.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied for role '{principal.raw_role}'"
            )

        return principal

    return role_checker
