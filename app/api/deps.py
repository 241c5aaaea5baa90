# app/api/deps.py

from typing import AsyncGenerator
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import decode_token
from app.core.database import get_session
from app.models.user import User
from app.permissions.access import AccessChecker
from app.permissions.directory import SqlDirectory
from app.permissions.filters import ScopeFilter
from app.permissions.principal import Principal
from app.permissions.query_builders import SqlRecordStore
from app.permissions.resolver import ScopeResolver
from app.permissions.visibility import VisibilityGates, evaluate_gates
from app.services.auth_service import get_user_by_id
from app.services.settings_service import get_registry_risk_visibility


# ------------------------------------------------------------
# HTTP Bearer Authentication
# ------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=False)


# ------------------------------------------------------------
# DB Session
# ------------------------------------------------------------
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


# ------------------------------------------------------------
# Get current logged-in user from JWT
# ------------------------------------------------------------
async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_db_session),
) -> User:

    if credentials is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Could not validate credentials")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token payload")

    user = await get_user_by_id(session, user_id)
    if not user or not user.is_active:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "User not found")

    return user


# ------------------------------------------------------------
# Principal + access scope (one per request, never cached)
# ------------------------------------------------------------
async def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    return Principal.from_user(current_user)


def get_directory(session: AsyncSession = Depends(get_db_session)) -> SqlDirectory:
    return SqlDirectory(session)


async def get_scope_filter(
    principal: Principal = Depends(get_current_principal),
    directory: SqlDirectory = Depends(get_directory),
) -> ScopeFilter:
    # ScopeResolutionError propagates to the handler registered in main.py
    resolver = ScopeResolver(directory, settings.SCOPE_LOOKUP_TIMEOUT_SECONDS)
    return await resolver.resolve(principal)


def get_access_checker(
    directory: SqlDirectory = Depends(get_directory),
    session: AsyncSession = Depends(get_db_session),
) -> AccessChecker:
    return AccessChecker(
        directory,
        SqlRecordStore(session),
        lookup_timeout=settings.SCOPE_LOOKUP_TIMEOUT_SECONDS,
    )


async def get_visibility_gates(
    principal: Principal = Depends(get_current_principal),
    session: AsyncSession = Depends(get_db_session),
) -> VisibilityGates:

    async def read_registry_override() -> bool:
        return await get_registry_risk_visibility(session)

    return await evaluate_gates(principal, read_registry_override)
