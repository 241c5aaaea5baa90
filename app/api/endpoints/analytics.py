# app/api/endpoints/analytics.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_principal, get_db_session, get_scope_filter, get_visibility_gates
from app.models.enums import UserRole
from app.permissions.filters import MATCH_ALL, ScopeFilter
from app.permissions.principal import Principal
from app.permissions.visibility import VisibilityGates
from app.schemas.analytics import AnalyticsMetrics, AnalyticsResponse, ProgramCount
from app.services.analytics_service import program_breakdown, summarize_students

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


# =================================================================
# ROLE-ROUTED AGGREGATES (no individual rows, ever)
# =================================================================
@router.get("", response_model=AnalyticsResponse, response_model_exclude_none=True)
async def get_analytics(
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(get_current_principal),
    gates: VisibilityGates = Depends(get_visibility_gates),
    scope_filter: ScopeFilter = Depends(get_scope_filter),
):
    if principal.role is UserRole.IT_ADMIN:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "IT Admin cannot access academic analytics")

    if not gates.aggregated_data:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Access denied. No analytics available for this role.")

    now = datetime.now(timezone.utc)

    # 1. University-wide: VC / DVC see every record, aggregated only
    if principal.has_role(UserRole.VC, UserRole.DVC_ACADEMIC):
        summary = await summarize_students(session, MATCH_ALL)
        return AnalyticsResponse(scope="university", period=now, metrics=AnalyticsMetrics(**summary))

    # 2. Faculty: aggregated over the dean's scope, grouped by programme
    if principal.role is UserRole.DEAN:
        summary = await summarize_students(session, scope_filter)
        summary.pop("total_balance")
        breakdown = await program_breakdown(session, scope_filter)
        return AnalyticsResponse(
            scope="faculty",
            period=now,
            faculty_id=principal.faculty_id,
            metrics=AnalyticsMetrics(
                **summary,
                program_breakdown=[ProgramCount(**row) for row in breakdown],
            ),
        )

    # 3. Department
    if principal.role is UserRole.HOD:
        summary = await summarize_students(session, scope_filter)
        summary.pop("total_balance")
        return AnalyticsResponse(
            scope="department",
            period=now,
            department_id=principal.department_id,
            metrics=AnalyticsMetrics(**summary),
        )

    # 4. Registry: data-integrity metrics over its (full) scope
    summary = await summarize_students(session, scope_filter)
    return AnalyticsResponse(scope="registry", period=now, metrics=AnalyticsMetrics(**summary))
