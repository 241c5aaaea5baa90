# app/api/endpoints/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_principal, get_db_session, get_visibility_gates
from app.core.config import settings
from app.core.rate_limiter import limiter
from app.permissions.principal import Principal
from app.permissions.visibility import VisibilityGates
from app.schemas.auth import LoginRequest, PrincipalRead, TokenWithUser, VisibilityRead
from app.services.auth_service import authenticate_user, create_login_response

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ------------------------------------------------------------
# LOGIN
# ------------------------------------------------------------
@router.post("/login", response_model=TokenWithUser)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    data: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
):
    user = await authenticate_user(session, data.email, data.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")

    return create_login_response(user)


# ------------------------------------------------------------
# WHO AM I + WHAT CAN I SEE
# ------------------------------------------------------------
@router.get("/me", response_model=PrincipalRead)
async def me(
    principal: Principal = Depends(get_current_principal),
    gates: VisibilityGates = Depends(get_visibility_gates),
):
    return PrincipalRead(
        user_id=principal.user_id,
        role=principal.raw_role,
        recognized_role=principal.is_recognized,
        faculty_id=principal.faculty_id,
        department_id=principal.department_id,
        assigned_course_ids=sorted(principal.assigned_course_ids),
        assigned_student_ids=sorted(str(s) for s in principal.assigned_student_ids),
        visibility=VisibilityRead(
            aggregated_data=gates.aggregated_data,
            individual_students=gates.individual_students,
            risk_scores=gates.risk_scores,
        ),
    )
