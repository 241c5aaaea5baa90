# app/api/endpoints/users.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from sqlmodel import select

from app.api.deps import get_db_session
from app.core.rbac import AllowRoles
from app.models.enums import UserRole
from app.models.user import User
from app.permissions.principal import Principal
from app.schemas.user import UserCreate, UserRead
from app.services.auth_service import get_user_by_email, create_user

router = APIRouter(prefix="/api/users", tags=["Users"])


# -------------------------------------------------------------------
# Provision a staff account (IT Admin only)
# -------------------------------------------------------------------
@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_new_user(
    data: UserCreate,
    session: AsyncSession = Depends(get_db_session),
    _: Principal = Depends(AllowRoles(UserRole.IT_ADMIN)),
):
    if await get_user_by_email(session, data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    try:
        return await create_user(
            session,
            data.full_name,
            data.email,
            data.password,
            role=data.role,
            faculty_id=data.faculty_id,
            department_id=data.department_id,
            assigned_course_ids=data.assigned_course_ids,
            assigned_student_ids=data.assigned_student_ids,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# -------------------------------------------------------------------
# List staff accounts (IT Admin only)
# -------------------------------------------------------------------
@router.get("", response_model=List[UserRead])
async def list_users(
    session: AsyncSession = Depends(get_db_session),
    _: Principal = Depends(AllowRoles(UserRole.IT_ADMIN)),
):
    result = await session.execute(select(User).order_by(User.created_at))
    return result.scalars().all()
