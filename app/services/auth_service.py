# app/services/auth_service.py

from datetime import datetime, timezone
from typing import Iterable, Optional
import uuid

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import settings
from app.core.security import create_access_token, hash_password, verify_password
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.auth import TokenWithUser
from app.schemas.user import UserRead


# ============================================================================
# FETCH USER
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.lower().strip()))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id) -> User | None:
    try:
        user_uuid = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(str(user_id))
    except ValueError:
        return None
    result = await session.execute(select(User).where(User.id == user_uuid))
    return result.scalar_one_or_none()


# ============================================================================
# CREATE USER
# ============================================================================
async def create_user(
    session: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    role: UserRole,
    faculty_id: Optional[int] = None,
    department_id: Optional[int] = None,
    assigned_course_ids: Iterable[int] = (),
    assigned_student_ids: Iterable[uuid.UUID] = (),
) -> User:

    # ---- VALIDATION RULES ----
    if role in (UserRole.DEAN, UserRole.HOD, UserRole.LECTURER) and faculty_id is None:
        raise ValueError(f"{role.value} must be assigned to a faculty")

    if role in (UserRole.HOD, UserRole.LECTURER) and department_id is None:
        raise ValueError(f"{role.value} must be assigned to a department")

    if role != UserRole.LECTURER and assigned_course_ids:
        raise ValueError(f"{role.value} accounts cannot have assigned courses")

    if role != UserRole.ADVISOR and assigned_student_ids:
        raise ValueError(f"{role.value} accounts cannot have assigned students")

    user = User(
        id=uuid.uuid4(),
        full_name=full_name,
        email=email.lower().strip(),
        password_hash=hash_password(password),
        role=role.value,
        faculty_id=faculty_id,
        department_id=department_id,
        assigned_course_ids=[int(c) for c in assigned_course_ids],
        assigned_student_ids=[str(s) for s in assigned_student_ids],
    )

    session.add(user)

    try:
        await session.commit()
        await session.refresh(user)
        return user

    except IntegrityError:
        await session.rollback()
        raise ValueError("User with this email already exists")


# ============================================================================
# AUTHENTICATE
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user or not user.is_active:
        return None

    if not verify_password(password, user.password_hash):
        return None

    user.last_login = datetime.now(timezone.utc)
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(f"User {user.id} ({user.role}) logged in")
    return user


# ============================================================================
# CREATE LOGIN RESPONSE
# ============================================================================
def create_login_response(user: User) -> TokenWithUser:
    token = create_access_token(subject=user.id, data={"role": user.role})
    return TokenWithUser(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserRead.model_validate(user),
    )
