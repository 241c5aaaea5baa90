# app/api/endpoints/students.py

import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import (
    get_access_checker,
    get_current_principal,
    get_db_session,
    get_scope_filter,
    get_visibility_gates,
)
from app.core.constants import (
    DEFAULT_CRITICAL_GPA,
    DEFAULT_FINANCIAL_LIMIT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_WARNING_ATTENDANCE,
    MAX_PAGE_SIZE,
)
from app.core.rbac import AllowRoles
from app.models.enums import UserRole
from app.models.student import Student
from app.permissions.access import AccessChecker
from app.permissions.filters import ScopeFilter
from app.permissions.principal import Principal
from app.permissions.visibility import VisibilityGates, shape_student_payload
from app.schemas.student import Pagination, StudentCreate, StudentPage, StudentUpdate
from app.schemas.student import DataIntegrityAlerts, StudentRead
from app.services.student_service import (
    count_students,
    create_student,
    data_integrity_alerts,
    delete_student,
    get_student_by_number,
    list_students,
    page_bounds,
    update_student,
)

router = APIRouter(
    prefix="/api/students",
    tags=["Students"]
)


def serialize(student: Student, gates: VisibilityGates) -> dict:
    payload = StudentRead.model_validate(student).model_dump(mode="json")
    return shape_student_payload(payload, gates)


def require_individual_access(gates: VisibilityGates):
    if not gates.individual_students:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Your role does not have permission to view individual "
                   "student data. Use the analytics endpoint for aggregated data.",
        )


async def load_student_in_scope(
    student_number: str,
    session: AsyncSession,
    principal: Principal,
    checker: AccessChecker,
) -> Student:
    student = await get_student_by_number(session, student_number)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    if not await checker.can_access_record(principal, student.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. This student is not within your assigned scope.",
        )
    return student


# ------------------------------------------------------------
# LIST STUDENTS IN SCOPE
# ------------------------------------------------------------
@router.get("")
async def get_all_students(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_db_session),
    gates: VisibilityGates = Depends(get_visibility_gates),
    scope_filter: ScopeFilter = Depends(get_scope_filter),
):
    require_individual_access(gates)

    # No pagination params: return the whole scoped list
    if page is None and limit is None:
        students = await list_students(session, scope_filter)
        return [serialize(s, gates) for s in students]

    page = page or 1
    limit = min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
    offset, limit = page_bounds(page, limit)

    total = await count_students(session, scope_filter)
    students = await list_students(session, scope_filter, offset=offset, limit=limit)
    total_pages = math.ceil(total / limit) if total else 0

    return StudentPage(
        students=[serialize(s, gates) for s in students],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )


# ------------------------------------------------------------
# DATA INTEGRITY ALERTS (scoped)
# ------------------------------------------------------------
# Declared before /{student_number} so the path is not read as a student number.
@router.get("/data-integrity-alerts", response_model=DataIntegrityAlerts)
async def get_data_integrity_alerts(
    critical_gpa: float = Query(DEFAULT_CRITICAL_GPA, ge=0),
    warning_attendance: float = Query(DEFAULT_WARNING_ATTENDANCE, ge=0, le=100),
    financial_limit: float = Query(DEFAULT_FINANCIAL_LIMIT),
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(get_current_principal),
    gates: VisibilityGates = Depends(get_visibility_gates),
    scope_filter: ScopeFilter = Depends(get_scope_filter),
):
    require_individual_access(gates)

    alerts = await data_integrity_alerts(
        session,
        scope_filter,
        critical_gpa=critical_gpa,
        warning_attendance=warning_attendance,
        financial_limit=financial_limit,
    )
    alerts["students"] = {
        group: [{**serialize(s, gates), "risk_labels": labels} for s, labels in rows]
        for group, rows in alerts["students"].items()
    }

    logger.info(
        f"Integrity alerts for {principal.user_id}: "
        f"{alerts['summary']['total_students']} students in scope"
    )
    return alerts


# ------------------------------------------------------------
# CREATE STUDENT (REGISTRY only)
# ------------------------------------------------------------
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_new_student(
    data: StudentCreate,
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(AllowRoles(UserRole.REGISTRY)),
    gates: VisibilityGates = Depends(get_visibility_gates),
):
    if await get_student_by_number(session, data.student_number.strip()):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Student number already exists.")

    try:
        student = await create_student(session, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info(f"Student {student.student_number} created by {principal.user_id}")
    return serialize(student, gates)


# ------------------------------------------------------------
# GET ONE STUDENT (scope checked)
# ------------------------------------------------------------
@router.get("/{student_number}")
async def get_student(
    student_number: str,
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(get_current_principal),
    gates: VisibilityGates = Depends(get_visibility_gates),
    checker: AccessChecker = Depends(get_access_checker),
):
    require_individual_access(gates)
    student = await load_student_in_scope(student_number, session, principal, checker)
    return serialize(student, gates)


# ------------------------------------------------------------
# UPDATE STUDENT (REGISTRY any, ADVISOR assigned only)
# ------------------------------------------------------------
@router.put("/{student_number}")
async def update_existing_student(
    student_number: str,
    data: StudentUpdate,
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(AllowRoles(UserRole.REGISTRY, UserRole.ADVISOR)),
    gates: VisibilityGates = Depends(get_visibility_gates),
    checker: AccessChecker = Depends(get_access_checker),
):
    student = await load_student_in_scope(student_number, session, principal, checker)

    try:
        student = await update_student(session, student, data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Student {student.student_number} updated by {principal.user_id}")
    return serialize(student, gates)


# ------------------------------------------------------------
# DELETE STUDENT (REGISTRY only)
# ------------------------------------------------------------
@router.delete("/{student_number}")
async def delete_existing_student(
    student_number: str,
    session: AsyncSession = Depends(get_db_session),
    principal: Principal = Depends(AllowRoles(UserRole.REGISTRY)),
    checker: AccessChecker = Depends(get_access_checker),
):
    student = await load_student_in_scope(student_number, session, principal, checker)
    await delete_student(session, student)

    logger.info(f"Student {student_number} deleted by {principal.user_id}")
    return {"detail": "Student deleted successfully"}
