# app/services/student_service.py

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.constants import (
    ACADEMIC_RISK,
    ATTENDANCE_RISK,
    DEFAULT_CRITICAL_GPA,
    DEFAULT_FINANCIAL_LIMIT,
    DEFAULT_PROGRAM_NAME,
    DEFAULT_WARNING_ATTENDANCE,
    FINANCIAL_RISK,
    INCOMPLETE_RECORD,
)
from app.models.enrollment import CourseEnrollment
from app.models.student import Student
from app.permissions.filters import ScopeFilter
from app.permissions.query_builders import apply_scope_filter
from app.schemas.student import StudentCreate, StudentUpdate


# ------------------------------------------------------------
# LIST STUDENTS IN SCOPE
# ------------------------------------------------------------
async def list_students(
    session: AsyncSession,
    scope_filter: ScopeFilter,
    offset: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Student]:
    stmt = apply_scope_filter(select(Student), scope_filter).order_by(
        Student.created_at.desc(), Student.student_number
    )
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)

    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_students(session: AsyncSession, scope_filter: ScopeFilter) -> int:
    stmt = apply_scope_filter(select(func.count()).select_from(Student), scope_filter)
    result = await session.execute(stmt)
    return int(result.scalar_one())


# ------------------------------------------------------------
# SINGLE STUDENT
# ------------------------------------------------------------
async def get_student_by_number(session: AsyncSession, student_number: str) -> Student | None:
    result = await session.execute(select(Student).where(Student.student_number == student_number))
    return result.scalar_one_or_none()


# ------------------------------------------------------------
# CREATE / UPDATE / DELETE
# ------------------------------------------------------------
async def create_student(session: AsyncSession, data: StudentCreate) -> Student:
    student = Student(
        student_number=data.student_number.strip(),
        program_name=(data.program_name or "").strip() or DEFAULT_PROGRAM_NAME,
        faculty_id=data.faculty_id,
        department_id=data.department_id,
        year_of_study=data.year_of_study,
        semester_of_study=data.semester_of_study,
        gpa=data.gpa,
        attendance=data.attendance,
        balance=data.balance,
    )
    session.add(student)

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ValueError("Student number already exists")

    await session.refresh(student)
    return student


async def update_student(session: AsyncSession, student: Student, data: StudentUpdate) -> Student:
    # Apply only fields provided
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(student, key, value)
    student.updated_at = datetime.utcnow()

    session.add(student)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ValueError("Failed to update student details")

    await session.refresh(student)
    return student


async def delete_student(session: AsyncSession, student: Student) -> None:
    await session.execute(
        delete(CourseEnrollment).where(CourseEnrollment.student_id == student.id)
    )
    await session.delete(student)
    await session.commit()


# ------------------------------------------------------------
# PAGINATION HELPER
# ------------------------------------------------------------
def page_bounds(page: int, limit: int) -> Tuple[int, int]:
    page = max(1, page)
    return (page - 1) * limit, limit


# ------------------------------------------------------------
# DATA INTEGRITY ALERTS
# ------------------------------------------------------------
def risk_labels(
    student: Student,
    critical_gpa: float = DEFAULT_CRITICAL_GPA,
    warning_attendance: float = DEFAULT_WARNING_ATTENDANCE,
    financial_limit: float = DEFAULT_FINANCIAL_LIMIT,
) -> List[str]:
    labels = []
    if student.balance is not None and student.balance > financial_limit:
        labels.append(FINANCIAL_RISK)
    if student.attendance is not None and student.attendance < warning_attendance:
        labels.append(ATTENDANCE_RISK)
    if student.gpa is not None and student.gpa < critical_gpa:
        labels.append(ACADEMIC_RISK)
    return labels


async def _scoped_where(session: AsyncSession, scope_filter: ScopeFilter, condition) -> List[Student]:
    stmt = apply_scope_filter(select(Student), scope_filter).where(condition).order_by(Student.student_number)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def data_integrity_alerts(
    session: AsyncSession,
    scope_filter: ScopeFilter,
    critical_gpa: float = DEFAULT_CRITICAL_GPA,
    warning_attendance: float = DEFAULT_WARNING_ATTENDANCE,
    financial_limit: float = DEFAULT_FINANCIAL_LIMIT,
) -> Dict:
    """
    Students in scope grouped by the thresholds they break.

    Each group lists (student, labels) pairs; the group's own label comes
    first, followed by any other threshold the same student breaks.
    """
    def labelled(students: List[Student], primary: str) -> List[Tuple[Student, List[str]]]:
        rows = []
        for s in students:
            others = risk_labels(s, critical_gpa, warning_attendance, financial_limit)
            rows.append((s, [primary] + [label for label in others if label != primary]))
        return rows

    # One session, so the queries run one after another
    total = await count_students(session, scope_filter)
    financial = await _scoped_where(session, scope_filter, Student.balance > financial_limit)
    attendance = await _scoped_where(session, scope_filter, Student.attendance < warning_attendance)
    academic = await _scoped_where(session, scope_filter, Student.gpa < critical_gpa)
    incomplete = await _scoped_where(
        session,
        scope_filter,
        or_(func.trim(Student.student_number) == "", func.trim(Student.program_name) == ""),
    )

    flagged = {s.id for group in (financial, attendance, academic, incomplete) for s in group}
    no_issues = [s for s in await list_students(session, scope_filter) if s.id not in flagged]

    return {
        "thresholds": {
            "critical_gpa": critical_gpa,
            "warning_attendance": warning_attendance,
            "financial_limit": financial_limit,
        },
        "summary": {
            "total_students": total,
            "with_financial_risk": len(financial),
            "with_attendance_risk": len(attendance),
            "with_academic_risk": len(academic),
            "incomplete_records": len(incomplete),
            "with_no_issues": len(no_issues),
        },
        "students": {
            "financial_risk": labelled(financial, FINANCIAL_RISK),
            "attendance_risk": labelled(attendance, ATTENDANCE_RISK),
            "academic_risk": labelled(academic, ACADEMIC_RISK),
            "incomplete_records": [(s, [INCOMPLETE_RECORD]) for s in incomplete],
            "no_issues": [(s, []) for s in no_issues],
        },
    }
