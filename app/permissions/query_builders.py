# app/permissions/query_builders.py
"""Translate scope filters into SQL predicates over the students table."""

import uuid

from sqlalchemy import false, or_, true
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from sqlmodel import select

from app.core.constants import ACTIVE_ENROLLMENT_STATUSES
from app.models.enrollment import CourseEnrollment
from app.models.student import Student
from app.permissions.access import RecordStore
from app.permissions.filters import (
    ByFieldsOr,
    ByIds,
    Empty,
    FieldMatch,
    MatchAll,
    ScopeField,
    ScopeFilter,
)


def enrolled_in_courses_clause(course_ids) -> ColumnElement:
    enrolled = select(CourseEnrollment.student_id).where(
        CourseEnrollment.course_id.in_(sorted(course_ids)),
        CourseEnrollment.status.in_(sorted(ACTIVE_ENROLLMENT_STATUSES)),
    )
    return Student.id.in_(enrolled)


def field_clause(match: FieldMatch) -> ColumnElement:
    if not match.values:
        return false()

    if match.field is ScopeField.FACULTY_ID:
        return Student.faculty_id.in_(sorted(match.values))
    if match.field is ScopeField.DEPARTMENT_ID:
        return Student.department_id.in_(sorted(match.values))
    if match.field is ScopeField.PROGRAM_NAME:
        return Student.program_name.in_(sorted(match.values))
    if match.field is ScopeField.ENROLLED_COURSE_ID:
        return enrolled_in_courses_clause(match.values)

    raise ValueError(f"Unsupported scope field: {match.field}")


def scope_clause(scope_filter: ScopeFilter) -> ColumnElement:
    if isinstance(scope_filter, MatchAll):
        return true()
    if isinstance(scope_filter, Empty):
        return false()
    if isinstance(scope_filter, ByIds):
        if not scope_filter.ids:
            return false()
        return Student.id.in_(sorted(scope_filter.ids))
    if isinstance(scope_filter, ByFieldsOr):
        if not scope_filter.clauses:
            return false()
        return or_(*(field_clause(clause) for clause in scope_filter.clauses))

    # Anything unrecognised selects nothing
    return false()


def apply_scope_filter(stmt, scope_filter: ScopeFilter):
    """Restrict a SELECT over Student to the records the filter allows."""
    return stmt.where(scope_clause(scope_filter))


class SqlRecordStore(RecordStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_in_scope(self, record_id: uuid.UUID, scope_filter: ScopeFilter) -> bool:
        stmt = apply_scope_filter(
            select(Student.id).where(Student.id == record_id),
            scope_filter,
        )
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None
