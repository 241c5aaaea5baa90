# app/services/analytics_service.py

from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.student import Student
from app.permissions.filters import ScopeFilter
from app.permissions.query_builders import apply_scope_filter


def _round(value) -> float:
    return round(float(value or 0), 2)


# ------------------------------------------------------------
# SUMMARY METRICS OVER A SCOPE
# ------------------------------------------------------------
async def summarize_students(session: AsyncSession, scope_filter: ScopeFilter) -> Dict[str, float]:
    """Count, averages and balance total. Never returns individual rows."""
    stmt = apply_scope_filter(
        select(
            func.count(Student.id),
            func.avg(Student.attendance),
            func.avg(Student.gpa),
            func.sum(Student.balance),
        ),
        scope_filter,
    )
    result = await session.execute(stmt)
    total, avg_attendance, avg_gpa, total_balance = result.one()

    return {
        "total_students": int(total or 0),
        "average_attendance": _round(avg_attendance),
        "average_gpa": _round(avg_gpa),
        "total_balance": _round(total_balance),
    }


async def program_breakdown(session: AsyncSession, scope_filter: ScopeFilter) -> List[Dict]:
    stmt = apply_scope_filter(
        select(Student.program_name, func.count(Student.id)),
        scope_filter,
    ).group_by(Student.program_name).order_by(Student.program_name)

    result = await session.execute(stmt)
    return [
        {"program": program or "Unknown", "total": int(total)}
        for program, total in result.all()
    ]
