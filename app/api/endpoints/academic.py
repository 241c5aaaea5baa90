from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select
from typing import List, Optional

from app.api.deps import get_current_principal, get_db_session
from app.models.course import Course
from app.models.department import Department
from app.models.faculty import Faculty
from app.schemas.academic import CourseRead, DepartmentRead, FacultyRead

# Read-only: the organisational graph is provisioned by import tooling
router = APIRouter(
    prefix="/api/academic",
    tags=["Academic Structure"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/faculties", response_model=List[FacultyRead])
async def list_faculties(session: AsyncSession = Depends(get_db_session)):
    result = await session.execute(select(Faculty).order_by(Faculty.name))
    return result.scalars().all()


@router.get("/departments", response_model=List[DepartmentRead])
async def list_departments(
    faculty_id: Optional[int] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Departments with their parent faculty name."""
    query = select(Department).options(selectinload(Department.faculty)).order_by(Department.name)
    if faculty_id is not None:
        query = query.where(Department.faculty_id == faculty_id)

    result = await session.execute(query)
    items = result.scalars().all()

    return [
        DepartmentRead.model_validate(item).model_copy(
            update={"faculty_name": item.faculty.name if item.faculty else None}
        )
        for item in items
    ]


@router.get("/courses", response_model=List[CourseRead])
async def list_courses(
    department_id: Optional[int] = Query(None),
    active_only: bool = Query(False),
    session: AsyncSession = Depends(get_db_session),
):
    query = select(Course).options(selectinload(Course.department)).order_by(Course.code)
    if department_id is not None:
        query = query.where(Course.department_id == department_id)
    if active_only:
        query = query.where(Course.is_active.is_(True))

    result = await session.execute(query)
    items = result.scalars().all()

    return [
        CourseRead.model_validate(item).model_copy(
            update={"department_name": item.department.name if item.department else None}
        )
        for item in items
    ]
