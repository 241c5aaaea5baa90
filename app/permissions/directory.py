# app/permissions/directory.py
"""
Read-only lookups over the organisational graph (Faculty -> Department ->
Course).

Lookups raise on storage errors. An empty result always means "nothing
found", never "lookup failed".
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Protocol, Set

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.course import Course
from app.models.department import Department


class NamedUnit(Protocol):
    id: int
    name: str
    code: str


def _aliases(units: Iterable[NamedUnit]) -> Set[str]:
    aliases = set()
    for unit in units:
        if unit.name:
            aliases.add(unit.name)
        if unit.code:
            aliases.add(unit.code)
    return aliases


class Directory(ABC):

    # --------------------------------------------------------
    # Storage reads
    # --------------------------------------------------------
    @abstractmethod
    async def list_active_departments(self, faculty_id: int) -> List[NamedUnit]:
        ...

    @abstractmethod
    async def list_active_courses(self, department_ids: Iterable[int]) -> List[NamedUnit]:
        ...

    @abstractmethod
    async def validate_course_ids(self, candidate_ids: Iterable[int]) -> Set[int]:
        """Return the subset of `candidate_ids` that are currently active courses."""

    # --------------------------------------------------------
    # Legacy programme-name aliases
    # --------------------------------------------------------
    async def aliases_for_faculty(self, faculty_id: int) -> Set[str]:
        """Names and codes of the active departments under a faculty."""
        return _aliases(await self.list_active_departments(faculty_id))

    async def aliases_for_department(self, department_id: int) -> Set[str]:
        """Names and codes of the active courses under a department."""
        return _aliases(await self.list_active_courses([department_id]))


class SqlDirectory(Directory):
    """Directory backed by the request's database session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active_departments(self, faculty_id: int) -> List[Department]:
        result = await self.session.execute(
            select(Department)
            .where(Department.faculty_id == faculty_id, Department.is_active.is_(True))
            .order_by(Department.code)
        )
        return list(result.scalars().all())

    async def list_active_courses(self, department_ids: Iterable[int]) -> List[Course]:
        department_ids = sorted(set(department_ids))
        if not department_ids:
            return []

        result = await self.session.execute(
            select(Course)
            .where(Course.department_id.in_(department_ids), Course.is_active.is_(True))
            .order_by(Course.code)
        )
        return list(result.scalars().all())

    async def validate_course_ids(self, candidate_ids: Iterable[int]) -> Set[int]:
        candidate_ids = sorted(set(candidate_ids))
        if not candidate_ids:
            return set()

        result = await self.session.execute(
            select(Course.id).where(Course.id.in_(candidate_ids), Course.is_active.is_(True))
        )
        return set(result.scalars().all())

