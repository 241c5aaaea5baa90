# app/permissions/principal.py

import uuid
from typing import FrozenSet, Iterable, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import UserRole
from app.models.user import User


def _parse_student_ids(values: Iterable) -> FrozenSet[uuid.UUID]:
    """Malformed ids are dropped: they could never match a record anyway."""
    parsed = set()
    for value in values or []:
        try:
            parsed.add(value if isinstance(value, uuid.UUID) else uuid.UUID(str(value)))
        except ValueError:
            logger.warning(f"Ignoring malformed assigned student id: {value!r}")
    return frozenset(parsed)


def _parse_course_ids(values: Iterable) -> FrozenSet[int]:
    parsed = set()
    for value in values or []:
        try:
            parsed.add(int(value))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed assigned course id: {value!r}")
    return frozenset(parsed)


class Principal(BaseModel):
    """
    The authenticated actor an access decision is made for.

    `role` is None when the stored role string is not a known UserRole;
    `raw_role` always keeps the original value for logging.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    raw_role: str
    role: Optional[UserRole] = None

    faculty_id: Optional[int] = None
    department_id: Optional[int] = None

    assigned_course_ids: FrozenSet[int] = Field(default_factory=frozenset)
    assigned_student_ids: FrozenSet[uuid.UUID] = Field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        user_id,
        role,
        faculty_id: Optional[int] = None,
        department_id: Optional[int] = None,
        assigned_course_ids: Iterable = (),
        assigned_student_ids: Iterable = (),
    ) -> "Principal":
        raw_role = role.value if isinstance(role, UserRole) else str(role)
        try:
            known_role = UserRole(raw_role)
        except ValueError:
            known_role = None

        return cls(
            user_id=str(user_id),
            raw_role=raw_role,
            role=known_role,
            faculty_id=faculty_id,
            department_id=department_id,
            assigned_course_ids=_parse_course_ids(assigned_course_ids),
            assigned_student_ids=_parse_student_ids(assigned_student_ids),
        )

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls.build(
            user_id=user.id,
            role=user.role,
            faculty_id=user.faculty_id,
            department_id=user.department_id,
            assigned_course_ids=user.assigned_course_ids or [],
            assigned_student_ids=user.assigned_student_ids or [],
        )

    @property
    def is_recognized(self) -> bool:
        return self.role is not None

    def has_role(self, *roles: UserRole) -> bool:
        return self.role is not None and self.role in roles
