# app/permissions/filters.py
"""
Record-set predicates produced by the scope resolver.

A filter is a plain immutable value. It is built for one request, handed to
the storage adapter (see query_builders.py) or evaluated in memory with
`matches`, and then thrown away.
"""

import uuid
from enum import Enum
from typing import Any, ClassVar, FrozenSet, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ScopeField(str, Enum):
    FACULTY_ID = "faculty_id"
    DEPARTMENT_ID = "department_id"
    PROGRAM_NAME = "program_name"
    # Matches when any of the record's enrolled courses is in the value set
    ENROLLED_COURSE_ID = "enrolled_course_ids"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class StudentScopeView(_Frozen):
    """The subset of a student record that scoping decisions look at."""

    id: uuid.UUID
    faculty_id: Optional[int] = None
    department_id: Optional[int] = None
    program_name: Optional[str] = None
    enrolled_course_ids: FrozenSet[int] = Field(default_factory=frozenset)


class FieldMatch(_Frozen):
    field: ScopeField
    values: FrozenSet[Any]

    def matches(self, record: StudentScopeView) -> bool:
        if self.field is ScopeField.ENROLLED_COURSE_ID:
            return not self.values.isdisjoint(record.enrolled_course_ids)
        value = getattr(record, self.field.value)
        return value is not None and value in self.values


class MatchAll(_Frozen):
    kind: ClassVar[str] = "match_all"

    def matches(self, record: StudentScopeView) -> bool:
        return True


class Empty(_Frozen):
    kind: ClassVar[str] = "empty"

    def matches(self, record: StudentScopeView) -> bool:
        return False


class ByIds(_Frozen):
    ids: FrozenSet[uuid.UUID]
    kind: ClassVar[str] = "by_ids"

    def matches(self, record: StudentScopeView) -> bool:
        return record.id in self.ids


class ByFieldsOr(_Frozen):
    clauses: Tuple[FieldMatch, ...]
    kind: ClassVar[str] = "by_fields_or"

    def matches(self, record: StudentScopeView) -> bool:
        return any(clause.matches(record) for clause in self.clauses)


ScopeFilter = Union[MatchAll, Empty, ByIds, ByFieldsOr]

MATCH_ALL = MatchAll()
EMPTY = Empty()


# ------------------------------------------------------------
# Constructors
# ------------------------------------------------------------
# Both collapse to EMPTY when nothing could ever match, so an empty id list
# is never handed to the storage layer to interpret.

def by_ids(ids: Iterable[uuid.UUID]) -> ScopeFilter:
    ids = frozenset(ids)
    if not ids:
        return EMPTY
    return ByIds(ids=ids)


def by_fields_or(*clauses: Tuple[ScopeField, Iterable[Any]]) -> ScopeFilter:
    kept = tuple(
        FieldMatch(field=scope_field, values=frozenset(values))
        for scope_field, values in clauses
        if values
    )
    if not kept:
        return EMPTY
    return ByFieldsOr(clauses=kept)


def describe(scope_filter: ScopeFilter) -> str:
    """Short human-readable form, used in log lines."""
    if isinstance(scope_filter, ByIds):
        return f"by_ids({len(scope_filter.ids)})"
    if isinstance(scope_filter, ByFieldsOr):
        parts = ", ".join(
            f"{clause.field.value}[{len(clause.values)}]" for clause in scope_filter.clauses
        )
        return f"by_fields_or({parts})"
    return scope_filter.kind
