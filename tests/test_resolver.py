import uuid
from types import SimpleNamespace

import pytest

from app.models.enums import UserRole
from app.permissions.errors import ScopeResolutionError
from app.permissions.filters import (
    EMPTY,
    MATCH_ALL,
    ByFieldsOr,
    ByIds,
    FieldMatch,
    ScopeField,
)
from app.permissions.principal import Principal
from app.permissions.resolver import ScopeResolver, resolve_scope


def _unit(id, name, code):
    return SimpleNamespace(id=id, name=name, code=code)


@pytest.fixture
def directory(fake_directory):
    return fake_directory(
        departments={
            1: [_unit(10, "Computer Science", "CS"), _unit(11, "Information Technology", "IT")],
        },
        courses={
            10: [_unit(100, "Introduction to Computer Science", "CS101")],
        },
        active_course_ids={100, 101},
    )


def principal(role, **kwargs):
    return Principal.build(user_id=uuid.uuid4(), role=role, **kwargs)


def clause(field, values):
    return FieldMatch(field=field, values=frozenset(values))


# ------------------------------------------------------------
# ROLES WITHOUT INDIVIDUAL ACCESS
# ------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize("role", [UserRole.VC, UserRole.DVC_ACADEMIC, UserRole.IT_ADMIN])
async def test_aggregate_only_roles_get_empty(directory, role):
    result = await resolve_scope(principal(role, faculty_id=1, department_id=10), directory)
    assert result is EMPTY
    assert directory.calls == []


@pytest.mark.asyncio
async def test_unknown_role_gets_empty(directory):
    result = await resolve_scope(principal("SUPER_ADMIN", faculty_id=1), directory)
    assert result is EMPTY
    assert directory.calls == []


@pytest.mark.asyncio
async def test_registry_gets_match_all(directory):
    assert await resolve_scope(principal(UserRole.REGISTRY), directory) is MATCH_ALL


# ------------------------------------------------------------
# DEAN
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_dean_matches_faculty_id_or_department_aliases(directory):
    result = await resolve_scope(principal(UserRole.DEAN, faculty_id=1), directory)

    assert isinstance(result, ByFieldsOr)
    assert result.clauses == (
        clause(ScopeField.FACULTY_ID, {1}),
        clause(
            ScopeField.PROGRAM_NAME,
            {"Computer Science", "CS", "Information Technology", "IT"},
        ),
    )


@pytest.mark.asyncio
async def test_dean_with_no_active_departments_keeps_faculty_clause(directory):
    result = await resolve_scope(principal(UserRole.DEAN, faculty_id=2), directory)
    assert result.clauses == (clause(ScopeField.FACULTY_ID, {2}),)


@pytest.mark.asyncio
async def test_dean_without_faculty_gets_empty(directory):
    assert await resolve_scope(principal(UserRole.DEAN), directory) is EMPTY
    assert directory.calls == []


# ------------------------------------------------------------
# HOD
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_hod_matches_department_id_or_course_aliases(directory):
    result = await resolve_scope(
        principal(UserRole.HOD, faculty_id=1, department_id=10), directory
    )
    assert result.clauses == (
        clause(ScopeField.DEPARTMENT_ID, {10}),
        clause(ScopeField.PROGRAM_NAME, {"Introduction to Computer Science", "CS101"}),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("attrs", [{"faculty_id": 1}, {"department_id": 10}, {}])
async def test_hod_missing_attribute_gets_empty(directory, attrs):
    assert await resolve_scope(principal(UserRole.HOD, **attrs), directory) is EMPTY


# ------------------------------------------------------------
# ADVISOR
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_advisor_gets_assigned_ids(directory):
    a, b = uuid.uuid4(), uuid.uuid4()
    result = await resolve_scope(
        principal(UserRole.ADVISOR, assigned_student_ids=[a, str(b)]), directory
    )
    assert result == ByIds(ids=frozenset({a, b}))


@pytest.mark.asyncio
async def test_advisor_without_assignments_gets_empty(directory):
    assert await resolve_scope(principal(UserRole.ADVISOR), directory) is EMPTY


@pytest.mark.asyncio
async def test_advisor_malformed_ids_are_dropped(directory):
    result = await resolve_scope(
        principal(UserRole.ADVISOR, assigned_student_ids=["not-a-uuid"]), directory
    )
    assert result is EMPTY


# ------------------------------------------------------------
# LECTURER
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_lecturer_keeps_only_active_courses(directory):
    result = await resolve_scope(
        principal(UserRole.LECTURER, faculty_id=1, department_id=10, assigned_course_ids=[100, 999]),
        directory,
    )
    assert result.clauses == (clause(ScopeField.ENROLLED_COURSE_ID, {100}),)


@pytest.mark.asyncio
async def test_lecturer_with_only_stale_courses_gets_empty(directory):
    result = await resolve_scope(
        principal(UserRole.LECTURER, faculty_id=1, department_id=10, assigned_course_ids=[999]),
        directory,
    )
    assert result is EMPTY


@pytest.mark.asyncio
async def test_lecturer_without_courses_skips_lookup(directory):
    result = await resolve_scope(
        principal(UserRole.LECTURER, faculty_id=1, department_id=10), directory
    )
    assert result is EMPTY
    assert directory.calls == []


@pytest.mark.asyncio
async def test_lecturer_without_department_gets_empty(directory):
    result = await resolve_scope(
        principal(UserRole.LECTURER, faculty_id=1, assigned_course_ids=[100]), directory
    )
    assert result is EMPTY


@pytest.mark.asyncio
async def test_lecturer_result_never_exceeds_assignment(fake_directory):
    # A misbehaving directory that returns more than it was asked about
    directory = fake_directory(active_course_ids={100, 101, 102})
    directory.validate_course_ids = _returns({100, 101, 102})

    result = await resolve_scope(
        principal(UserRole.LECTURER, faculty_id=1, department_id=10, assigned_course_ids=[100]),
        directory,
    )
    assert result.clauses[0].values == frozenset({100})


def _returns(value):
    async def _lookup(*args, **kwargs):
        return value
    return _lookup


# ------------------------------------------------------------
# FAILURES + IDEMPOTENCE
# ------------------------------------------------------------
@pytest.mark.asyncio
async def test_lookup_failure_raises(fake_directory):
    directory = fake_directory(error=ConnectionError("db down"))

    with pytest.raises(ScopeResolutionError):
        await resolve_scope(principal(UserRole.DEAN, faculty_id=1), directory)


@pytest.mark.asyncio
async def test_lookup_timeout_raises(fake_directory):
    directory = fake_directory(delay=0.5)
    resolver = ScopeResolver(directory, lookup_timeout=0.01)

    with pytest.raises(ScopeResolutionError):
        await resolver.resolve(principal(UserRole.HOD, faculty_id=1, department_id=10))


@pytest.mark.asyncio
async def test_lookup_failure_does_not_affect_roles_without_lookups(fake_directory):
    directory = fake_directory(error=ConnectionError("db down"))
    assert await resolve_scope(principal(UserRole.REGISTRY), directory) is MATCH_ALL


@pytest.mark.asyncio
@pytest.mark.parametrize("role,attrs", [
    (UserRole.DEAN, {"faculty_id": 1}),
    (UserRole.HOD, {"faculty_id": 1, "department_id": 10}),
    (UserRole.LECTURER, {"faculty_id": 1, "department_id": 10, "assigned_course_ids": [100, 101]}),
    (UserRole.ADVISOR, {"assigned_student_ids": [uuid.uuid4()]}),
])
async def test_resolution_is_idempotent(directory, role, attrs):
    p = principal(role, **attrs)
    assert await resolve_scope(p, directory) == await resolve_scope(p, directory)
