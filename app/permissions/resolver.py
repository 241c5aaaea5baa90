# app/permissions/resolver.py
"""
Maps a principal to the set of student records it may query or mutate.

    VC / DVC_ACADEMIC   -> EMPTY (aggregates only, computed elsewhere)
    DEAN                -> faculty_id == F  OR program_name in aliases(F)
    HOD                 -> department_id == D OR program_name in aliases(D)
    ADVISOR             -> id in assigned_student_ids
    LECTURER            -> enrolled in one of the still-active assigned courses
    REGISTRY            -> MATCH_ALL
    IT_ADMIN            -> EMPTY
    anything else       -> EMPTY

Every missing attribute, unknown role or empty assignment resolves to EMPTY.
Directory failures raise ScopeResolutionError.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Optional

from loguru import logger

from app.models.enums import UserRole
from app.permissions.directory import Directory
from app.permissions.errors import ScopeResolutionError
from app.permissions.filters import (
    EMPTY,
    MATCH_ALL,
    ScopeField,
    ScopeFilter,
    by_fields_or,
    by_ids,
    describe,
)
from app.permissions.principal import Principal


class ScopeResolver:

    def __init__(self, directory: Directory, lookup_timeout: Optional[float] = None):
        self.directory = directory
        self.lookup_timeout = lookup_timeout

    async def resolve(self, principal: Principal) -> ScopeFilter:
        if principal.role is None:
            logger.error(
                f"Unrecognized role '{principal.raw_role}' for user {principal.user_id}; "
                "denying access to student records"
            )
            return EMPTY

        strategy = _ROLE_STRATEGIES[principal.role]
        scope_filter = await strategy(self, principal)

        logger.debug(
            f"Resolved scope for user {principal.user_id} ({principal.role.value}): "
            f"{describe(scope_filter)}"
        )
        return scope_filter

    # --------------------------------------------------------
    # Directory access
    # --------------------------------------------------------
    async def _lookup(self, principal: Principal, *lookups: Awaitable):
        """
        Await independent directory lookups together, bounded by the
        configured timeout. Any failure aborts the resolution.
        """
        try:
            return await asyncio.wait_for(asyncio.gather(*lookups), timeout=self.lookup_timeout)
        except asyncio.TimeoutError as exc:
            logger.error(f"Directory lookup timed out resolving scope for user {principal.user_id}")
            raise ScopeResolutionError("Directory lookup timed out", role=principal.raw_role) from exc
        except Exception as exc:
            logger.exception(f"Directory lookup failed resolving scope for user {principal.user_id}")
            raise ScopeResolutionError("Directory lookup failed", role=principal.raw_role) from exc

    def _missing(self, principal: Principal, *attributes: str) -> bool:
        missing = [name for name in attributes if getattr(principal, name) is None]
        if missing:
            logger.warning(
                f"User {principal.user_id} has role {principal.raw_role} but no "
                f"{', '.join(missing)}; denying access to student records"
            )
        return bool(missing)

    # --------------------------------------------------------
    # Per-role strategies
    # --------------------------------------------------------
    async def _no_individual_access(self, principal: Principal) -> ScopeFilter:
        return EMPTY

    async def _full_access(self, principal: Principal) -> ScopeFilter:
        return MATCH_ALL

    async def _faculty_scope(self, principal: Principal) -> ScopeFilter:
        if self._missing(principal, "faculty_id"):
            return EMPTY

        (aliases,) = await self._lookup(
            principal, self.directory.aliases_for_faculty(principal.faculty_id)
        )
        return by_fields_or(
            (ScopeField.FACULTY_ID, {principal.faculty_id}),
            (ScopeField.PROGRAM_NAME, aliases),
        )

    async def _department_scope(self, principal: Principal) -> ScopeFilter:
        if self._missing(principal, "faculty_id", "department_id"):
            return EMPTY

        (aliases,) = await self._lookup(
            principal, self.directory.aliases_for_department(principal.department_id)
        )
        return by_fields_or(
            (ScopeField.DEPARTMENT_ID, {principal.department_id}),
            (ScopeField.PROGRAM_NAME, aliases),
        )

    async def _assigned_students(self, principal: Principal) -> ScopeFilter:
        return by_ids(principal.assigned_student_ids)

    async def _assigned_courses(self, principal: Principal) -> ScopeFilter:
        if self._missing(principal, "faculty_id", "department_id"):
            return EMPTY
        if not principal.assigned_course_ids:
            return EMPTY

        (active_course_ids,) = await self._lookup(
            principal, self.directory.validate_course_ids(principal.assigned_course_ids)
        )

        # Never trust the directory to stay inside the candidate set
        active_course_ids = set(active_course_ids) & principal.assigned_course_ids
        stale = principal.assigned_course_ids - active_course_ids
        if stale:
            logger.info(
                f"Ignoring {len(stale)} inactive or unknown course assignment(s) "
                f"for user {principal.user_id}"
            )
        return by_fields_or((ScopeField.ENROLLED_COURSE_ID, active_course_ids))


_Strategy = Callable[[ScopeResolver, Principal], Awaitable[ScopeFilter]]

_ROLE_STRATEGIES: Dict[UserRole, _Strategy] = {
    UserRole.VC: ScopeResolver._no_individual_access,
    UserRole.DVC_ACADEMIC: ScopeResolver._no_individual_access,
    UserRole.DEAN: ScopeResolver._faculty_scope,
    UserRole.HOD: ScopeResolver._department_scope,
    UserRole.ADVISOR: ScopeResolver._assigned_students,
    UserRole.LECTURER: ScopeResolver._assigned_courses,
    UserRole.REGISTRY: ScopeResolver._full_access,
    UserRole.IT_ADMIN: ScopeResolver._no_individual_access,
}

# A role added to UserRole without a strategy must fail at import, not at request time
_unmapped = set(UserRole) - set(_ROLE_STRATEGIES)
if _unmapped:
    raise RuntimeError(f"No scope strategy for roles: {sorted(r.value for r in _unmapped)}")


async def resolve_scope(
    principal: Principal,
    directory: Directory,
    lookup_timeout: Optional[float] = None,
) -> ScopeFilter:
    return await ScopeResolver(directory, lookup_timeout).resolve(principal)
