# app/permissions/access.py

import uuid
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from app.permissions.directory import Directory
from app.permissions.filters import ByFieldsOr, ByIds, Empty, MatchAll, ScopeFilter
from app.permissions.principal import Principal
from app.permissions.resolver import ScopeResolver


class RecordStore(ABC):
    """Storage-side half of a single-record check."""

    @abstractmethod
    async def record_in_scope(self, record_id: uuid.UUID, scope_filter: ScopeFilter) -> bool:
        """True when the record exists and satisfies `scope_filter`."""


class AccessChecker:
    """
    Point check for detail / update / delete paths.

    `can_access_record(p, r)` answers the same question as "is r in the set
    selected by resolve(p)" without materialising that set.
    """

    def __init__(
        self,
        directory: Directory,
        records: RecordStore,
        lookup_timeout: Optional[float] = None,
    ):
        self.resolver = ScopeResolver(directory, lookup_timeout)
        self.records = records

    async def can_access_record(self, principal: Principal, record_id: uuid.UUID) -> bool:
        """False for ids that do not exist, whatever the principal's scope."""
        scope_filter = await self.resolver.resolve(principal)
        return await self.check(principal, record_id, scope_filter)

    async def check(
        self,
        principal: Principal,
        record_id: uuid.UUID,
        scope_filter: ScopeFilter,
    ) -> bool:
        """Check against an already resolved filter from the same request."""
        if isinstance(scope_filter, Empty):
            return False

        # MatchAll degrades to a plain existence query
        if isinstance(scope_filter, (MatchAll, ByIds, ByFieldsOr)):
            allowed = await self.records.record_in_scope(record_id, scope_filter)
            if not allowed:
                logger.info(f"User {principal.user_id} denied access to student {record_id}")
            return allowed

        # Unknown filter shape
        logger.error(f"Unhandled scope filter {scope_filter!r}; denying access")
        return False
