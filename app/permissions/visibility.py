# app/permissions/visibility.py
"""
Field-level visibility, independent of which records are in scope.

Three separate axes: a VC may see aggregates but no individual student,
REGISTRY may see every student but (by default) no risk classification.
"""

from typing import Any, Awaitable, Callable, Dict

from pydantic import BaseModel, ConfigDict

from app.core.constants import AGGREGATE_ROLES, IDENTITY_FIELDS, NO_INDIVIDUAL_ROLES, RISK_FIELDS
from app.models.enums import UserRole
from app.permissions.principal import Principal

RegistryOverrideReader = Callable[[], Awaitable[bool]]


def can_view_aggregated_data(principal: Principal) -> bool:
    return principal.role in AGGREGATE_ROLES


def can_view_individual_students(principal: Principal) -> bool:
    if principal.role is None:
        return False
    return principal.role not in NO_INDIVIDUAL_ROLES


def can_view_risk_scores(principal: Principal, registry_override_enabled: bool) -> bool:
    if principal.role is None:
        return False

    # IT_ADMIN never sees student data, the override does not apply to it
    if principal.role is UserRole.IT_ADMIN:
        return False

    if principal.role is UserRole.REGISTRY:
        return bool(registry_override_enabled)

    return True


class VisibilityGates(BaseModel):
    model_config = ConfigDict(frozen=True)

    aggregated_data: bool
    individual_students: bool
    risk_scores: bool


async def evaluate_gates(
    principal: Principal,
    read_registry_override: RegistryOverrideReader,
) -> VisibilityGates:
    """
    Evaluate all three gates for one request.

    The registry override is read through `read_registry_override` on every
    call (and only for REGISTRY), so a settings change applies to the very
    next request.
    """
    registry_override = False
    if principal.role is UserRole.REGISTRY:
        registry_override = await read_registry_override()

    return VisibilityGates(
        aggregated_data=can_view_aggregated_data(principal),
        individual_students=can_view_individual_students(principal),
        risk_scores=can_view_risk_scores(principal, registry_override),
    )


def shape_student_payload(payload: Dict[str, Any], gates: VisibilityGates) -> Dict[str, Any]:
    """Drop the fields the caller is not allowed to see from a serialized student."""
    hidden = set()
    if not gates.individual_students:
        hidden.update(IDENTITY_FIELDS)
    if not gates.risk_scores:
        hidden.update(RISK_FIELDS)

    return {key: value for key, value in payload.items() if key not in hidden}
