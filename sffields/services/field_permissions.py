"""Grant field-level security on newly created fields.

Each grantee name is tried as a Permission Set first and as a Profile second.
The Profile attempt runs when the Permission Set update raises, and also when
it completes but reports ``success: false``.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Sequence, Tuple

from sffields.models import PermissionAssignment
from sffields.services.field_deployment import as_list, join_error_messages

logger = logging.getLogger(__name__)


class GranteeKind(str, Enum):
    PERMISSION_SET = "PermissionSet"
    PROFILE = "Profile"

    @property
    def label(self) -> str:
        return "Permission Set" if self is GranteeKind.PERMISSION_SET else "Profile"


GRANTEE_KINDS: Tuple[GranteeKind, GranteeKind] = (GranteeKind.PERMISSION_SET, GranteeKind.PROFILE)


@dataclass
class GrantAttempt:
    """The kind that produced ``outcome`` (the last one tried)."""

    kind: GranteeKind
    outcome: Dict[str, Any]


def build_field_permissions(field_names: List[str], readable: bool, editable: bool) -> List[Dict[str, Any]]:
    return [
        {"field": field_name, "readable": readable, "editable": editable}
        for field_name in field_names
    ]


def _first_result(update_result: Any) -> Dict[str, Any]:
    results = as_list(update_result)
    if not results:
        return {"success": False, "errors": [{"message": "No result returned"}]}
    return results[0]


def apply_with_fallback(
    kinds: Sequence[GranteeKind],
    attempt: Callable[[GranteeKind], Dict[str, Any]],
) -> GrantAttempt:
    """Run ``attempt`` for the first kind, falling back to the second.

    The fallback is taken when the first attempt raises or returns an
    unsuccessful result. Whatever the second attempt produces (or raises) is
    final.
    """
    primary, secondary = kinds
    try:
        outcome = attempt(primary)
    except Exception as e:
        logger.info("↪️ %s update raised (%s); retrying as %s", primary.value, e, secondary.value)
    else:
        if outcome.get("success"):
            return GrantAttempt(primary, outcome)
        logger.info(
            "↪️ %s update rejected (%s); retrying as %s",
            primary.value,
            join_error_messages(outcome),
            secondary.value,
        )
    return GrantAttempt(secondary, attempt(secondary))


def assign_field_permissions(
    connection,
    field_names: List[str],
    permissions: List[PermissionAssignment],
) -> str:
    """Apply each permission assignment in order; one report line per grantee."""
    results: List[str] = []

    for perm in permissions:
        name = perm.permission_set_or_profile
        try:
            field_permissions = build_field_permissions(field_names, perm.readable, perm.editable)

            def _update(kind: GranteeKind) -> Dict[str, Any]:
                return _first_result(
                    connection.update(kind.value, {"fullName": name, "fieldPermissions": field_permissions})
                )

            grant = apply_with_fallback(GRANTEE_KINDS, _update)
            if grant.outcome.get("success"):
                results.append(f'✓ {grant.kind.label} "{name}": assigned')
                logger.info("✅ Field permissions assigned to %s '%s'", grant.kind.label, name)
            else:
                results.append(f'✗ "{name}": {join_error_messages(grant.outcome)}')
                logger.warning("❌ Field permissions not assigned to '%s'", name)
        except Exception as e:
            logger.error("assign_field_permissions: %s", e, exc_info=True)
            results.append(f'✗ "{name}": {str(e) or type(e).__name__}')

    return "\n".join(results)
