"""Create custom fields in one Metadata API call and sort the results."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from sffields.config import CUSTOM_FIELD_METADATA_TYPE
from sffields.models import FieldDefinition
from sffields.services.field_metadata import build_metadata_items

logger = logging.getLogger(__name__)


@dataclass
class FieldDeploymentResult:
    """Full names that were created, and "fullName: errors" lines for those that were not."""

    success_fields: List[str] = field(default_factory=list)
    failed_fields: List[str] = field(default_factory=list)


# =============================================================================
# SAVE RESULT NORMALIZATION
# =============================================================================

def as_list(value: Any) -> List[Any]:
    """The Metadata API answers with either one item or a list of them."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def join_error_messages(result: Dict[str, Any]) -> str:
    """Join every error message on a save result with ", "."""
    messages = [
        str(err.get("message"))
        for err in as_list(result.get("errors"))
        if isinstance(err, dict) and err.get("message")
    ]
    return ", ".join(messages) or "Unknown error"


# =============================================================================
# DEPLOY
# =============================================================================

def deploy_fields(connection, fields: List[FieldDefinition]) -> FieldDeploymentResult:
    """Submit every field in a single create call.

    Errors raised by the call itself propagate; per-field failures reported by
    the API are collected in ``failed_fields``, as is any submitted field the
    API returned no result for. Results are matched by their
    ``fullName``, in the order the API returned them.
    """
    items = build_metadata_items(fields)
    logger.info("🚀 Creating %d custom field(s)", len(items))

    deploy_result = connection.create(CUSTOM_FIELD_METADATA_TYPE, items)

    results = as_list(deploy_result)
    outcome = FieldDeploymentResult()
    for result in results:
        if result.get("success"):
            outcome.success_fields.append(result.get("fullName"))
        else:
            outcome.failed_fields.append(f"{result.get('fullName')}: {join_error_messages(result)}")

    returned = {result.get("fullName") for result in results}
    for item in items:
        if item["fullName"] not in returned:
            outcome.failed_fields.append(f"{item['fullName']}: No result returned")

    logger.info(
        "✅ Field creation finished: %d created, %d failed",
        len(outcome.success_fields),
        len(outcome.failed_fields),
    )
    return outcome
