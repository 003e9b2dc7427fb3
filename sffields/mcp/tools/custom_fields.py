import json
import logging
from typing import Annotated, Callable, List, Optional

from mcp.types import ToolAnnotations
from pydantic import Field

from sffields.mcp.server import register_tool
from sffields.models import FieldDefinition, PermissionAssignment
from sffields.services.field_deployment import deploy_fields
from sffields.services.field_permissions import assign_field_permissions
from sffields.services.report import ToolResponse, summarize
from sffields.services.salesforce import get_metadata_connection

logger = logging.getLogger(__name__)

MISSING_ORG_MESSAGE = (
    "The username_or_alias parameter is required. "
    "Ask the user which org username or alias to target if not specified."
)
EMPTY_FIELDS_MESSAGE = "At least one field definition is required."

FieldList = Annotated[List[FieldDefinition], Field(min_length=1)]


def run_create_custom_fields(
    fields: FieldList,
    username_or_alias: Optional[str],
    directory: str,
    permissions: Optional[List[PermissionAssignment]] = None,
    resolver: Optional[Callable] = None,
) -> ToolResponse:
    """Create the fields, then grant field-level security on the ones that were created.

    Nothing is deduplicated: calling this twice with the same input submits
    the fields twice and leaves the remote org to reject the duplicates.
    """
    if not (username_or_alias or "").strip():
        return ToolResponse(MISSING_ORG_MESSAGE, True)

    if not fields:
        return ToolResponse(EMPTY_FIELDS_MESSAGE, True)

    resolver = resolver or get_metadata_connection

    try:
        connection = resolver(username_or_alias, directory)
        deployment = deploy_fields(connection, fields)

        permission_results = ""
        if permissions and deployment.success_fields:
            permission_results = assign_field_permissions(connection, deployment.success_fields, permissions)

        return summarize(deployment.success_fields, deployment.failed_fields, permission_results)
    except Exception as e:
        logger.error("create_custom_fields: %s", e, exc_info=True)
        return ToolResponse(f"Failed to create custom fields: {str(e) or type(e).__name__}", True)


@register_tool(
    annotations=ToolAnnotations(
        title="Create Custom Fields",
        destructiveHint=True,
        openWorldHint=False,
    )
)
def create_custom_fields(
    fields: FieldList,
    username_or_alias: str,
    directory: str,
    permissions: Optional[List[PermissionAssignment]] = None,
) -> str:
    """Create custom fields in bulk with automatic permission assignment.

    AGENT INSTRUCTIONS:
    - Creates custom fields on Salesforce objects and optionally assigns field-level security.
    - Always ask the user for permission assignments if not specified; it saves a second round trip.
    - Field API names should NOT include the __c suffix; it is added automatically.
    - Each Permission Set or Profile listed gets the specified access to ALL fields being created.

    EXAMPLE USAGE:
    Create a Text field called "External ID" on Account
    Create 3 fields on Contact: Email, Phone, and a Picklist for Status
    Create a Lookup field from Case to Account with read/edit access for the Sales Profile

    Args:
        fields: Array of field definitions to create (at least one)
        username_or_alias: Username or alias of the Salesforce org to deploy to
        directory: Salesforce DX project directory used to resolve the org alias
        permissions: Permission Set or Profile assignments applied to every created field

    Returns:
        str: JSON-encoded string. The outcome is reported through "success" in the
        envelope, not through the MCP isError flag; "success" is false when
        any field failed to create or the call itself failed.

        {
          "success": true,
          "message": "Successfully created 1 field(s):\\n  ✓ Account.Region__c"
        }
    """
    if not fields:
        return json.dumps({"success": False, "message": EMPTY_FIELDS_MESSAGE}, indent=2)

    response = run_create_custom_fields(fields, username_or_alias, directory, permissions)
    return json.dumps({"success": not response.is_error, "message": response.text}, indent=2, ensure_ascii=False)
