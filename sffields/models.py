"""Input models for the custom field tools.

Attribute names are snake_case; the camelCase aliases are what MCP clients
send, matching the Salesforce naming they already know.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FieldType(str, Enum):
    """Logical field types accepted by create_custom_fields."""

    TEXT = "Text"
    NUMBER = "Number"
    CHECKBOX = "Checkbox"
    DATE = "Date"
    DATETIME = "DateTime"
    EMAIL = "Email"
    PHONE = "Phone"
    URL = "Url"
    CURRENCY = "Currency"
    PERCENT = "Percent"
    TEXT_AREA = "TextArea"
    LONG_TEXT_AREA = "LongTextArea"
    RICH_TEXT_AREA = "RichTextArea"
    PICKLIST = "Picklist"
    MULTISELECT_PICKLIST = "MultiselectPicklist"
    LOOKUP = "Lookup"
    MASTER_DETAIL = "MasterDetail"


class DeleteConstraint(str, Enum):
    """What happens to a lookup when the referenced record is deleted."""

    SET_NULL = "SetNull"
    RESTRICT = "Restrict"
    CASCADE = "Cascade"


class _AliasedModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PicklistValue(_AliasedModel):
    value: str = Field(description="The picklist value")
    is_default: Optional[bool] = Field(
        default=None, alias="isDefault", description="Whether this is the default value"
    )


class FieldDefinition(_AliasedModel):
    """A single custom field to create."""

    object_api_name: str = Field(
        alias="objectApiName", description="API name of the object (e.g., Account, MyObject__c)"
    )
    field_api_name: str = Field(
        alias="fieldApiName", description="API name of the field without __c suffix (e.g., MyField)"
    )
    label: str = Field(description="Field label displayed to users")
    type: FieldType = Field(description="Field data type")
    description: Optional[str] = Field(default=None, description="Field description")
    help_text: Optional[str] = Field(
        default=None, alias="helpText", description="Inline help text for the field"
    )
    required: Optional[bool] = Field(default=None, description="Whether the field is required")
    unique: Optional[bool] = Field(default=None, description="Whether values must be unique")
    external_id: Optional[bool] = Field(
        default=None, alias="externalId", description="Whether this field is an external ID"
    )

    # Type-specific options
    length: Optional[int] = Field(default=None, description="Length for Text fields (max 255)")
    precision: Optional[int] = Field(
        default=None, description="Total digits for Number/Currency/Percent"
    )
    scale: Optional[int] = Field(default=None, description="Decimal places for Number/Currency/Percent")
    visible_lines: Optional[int] = Field(
        default=None, alias="visibleLines", description="Visible lines for TextArea/LongTextArea"
    )
    picklist_values: Optional[List[PicklistValue]] = Field(
        default=None, alias="picklistValues", description="Values for Picklist/MultiselectPicklist"
    )
    reference_to: Optional[str] = Field(
        default=None, alias="referenceTo", description="Target object for Lookup/MasterDetail"
    )
    relationship_name: Optional[str] = Field(
        default=None, alias="relationshipName", description="Relationship name for Lookup/MasterDetail"
    )
    relationship_label: Optional[str] = Field(
        default=None, alias="relationshipLabel", description="Relationship label for Lookup/MasterDetail"
    )
    delete_constraint: Optional[DeleteConstraint] = Field(
        default=None, alias="deleteConstraint", description="Delete behavior for Lookup"
    )


class PermissionAssignment(_AliasedModel):
    """Field-level access granted on every created field to one Permission Set or Profile."""

    permission_set_or_profile: str = Field(
        alias="permissionSetOrProfile", description="API name of the Permission Set or Profile"
    )
    readable: bool = Field(description="Whether the field is readable")
    editable: bool = Field(description="Whether the field is editable")
