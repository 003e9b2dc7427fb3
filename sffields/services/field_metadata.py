"""Translate field definitions into Metadata API CustomField payloads."""
from typing import Any, Dict, List, Union

from sffields.config import CUSTOM_FIELD_SUFFIX
from sffields.models import DeleteConstraint, FieldDefinition, FieldType

# =============================================================================
# FIELD TYPE MAPPING
# =============================================================================

_FIELD_TYPE_MAP: Dict[str, str] = {
    "Text": "Text",
    "Number": "Number",
    "Checkbox": "Checkbox",
    "Date": "Date",
    "DateTime": "DateTime",
    "Email": "Email",
    "Phone": "Phone",
    "Url": "Url",
    "Currency": "Currency",
    "Percent": "Percent",
    "TextArea": "TextArea",
    "LongTextArea": "LongTextArea",
    "RichTextArea": "Html",
    "Picklist": "Picklist",
    "MultiselectPicklist": "MultiselectPicklist",
    "Lookup": "Lookup",
    "MasterDetail": "MasterDetail",
}


def map_field_type(field_type: Union[FieldType, str]) -> str:
    """Return the Metadata API type name for a logical field type.

    Unknown names are returned unchanged.
    """
    name = field_type.value if isinstance(field_type, FieldType) else field_type
    return _FIELD_TYPE_MAP.get(name, name)


# =============================================================================
# PAYLOAD BUILDERS
# =============================================================================

def full_field_name(object_name: str, field_name: str) -> str:
    """Return ``Object.Field__c``, adding the suffix only when it is missing."""
    if not field_name.endswith(CUSTOM_FIELD_SUFFIX):
        field_name = f"{field_name}{CUSTOM_FIELD_SUFFIX}"
    return f"{object_name}.{field_name}"


def _given_or(value: Any, default: Any) -> Any:
    return default if value is None else value


def _build_value_set(field: FieldDefinition) -> Dict[str, Any]:
    return {
        "restricted": True,
        "valueSetDefinition": {
            "sorted": False,
            "value": [
                {
                    "fullName": pv.value,
                    "default": pv.is_default or False,
                    "label": pv.value,
                }
                for pv in field.picklist_values
            ],
        },
    }


def build_field_metadata(field: FieldDefinition) -> Dict[str, Any]:
    """Build the CustomField attributes for one field definition.

    Only the options relevant to ``field.type`` are read. Attributes that
    resolve to None are left out of the result instead of being sent as nulls.
    """
    metadata: Dict[str, Any] = {
        "label": field.label,
        "type": map_field_type(field.type),
        "description": field.description,
        "inlineHelpText": field.help_text,
        "required": field.required or False,
        "unique": field.unique or False,
        "externalId": field.external_id or False,
    }

    t = field.type
    if t in (FieldType.TEXT, FieldType.TEXT_AREA):
        metadata["length"] = _given_or(field.length, 255)
    elif t in (FieldType.NUMBER, FieldType.CURRENCY, FieldType.PERCENT):
        metadata["precision"] = _given_or(field.precision, 18)
        metadata["scale"] = _given_or(field.scale, 2)
    elif t in (FieldType.LONG_TEXT_AREA, FieldType.RICH_TEXT_AREA):
        metadata["length"] = _given_or(field.length, 32768)
        metadata["visibleLines"] = _given_or(field.visible_lines, 6)
    elif t in (FieldType.PICKLIST, FieldType.MULTISELECT_PICKLIST):
        if field.picklist_values:
            metadata["valueSet"] = _build_value_set(field)
        if t == FieldType.MULTISELECT_PICKLIST:
            metadata["visibleLines"] = _given_or(field.visible_lines, 4)
    elif t in (FieldType.LOOKUP, FieldType.MASTER_DETAIL):
        metadata["referenceTo"] = field.reference_to
        metadata["relationshipName"] = _given_or(field.relationship_name, f"{field.field_api_name}s")
        metadata["relationshipLabel"] = _given_or(field.relationship_label, f"{field.label}s")
        if t == FieldType.LOOKUP:
            constraint = _given_or(field.delete_constraint, DeleteConstraint.SET_NULL)
            metadata["deleteConstraint"] = constraint.value

    return {k: v for k, v in metadata.items() if v is not None}


def build_metadata_items(fields: List[FieldDefinition]) -> List[Dict[str, Any]]:
    """One CustomField item per definition, keyed by its full name."""
    return [
        {
            "fullName": full_field_name(field.object_api_name, field.field_api_name),
            **build_field_metadata(field),
        }
        for field in fields
    ]
