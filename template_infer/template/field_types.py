# ==============================================
# AntiCMS v3 Field Type Registry
# ==============================================
#
# PURPOSE:
#   The closed set of AntiCMS v3 field types with their allowed and
#   required attributes, plus the mapping from engine FieldTypes to
#   AntiCMS field names.
#
# TYPE MAP (FieldType → AntiCMS "field"):
# ---------------------------------------
#   text → input                 longText → textarea
#   richText → texteditor        choice → select
#   boolean → toggle             media → media
#   repeater → repeater          group → group
#   relationship → relationship  externalCollectionRef → post_related
#   table → table
#
#   post_object has no engine FieldType; it is accepted by the
#   validator and by hint parsing only.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from template_infer.analysis import FieldType


@dataclass(frozen=True)
class FieldTypeDefinition:
    attributes: Tuple[str, ...]
    required_attributes: Tuple[str, ...] = ()


FIELD_TYPES: Dict[str, FieldTypeDefinition] = {
    "input": FieldTypeDefinition(
        ("type", "is_required", "placeholder", "defaultValue", "maxLength", "minLength"),
        ("type",),
    ),
    "textarea": FieldTypeDefinition(
        ("rows", "cols", "max", "min", "placeholder", "is_required", "defaultValue", "caption"),
    ),
    "texteditor": FieldTypeDefinition(
        ("type", "rows", "cols", "max", "min", "placeholder", "is_required", "defaultValue", "caption"),
        ("type",),
    ),
    "select": FieldTypeDefinition(
        ("options", "is_required", "placeholder", "caption", "defaultValue"),
        ("options",),
    ),
    "toggle": FieldTypeDefinition(
        ("caption", "defaultValue"),
    ),
    "media": FieldTypeDefinition(
        ("accept", "resolution"),
        ("accept",),
    ),
    "repeater": FieldTypeDefinition(
        ("fields", "min", "max", "caption"),
        ("fields",),
    ),
    "group": FieldTypeDefinition(
        ("fields", "caption"),
        ("fields",),
    ),
    "relationship": FieldTypeDefinition(
        ("filter", "min", "max", "api_url", "caption", "is_required"),
        ("filter",),
    ),
    "post_object": FieldTypeDefinition(
        ("filter", "multiple", "caption", "is_required"),
        ("filter",),
    ),
    "post_related": FieldTypeDefinition(
        ("api_prefix", "caption", "is_required"),
        ("api_prefix",),
    ),
    "table": FieldTypeDefinition(
        ("columns", "min", "max", "caption", "is_required"),
        ("columns",),
    ),
}

ANTICMS_FIELD_NAMES: Dict[FieldType, str] = {
    FieldType.TEXT: "input",
    FieldType.LONG_TEXT: "textarea",
    FieldType.RICH_TEXT: "texteditor",
    FieldType.CHOICE: "select",
    FieldType.BOOLEAN: "toggle",
    FieldType.MEDIA: "media",
    FieldType.REPEATER: "repeater",
    FieldType.GROUP: "group",
    FieldType.RELATIONSHIP: "relationship",
    FieldType.EXTERNAL_COLLECTION_REF: "post_related",
    FieldType.TABLE: "table",
}

# Engine attribute names that are spelled differently in AntiCMS
ATTRIBUTE_ALIASES: Dict[str, str] = {
    "default_value": "defaultValue",
    "source_prefix": "api_prefix",
    "max_length": "maxLength",
    "min_length": "minLength",
}

# Attribute that holds the children of each composite AntiCMS type
CHILDREN_ATTRIBUTE: Dict[str, str] = {
    "repeater": "fields",
    "group": "fields",
    "table": "columns",
}


def anticms_field_name(field_type: FieldType) -> str:
    return ANTICMS_FIELD_NAMES[field_type]


def list_field_types() -> List[Dict[str, Any]]:
    """
    Describe every supported AntiCMS field type.

    Returns:
        [{"type", "attributes", "required_attributes"}, ...] in registry order
    """
    return [
        {
            "type": type_name,
            "attributes": list(definition.attributes),
            "required_attributes": list(definition.required_attributes),
        }
        for type_name, definition in FIELD_TYPES.items()
    ]
