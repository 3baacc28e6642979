# ==============================================
# Custom Field Generator
# ==============================================
#
# PURPOSE:
#   Build a single AntiCMS v3 field by hand, outside the inference
#   pipeline. Used by the `field` CLI command.
#
# RULES:
# ------
#   1. field_type must be one of FIELD_TYPES, else UnknownFieldTypeError
#   2. Required attributes the caller leaves out get defaults:
#        type → "text"          accept → ["image"]
#        options / fields / columns → []
#        filter → {"post_type": ["post"], "post_status": "publish"}
#        api_prefix → the configured API prefix
#   3. Engine spellings (default_value, input_type, ...) are renamed to
#      the AntiCMS ones; attributes the type does not allow are dropped
#   4. "attribute" is present only when non-empty
#
# ==============================================

from typing import Any, Dict, List, Mapping, Optional

from template_infer.errors import UnknownFieldTypeError
from template_infer.structure import NameNormalizer
from .field_types import ATTRIBUTE_ALIASES, FIELD_TYPES


DEFAULT_API_PREFIX = "/api/v1/"

# Extra spellings accepted for the input "type" attribute
INPUT_TYPE_ALIASES = ("input_type", "inputType")


def _required_defaults(api_prefix: str) -> Dict[str, Any]:
    return {
        "type": "text",
        "accept": ["image"],
        "options": [],
        "fields": [],
        "columns": [],
        "filter": {"post_type": ["post"], "post_status": "publish"},
        "api_prefix": api_prefix,
    }


def _canonical(key: str) -> str:
    if key in INPUT_TYPE_ALIASES:
        return "type"
    return ATTRIBUTE_ALIASES.get(key, key)


def unsupported_attributes(field_type: str, attributes: Optional[Mapping[str, Any]]) -> List[str]:
    """Keys of `attributes` that `field_type` does not allow."""
    if field_type not in FIELD_TYPES:
        raise UnknownFieldTypeError(field_type)
    allowed = FIELD_TYPES[field_type].attributes
    return [key for key in (attributes or {}) if _canonical(key) not in allowed]


def generate_custom_field(
    name: str,
    field_type: str,
    label: Optional[str] = None,
    multilanguage: bool = False,
    attributes: Optional[Mapping[str, Any]] = None,
    api_prefix: str = DEFAULT_API_PREFIX
) -> Dict[str, Any]:
    """
    Generate one AntiCMS v3 field definition.

    Args:
        name: Field identifier (normalized to snake_case)
        field_type: AntiCMS field type, e.g. "input" or "repeater"
        label: Human-readable label (derived from the name if omitted)
        multilanguage: Field-level multilanguage flag
        attributes: Field-specific attributes
        api_prefix: Default api_prefix for post_related fields

    Returns:
        {"name", "label", "field", "multilanguage", "attribute"?}

    Raises:
        UnknownFieldTypeError: field_type is not a supported AntiCMS type
    """
    definition = FIELD_TYPES.get(field_type)
    if definition is None:
        raise UnknownFieldTypeError(field_type, name)

    normalizer = NameNormalizer()
    field_name = normalizer.normalize(name)
    field: Dict[str, Any] = {
        "name": field_name,
        "label": label or normalizer.label(field_name),
        "field": field_type,
        "multilanguage": multilanguage,
    }

    provided = {
        _canonical(key): value
        for key, value in (attributes or {}).items()
        if value is not None
    }

    attribute: Dict[str, Any] = {}
    defaults = _required_defaults(api_prefix)
    for key in definition.required_attributes:
        attribute[key] = provided.get(key, defaults[key])
    for key in definition.attributes:
        if key in provided:
            attribute[key] = provided[key]

    if attribute:
        field["attribute"] = attribute
    return field
