# ==============================================
# Structural Validator
# ==============================================
#
# PURPOSE:
#   Check an assembled AntiCMS v3 template document against the
#   required-key contract: template keys, component keys, field keys,
#   supported field types and required attributes per type.
#
# CHECKS:
# -------
#   ERRORS (valid = False):
#     - missing template key (name, label, is_content, multilanguage,
#       is_multiple, description, components)
#     - components is not a list
#     - missing component key (keyName, label, section, fields)
#     - missing field key (name, label, field)
#     - unsupported field type
#     - missing attribute object / required attribute
#   WARNINGS:
#     - duplicate field names among siblings
#     - composite field with no children
#
#   Nested fields (attribute.fields / attribute.columns) are checked
#   the same way, with their path in the message.
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .field_types import CHILDREN_ATTRIBUTE, FIELD_TYPES


REQUIRED_TEMPLATE_KEYS = (
    "name", "label", "is_content", "multilanguage", "is_multiple", "description", "components",
)
REQUIRED_COMPONENT_KEYS = ("keyName", "label", "section", "fields")
REQUIRED_FIELD_KEYS = ("name", "label", "field")


@dataclass
class ValidationResult:
    """Outcome of validating one template document."""
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def validate_template(template: Any) -> ValidationResult:
    """
    Validate an AntiCMS v3 template document.

    Args:
        template: Parsed template JSON

    Returns:
        ValidationResult with every problem found (never raises)
    """
    result = ValidationResult()

    if not isinstance(template, dict):
        result.error("Template must be an object")
        return result

    for key in REQUIRED_TEMPLATE_KEYS:
        if key not in template:
            result.error(f"Missing required key: {key}")

    components = template.get("components")
    if not isinstance(components, list):
        result.error("Components must be an array")
        return result

    for index, component in enumerate(components, start=1):
        where = f"Component {index}"
        if not isinstance(component, dict):
            result.error(f"{where} must be an object")
            continue
        for key in REQUIRED_COMPONENT_KEYS:
            if key not in component:
                result.error(f"{where} missing required key: {key}")

        fields = component.get("fields")
        if isinstance(fields, list):
            _validate_fields(fields, where, result)
        elif "fields" in component:
            result.error(f"{where} fields must be an array")

    return result


def _validate_fields(fields: List[Any], where: str, result: ValidationResult) -> None:
    seen = set()
    for index, spec in enumerate(fields, start=1):
        field_where = f"{where}, field {index}"
        if not isinstance(spec, dict):
            result.error(f"{field_where} must be an object")
            continue

        for key in REQUIRED_FIELD_KEYS:
            if key not in spec:
                result.error(f"{field_where} missing required key: {key}")

        name = spec.get("name")
        if name in seen:
            result.warnings.append(f"{field_where} duplicates sibling name: {name}")
        elif name is not None:
            seen.add(name)

        field_type = spec.get("field")
        if field_type is None:
            continue
        definition = FIELD_TYPES.get(field_type)
        if definition is None:
            result.error(f"{field_where} has unsupported field type: {field_type}")
            continue

        attribute = spec.get("attribute")
        if definition.required_attributes and not isinstance(attribute, dict):
            result.error(f"{field_where} ({field_type}) missing required attribute object")
            continue
        if isinstance(attribute, dict):
            for required in definition.required_attributes:
                if required not in attribute:
                    result.error(f"{field_where} ({field_type}) missing required attribute: {required}")

        children_key = CHILDREN_ATTRIBUTE.get(field_type)
        if children_key and isinstance(attribute, dict):
            children = attribute.get(children_key)
            if isinstance(children, list):
                if not children:
                    result.warnings.append(f"{field_where} ({field_type}) has no {children_key}")
                _validate_fields(children, f"{field_where} ({name})", result)
