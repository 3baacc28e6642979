# ==============================================
# TOPIC 4: TEMPLATE
# ==============================================
#
# This package turns synthesized FieldSpecs into an AntiCMS v3
# template document, validates it and moves documents on and off
# disk.
#
# Modules:
# --------
# - field_types.py    → AntiCMS field type registry and type map
# - custom_field.py   → Hand-built single AntiCMS field
# - assembler.py      → Sections + FieldSpecs → template document
# - validator.py      → Required-key and required-attribute checks
# - template_store.py → Save / load templates and analysis reports
# - loader.py         → Read metadata / hint documents (path or URL)
#
# ==============================================

from .field_types import (
    ANTICMS_FIELD_NAMES,
    FIELD_TYPES,
    FieldTypeDefinition,
    anticms_field_name,
    list_field_types,
)
from .custom_field import generate_custom_field, unsupported_attributes
from .assembler import TemplateAssembler
from .validator import ValidationResult, validate_template
from .template_store import TemplateStore
from .loader import load_document, split_document

__all__ = [
    "ANTICMS_FIELD_NAMES",
    "FIELD_TYPES",
    "FieldTypeDefinition",
    "anticms_field_name",
    "list_field_types",
    "generate_custom_field",
    "unsupported_attributes",
    "TemplateAssembler",
    "ValidationResult",
    "validate_template",
    "TemplateStore",
    "load_document",
    "split_document",
]
