# ==============================================
# TemplateAssembler
# ==============================================
#
# PURPOSE:
#   Embed the per-section FieldSpecs into an AntiCMS v3 template
#   document.
#
# OUTPUT SHAPE:
# -------------
#   {
#     "name", "label", "is_content", "multilanguage", "is_multiple",
#     "description",
#     "components": [
#       {"keyName": "hero", "label": "Hero Section", "section": "1",
#        "fields": [{"name", "label", "field", "multilanguage"?, "attribute"?}]}
#     ]
#   }
#
# RULES:
# ------
#   1. Section ordinals count the EMITTED components from "1"
#   2. Layout sections (navigation, header, footer) are skipped when
#      exclude_layout_sections is set
#   3. Composite children go into attribute.fields (attribute.columns
#      for tables)
#   4. "multilanguage" is written for textual fields only
#
# ==============================================

from typing import Any, Dict, Optional, Sequence, Tuple

from template_infer.config import DEFAULT_LAYOUT_SECTIONS
from template_infer.structure import NameNormalizer
from template_infer.synthesis import FieldSpec
from .field_types import ATTRIBUTE_ALIASES, CHILDREN_ATTRIBUTE, anticms_field_name


SectionFields = Tuple[str, Sequence[FieldSpec]]


class TemplateAssembler:
    """Renders ordered (section name, FieldSpecs) pairs as an AntiCMS v3 template."""

    def __init__(
        self,
        exclude_layout_sections: bool = True,
        layout_sections: Sequence[str] = DEFAULT_LAYOUT_SECTIONS
    ):
        self.exclude_layout_sections = exclude_layout_sections
        self.layout_sections = tuple(layout_sections)
        self.normalizer = NameNormalizer()

    def assemble(
        self,
        name: str,
        label: str,
        sections: Sequence[SectionFields],
        multilanguage: bool = True,
        is_content: bool = False,
        is_multiple: bool = False,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the template document.

        Args:
            name: Template name (normalized to snake_case)
            label: Template label
            sections: (section name, fields) pairs in document order
            multilanguage: Template-level multilanguage flag
            is_content: AntiCMS is_content flag
            is_multiple: AntiCMS is_multiple flag
            description: Defaults to "Template for <label>"

        Returns:
            The template as plain JSON-compatible data
        """
        components = []
        for section_name, fields in sections:
            if self.is_layout_section(section_name):
                continue
            components.append(self.component(section_name, len(components) + 1, fields))

        return {
            "name": self.normalizer.normalize(name),
            "label": label,
            "is_content": is_content,
            "multilanguage": multilanguage,
            "is_multiple": is_multiple,
            "description": description or f"Template for {label}",
            "components": components,
        }

    def is_layout_section(self, section_name: str) -> bool:
        if not self.exclude_layout_sections:
            return False
        return self.normalizer.normalize(section_name) in self.layout_sections

    def component(self, section_name: str, ordinal: int, fields: Sequence[FieldSpec]) -> Dict[str, Any]:
        key_name = self.normalizer.normalize(section_name)
        label = self.normalizer.label(key_name)
        if not key_name.endswith("section"):
            label = f"{label} Section"
        return {
            "keyName": key_name,
            "label": label,
            "section": str(ordinal),
            "fields": [self.field(spec) for spec in fields],
        }

    def field(self, spec: FieldSpec) -> Dict[str, Any]:
        """Render one FieldSpec (recursively) as an AntiCMS field."""
        field_name = anticms_field_name(spec.type)
        rendered: Dict[str, Any] = {
            "name": spec.name,
            "label": spec.label,
            "field": field_name,
        }
        if spec.type.is_textual:
            rendered["multilanguage"] = spec.multilanguage

        attribute = {
            ATTRIBUTE_ALIASES.get(key, key): value
            for key, value in spec.attributes.items()
        }
        children_key = CHILDREN_ATTRIBUTE.get(field_name)
        if children_key is not None:
            attribute[children_key] = [self.field(child) for child in spec.children]

        if attribute:
            rendered["attribute"] = attribute
        return rendered

