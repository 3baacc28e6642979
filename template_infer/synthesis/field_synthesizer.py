# ==============================================
# FieldSynthesizer
# ==============================================
#
# PURPOSE:
#   Turn a resolved section (SectionAnalysis + its value tree, plus an
#   optional hint) into an ordered tuple of FieldSpecs.
#
# WHY THIS CLASS EXISTS:
#   The resolver only says WHAT a section is. The synthesizer decides
#   which concrete fields a content editor will fill in, with the
#   attributes the template validator requires for each type.
#
# PER-ARCHETYPE OUTPUT:
# ---------------------
#   singleFields          → one field per top-level key (recursive)
#   repeaterCollection    → one repeater, min 1, max = item count,
#                           children = union of item keys
#   nestedGroup           → one group named after the section
#   mediaGallery          → repeater of {image, caption, alt_text}
#   formSection           → repeater "form_fields" of {field_type, label,
#                           placeholder, required} + "submit_button"
#   externalCollectionRef → one field carrying source_prefix, no children
#
#   A high-confidence hint replaces all of the above: exactly the hinted
#   fields are emitted, in hint order, with the hinted types.
#   Raw keys the hint does not name are listed in one warning.
#
# DEFAULT ATTRIBUTES (per type):
# ------------------------------
#   text → type   longText → rows   richText → type   choice → options
#   boolean → default_value (when observed)   media → accept
#   repeater → min/max   relationship → filter
#   externalCollectionRef → source_prefix
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from template_infer.analysis import (
    AnalysisHint,
    ArchetypeTag,
    FieldType,
    HintField,
    SectionAnalysis,
    SemanticClassifier,
)
from template_infer.structure import NameNormalizer, RawValue
from .field_spec import FieldSpec


DEFAULT_RELATIONSHIP_FILTER = {"post_type": ["post"], "post_status": "publish"}


@dataclass(frozen=True)
class SynthesisResult:
    fields: Tuple[FieldSpec, ...]
    warnings: Tuple[str, ...] = ()


@dataclass
class _Context:
    """Per-call synthesis state."""
    section_name: str
    multilanguage: bool
    collection_context: bool
    warnings: List[str]


class FieldSynthesizer:
    """
    Builds FieldSpecs for one section at a time.

    Holds no per-section state between calls; the same input always
    produces the same FieldSpecs.
    """

    GALLERY_CHILDREN = (
        ("image", FieldType.MEDIA),
        ("caption", FieldType.TEXT),
        ("alt_text", FieldType.TEXT),
    )
    FORM_CHILDREN = (
        ("field_type", FieldType.CHOICE),
        ("label", FieldType.TEXT),
        ("placeholder", FieldType.TEXT),
        ("required", FieldType.BOOLEAN),
    )
    DEFAULT_FORM_ROLES = ("text", "email", "tel", "textarea")

    def __init__(
        self,
        classifier: SemanticClassifier = None,
        normalizer: NameNormalizer = None,
        api_prefix: str = "/api/v1/"
    ):
        self.classifier = classifier or SemanticClassifier()
        self.rules = self.classifier.rules
        self.normalizer = normalizer or NameNormalizer()
        self.api_prefix = api_prefix

    def synthesize(
        self,
        analysis: SectionAnalysis,
        value_tree: RawValue,
        hint: Optional[AnalysisHint] = None,
        multilanguage: bool = True
    ) -> Tuple[FieldSpec, ...]:
        """
        Synthesize the fields of one section.

        Args:
            analysis: The resolver's verdict for the section
            value_tree: The section's analyzed content
            hint: Parsed hint for the section, if any
            multilanguage: Template-level multilanguage flag

        Returns:
            Ordered tuple of FieldSpecs (may be empty)
        """
        return self.synthesize_with_warnings(analysis, value_tree, hint, multilanguage).fields

    def synthesize_with_warnings(
        self,
        analysis: SectionAnalysis,
        value_tree: RawValue,
        hint: Optional[AnalysisHint] = None,
        multilanguage: bool = True
    ) -> SynthesisResult:
        """Same as synthesize(), also returning the warnings recorded on the way."""
        section = self.normalizer.normalize(analysis.section_name)
        ctx = _Context(
            section_name=section,
            multilanguage=multilanguage,
            collection_context=self.rules.is_collection_name(section) is not None,
            warnings=[],
        )

        if hint is not None and hint.is_authoritative:
            fields = self._from_hint(hint, value_tree, ctx)
        else:
            builder = {
                ArchetypeTag.SINGLE_FIELDS: self._single_fields,
                ArchetypeTag.REPEATER_COLLECTION: self._repeater_collection,
                ArchetypeTag.NESTED_GROUP: self._nested_group,
                ArchetypeTag.MEDIA_GALLERY: self._media_gallery,
                ArchetypeTag.FORM_SECTION: self._form_section,
                ArchetypeTag.EXTERNAL_COLLECTION_REF: self._external_collection_ref,
            }[analysis.winning_archetype]
            fields = builder(analysis, value_tree, ctx)

        return SynthesisResult(tuple(fields), tuple(ctx.warnings))

    # ==============================================
    # Archetype builders
    # ==============================================

    def _single_fields(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        if tree.is_empty:
            return []
        if tree.is_object:
            return self._fields_from_object(tree, ctx)

        # A bare array or scalar root becomes one field named after the section
        built = self._field_for_value(ctx.section_name, tree, ctx, set())
        return [built] if built is not None else []

    def _repeater_collection(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        key, collection = self._collection_of(analysis, tree)
        if collection is None:
            ctx.warnings.append(
                f"Section '{ctx.section_name}' resolved to repeaterCollection without an array; "
                f"using single fields"
            )
            return self._single_fields(analysis, tree, ctx)

        name = self.normalizer.normalize(key) if key else ctx.section_name
        children = self._item_children(name, collection.items, ctx)
        if not children:
            ctx.warnings.append(f"Repeater '{name}' has no item fields; skipped")
            return []
        return [self._repeater(name, children, len(collection.items))]

    def _nested_group(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        if not tree.is_object:
            return self._single_fields(analysis, tree, ctx)
        children = self._fields_from_object(tree, ctx)
        if not children:
            return []
        return [self._spec(ctx.section_name, FieldType.GROUP, ctx, children=tuple(children))]

    def _media_gallery(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        key, _ = self._collection_of(analysis, tree)
        name = self.normalizer.normalize(key) if key else "images"
        children = tuple(
            self._spec(child_name, child_type, ctx)
            for child_name, child_type in self.GALLERY_CHILDREN
        )
        return [self._repeater(name, children, analysis.element_counts.image)]

    def _form_section(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        roles = analysis.input_roles or self.DEFAULT_FORM_ROLES
        children = []
        for child_name, child_type in self.FORM_CHILDREN:
            attributes = None
            if child_type is FieldType.CHOICE:
                attributes = {"options": [self._option(role) for role in roles]}
            elif child_type is FieldType.BOOLEAN:
                attributes = {"default_value": False}
            children.append(self._spec(child_name, child_type, ctx, attributes=attributes))

        fields = [self._repeater("form_fields", tuple(children), analysis.element_counts.input)]
        if analysis.has_submit:
            fields.append(self._spec("submit_button", FieldType.TEXT, ctx))
        return fields

    def _external_collection_ref(self, analysis: SectionAnalysis, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        key, _ = self._collection_of(analysis, tree)
        name = self.normalizer.normalize(key) if key else ctx.section_name
        return [self._external_ref(name, ctx)]

    # ==============================================
    # Hint-driven synthesis
    # ==============================================

    def _from_hint(self, hint: AnalysisHint, tree: RawValue, ctx: _Context) -> List[FieldSpec]:
        hint_fields, hint_warnings = hint.resolve_fields(self.normalizer)
        ctx.warnings.extend(hint_warnings)

        fields = []
        taken: Set[str] = set()
        used_keys: Set[str] = set()
        for hint_field in hint_fields:
            key, raw = self._raw_for_hint(tree, hint_field, len(hint_fields))
            if key is not None:
                used_keys.add(key)
            fields.append(self._hinted_field(hint_field, raw, ctx, taken))

        if tree.is_object:
            unnamed = [
                key for key, child in tree.iter_entries()
                if key not in used_keys and not child.is_absent
            ]
            if unnamed:
                ctx.warnings.append(
                    f"Hint for section '{ctx.section_name}' does not name raw keys: "
                    f"{', '.join(unnamed)}; not synthesized"
                )
        return fields

    def _hinted_field(
        self,
        hint_field: HintField,
        raw: Optional[RawValue],
        ctx: _Context,
        taken: Set[str]
    ) -> FieldSpec:
        name = self.normalizer.unique(hint_field.name, taken)
        field_type = hint_field.field_type

        if field_type is FieldType.EXTERNAL_COLLECTION_REF:
            return self._external_ref(name, ctx)

        if field_type.is_composite:
            children = tuple(self._children_from_shape(name, raw, ctx))
            if not children:
                kind = raw.kind.value if raw is not None else "missing"
                ctx.warnings.append(
                    f"Malformed-shape hint: '{hint_field.raw_name}' in section '{ctx.section_name}' "
                    f"is hinted as {field_type.value} but its raw value is {kind}; children left empty"
                )
            if field_type is FieldType.REPEATER:
                observed = len(raw.items) if raw is not None and raw.is_array else 1
                return self._repeater(name, children, hint_field.max_items or observed)
            return self._spec(name, field_type, ctx, children=children)

        sample = raw.value if raw is not None and raw.is_scalar else None
        return self._spec(name, field_type, ctx, sample=sample)

    def _raw_for_hint(
        self,
        tree: RawValue,
        hint_field: HintField,
        hint_count: int
    ) -> Tuple[Optional[str], Optional[RawValue]]:
        """Find the raw (key, value) a hinted field describes; key is None for the root."""
        if tree.is_object:
            wanted = hint_field.name
            wanted_singular = self.normalizer.singularize(wanted)
            for key, child in tree.iter_entries():
                if self.normalizer.normalize(key) == wanted:
                    return key, child
            for key, child in tree.iter_entries():
                if self.normalizer.singularize(key) in (wanted, wanted_singular):
                    return key, child
            return None, None
        # A single hinted field describes the whole root
        if hint_count == 1 and not tree.is_empty:
            return None, tree
        return None, None

    def _children_from_shape(self, name: str, raw: Optional[RawValue], ctx: _Context) -> List[FieldSpec]:
        if raw is None or raw.is_empty or raw.is_scalar:
            return []
        if raw.is_array:
            return self._item_children(name, raw.items, ctx)
        return self._fields_from_object(raw, ctx)

    # ==============================================
    # Recursive field building
    # ==============================================

    def _fields_from_object(self, obj: RawValue, ctx: _Context) -> List[FieldSpec]:
        fields = []
        taken: Set[str] = set()
        for key, child in obj.iter_entries():
            built = self._field_for_value(self.normalizer.normalize(key), child, ctx, taken)
            if built is not None:
                fields.append(built)
        return fields

    def _field_for_value(
        self,
        name: str,
        value: RawValue,
        ctx: _Context,
        taken: Set[str]
    ) -> Optional[FieldSpec]:
        """
        Build one field from a named value.

        Returns None (with a warning) for empty nested arrays and
        objects, which carry no shape to synthesize from.
        """
        if (value.is_array or value.is_object) and value.is_empty:
            ctx.warnings.append(f"Empty {value.kind.value} '{name}' in section '{ctx.section_name}'; skipped")
            return None

        classification = self.classifier.classify_value(name, value, ctx.collection_context)
        field_type = classification.field_type

        if field_type is FieldType.EXTERNAL_COLLECTION_REF:
            return self._external_ref(self.normalizer.unique(name, taken), ctx)

        if field_type is FieldType.GROUP:
            children = tuple(self._fields_from_object(value, ctx))
            if not children:
                ctx.warnings.append(f"Group '{name}' in section '{ctx.section_name}' has no fields; skipped")
                return None
            return self._spec(self.normalizer.unique(name, taken), FieldType.GROUP, ctx, children=children)

        if field_type is FieldType.REPEATER:
            children = tuple(self._item_children(name, value.items, ctx))
            if not children:
                ctx.warnings.append(f"Repeater '{name}' in section '{ctx.section_name}' has no item fields; skipped")
                return None
            return self._repeater(self.normalizer.unique(name, taken), children, len(value.items))

        return self._spec(self.normalizer.unique(name, taken), field_type, ctx, sample=value.value)

    def _item_children(self, name: str, items: Sequence[RawValue], ctx: _Context) -> List[FieldSpec]:
        """
        Children of a repeater built from its items.

        Object items contribute the union of their keys in first-seen
        order; when item shapes differ every child is made optional.
        Scalar or nested-array items become a single child named after
        the singular of the repeater.
        """
        present = [item for item in items if not item.is_absent]
        objects = [item for item in present if item.is_object and not item.is_empty]

        if objects:
            ordered_keys: List[str] = []
            representative: Dict[str, RawValue] = {}
            for item in objects:
                for key, child in item.iter_entries():
                    if key not in representative:
                        ordered_keys.append(key)
                        representative[key] = child
                    elif representative[key].is_absent and not child.is_absent:
                        representative[key] = child

            shapes_differ = len({item.shape_signature() for item in objects}) > 1
            children = []
            taken: Set[str] = set()
            for key in ordered_keys:
                built = self._field_for_value(self.normalizer.normalize(key), representative[key], ctx, taken)
                if built is None:
                    continue
                if shapes_differ:
                    built = self._optional(built)
                children.append(built)
            return children

        if not present:
            return []

        built = self._field_for_value(self.normalizer.singularize(name), present[0], ctx, set())
        return [built] if built is not None else []

    # ==============================================
    # FieldSpec constructors
    # ==============================================

    def _spec(
        self,
        name: str,
        field_type: FieldType,
        ctx: _Context,
        sample: Any = None,
        attributes: Optional[Dict[str, Any]] = None,
        children: Tuple[FieldSpec, ...] = ()
    ) -> FieldSpec:
        if attributes is None:
            attributes = self._default_attributes(name, field_type, sample)
        return FieldSpec(
            name=name,
            label=self.normalizer.label(name),
            type=field_type,
            multilanguage=ctx.multilanguage and field_type.is_textual,
            attributes=attributes,
            children=children,
        )

    def _repeater(self, name: str, children: Tuple[FieldSpec, ...], count: int) -> FieldSpec:
        return FieldSpec(
            name=name,
            label=self.normalizer.label(name),
            type=FieldType.REPEATER,
            multilanguage=False,
            attributes={"min": 1, "max": max(count, 1)},
            children=tuple(children),
        )

    def _external_ref(self, name: str, ctx: _Context) -> FieldSpec:
        return self._spec(
            name,
            FieldType.EXTERNAL_COLLECTION_REF,
            ctx,
            attributes={"source_prefix": self.source_prefix(name)},
        )

    def _optional(self, spec: FieldSpec) -> FieldSpec:
        attributes = dict(spec.attributes)
        attributes["is_required"] = False
        return FieldSpec(
            name=spec.name,
            label=spec.label,
            type=spec.type,
            multilanguage=spec.multilanguage,
            attributes=attributes,
            children=spec.children,
        )

    def source_prefix(self, name: str) -> str:
        """API path of the external collection backing a field."""
        slug = name.replace("_", "-")
        return f"{self.api_prefix.rstrip('/')}/{slug}"

    def _default_attributes(self, name: str, field_type: FieldType, sample: Any) -> Dict[str, Any]:
        if field_type is FieldType.TEXT:
            return {"type": self._input_type(name, sample)}
        if field_type is FieldType.LONG_TEXT:
            return {"rows": 3}
        if field_type is FieldType.RICH_TEXT:
            return {"type": "text"}
        if field_type is FieldType.CHOICE:
            options = [self._option(sample)] if isinstance(sample, str) and sample else []
            return {"options": options}
        if field_type is FieldType.BOOLEAN:
            return {"default_value": sample} if isinstance(sample, bool) else {}
        if field_type is FieldType.MEDIA:
            return {"accept": [self.classifier.media_accept(name, sample)]}
        if field_type is FieldType.RELATIONSHIP:
            return {"filter": {
                "post_type": list(DEFAULT_RELATIONSHIP_FILTER["post_type"]),
                "post_status": DEFAULT_RELATIONSHIP_FILTER["post_status"],
            }}
        if field_type is FieldType.EXTERNAL_COLLECTION_REF:
            return {"source_prefix": self.source_prefix(name)}
        if field_type is FieldType.REPEATER:
            return {"min": 1, "max": 1}
        return {}

    def _input_type(self, name: str, sample: Any) -> str:
        tokens = name.split("_")
        text = sample if isinstance(sample, str) else ""
        if "email" in tokens or ("@" in text and " " not in text.strip()):
            return "email"
        if any(token in ("phone", "tel", "mobile") for token in tokens):
            return "tel"
        if any(token in ("url", "href", "website") for token in tokens) or text.startswith(("http://", "https://")):
            return "url"
        return "text"

    def _option(self, value: Any) -> Dict[str, str]:
        text = str(value)
        return {"label": self.normalizer.label(text), "value": text}

    def _collection_of(self, analysis: SectionAnalysis, tree: RawValue) -> Tuple[str, Optional[RawValue]]:
        """The array a collection archetype is built from, and its key."""
        if tree.is_array:
            return "", tree
        if not tree.is_object:
            return "", None
        if analysis.collection_key:
            child = tree.get(analysis.collection_key)
            if child is not None and child.is_array:
                return analysis.collection_key, child
        for key, child in tree.iter_entries():
            if child.is_array and not child.is_empty:
                return key, child
        return "", None
