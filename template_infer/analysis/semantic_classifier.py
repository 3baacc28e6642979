# ==============================================
# SemanticClassifier
# ==============================================
#
# PURPOSE:
#   Given a field's name and its structural kind, assign a candidate
#   FieldType using keyword rules. This is the "naming brain": it
#   guesses designer intent from names like "hero_title" or "logo".
#
# CLASS: SemanticClassifier
# -------------------------
#   Stateless: name in, Classification out. Never fails: a name that
#   matches nothing resolves to the fallback "text" type.
#
#   Constructor:
#   ------------
#   - __init__(rules: ClassificationRules, long_text_min_length: int = 120)
#
#   Methods:
#   --------
#   - classify_name(name, kind, sample=None, item_field_count=0,
#                   collection_context=False) -> Classification
#       Applies rules in order:
#
#       RULE 1: OBJECT → group
#       RULE 2: ARRAY  → externalCollectionRef when items carry ≥3 fields
#               inside a collection context, otherwise repeater
#       RULE 3: SCALAR keyword tables, first match wins:
#               media → longText → text → boolean → choice
#               ("text" and "subtitle" need a sample longer than a caption)
#       RULE 4: SCALAR sample heuristics (media file, bool, long string)
#       RULE 5: fallback → text
#
#   - classify_value(name, value: RawValue, collection_context=False)
#       Convenience wrapper that derives kind / sample / item field
#       count from a RawValue.
#
#   - media_accept(name, sample) -> str     ("image" | "video" | "document")
#   - looks_like_media(sample) -> bool
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Optional

from template_infer.structure import RawValue, ValueKind
from .decision import FieldType
from .rules import ClassificationRules, DEFAULT_RULES


@dataclass(frozen=True)
class Classification:
    """Candidate type for one field plus what triggered it."""
    field_type: FieldType
    matched_keyword: Optional[str] = None
    rule: str = "fallback"


class SemanticClassifier:
    """
    Keyword-driven field type classifier.

    Keyword tables come from an injected ClassificationRules value so
    tests can substitute rule sets freely.
    """

    # Minimum per-item field count for an array to be an external collection
    MIN_COLLECTION_ITEM_FIELDS = 3
    # Samples up to this many words are too short for a sample-gated keyword
    SHORT_TEXT_MAX_WORDS = 4

    def __init__(
        self,
        rules: ClassificationRules = None,
        long_text_min_length: int = 120
    ):
        self.rules = rules or DEFAULT_RULES
        self.long_text_min_length = long_text_min_length

        # Scalar keyword tables in evaluation order
        self._scalar_tables = (
            (FieldType.MEDIA, "media", self.rules.media_keywords),
            (FieldType.LONG_TEXT, "longText", self.rules.long_text_keywords),
            (FieldType.TEXT, "text", self.rules.text_keywords),
            (FieldType.BOOLEAN, "boolean", self.rules.boolean_keywords),
            (FieldType.CHOICE, "choice", self.rules.choice_keywords),
        )

    def classify_name(
        self,
        name: str,
        kind: ValueKind,
        sample: Any = None,
        item_field_count: int = 0,
        collection_context: bool = False
    ) -> Classification:
        """
        Classify a single field name.

        Args:
            name: Field name, ideally already snake_case
            kind: Structural kind of the field's value
            sample: Scalar payload, used by the sample heuristics
            item_field_count: For arrays, the largest per-item field count
            collection_context: True when the enclosing section looks like
                                a listing backed by an external collection

        Returns:
            A Classification with the candidate type and matched keyword
        """
        # RULE 1: OBJECT → group
        if kind is ValueKind.OBJECT:
            return Classification(FieldType.GROUP, None, "object")

        # RULE 2: ARRAY → external collection or repeater
        if kind is ValueKind.ARRAY:
            if collection_context and item_field_count >= self.MIN_COLLECTION_ITEM_FIELDS:
                keyword = self.rules.is_collection_name(name)
                return Classification(FieldType.EXTERNAL_COLLECTION_REF, keyword, "array-collection")
            return Classification(FieldType.REPEATER, None, "array")

        # RULE 3: SCALAR keyword tables, first match wins
        for field_type, rule_name, keywords in self._scalar_tables:
            if field_type is FieldType.LONG_TEXT:
                keyword = self._long_text_keyword(name, sample)
            else:
                keyword = self.rules.find_keyword(name, keywords)
            if keyword is not None:
                return Classification(field_type, keyword, rule_name)

        # RULE 4: sample heuristics
        if isinstance(sample, bool):
            return Classification(FieldType.BOOLEAN, None, "bool-sample")
        if self.looks_like_media(sample):
            return Classification(FieldType.MEDIA, None, "media-sample")
        if isinstance(sample, str) and len(sample) >= self.long_text_min_length:
            return Classification(FieldType.LONG_TEXT, None, "long-sample")

        # RULE 5: fallback
        return Classification(FieldType.TEXT, None, "fallback")

    def classify_value(
        self,
        name: str,
        value: RawValue,
        collection_context: bool = False
    ) -> Classification:
        """Classify a field from its analyzed value."""
        item_field_count = 0
        if value.is_array and value.items:
            item_field_count = max(item.field_count for item in value.items)
        return self.classify_name(
            name,
            value.kind,
            sample=value.value if value.is_scalar else None,
            item_field_count=item_field_count,
            collection_context=collection_context,
        )

    def _long_text_keyword(self, name: str, sample: Any) -> Optional[str]:
        """
        First long_text keyword in `name`. Sample-gated keywords such as
        "text" only match when the sample is not a short caption.
        """
        lowered = name.lower()
        for keyword in self.rules.long_text_keywords:
            if keyword not in lowered:
                continue
            if keyword in self.rules.sample_gated_long_text_keywords and self._is_short_sample(sample):
                continue
            return keyword
        return None

    def _is_short_sample(self, sample: Any) -> bool:
        if sample is None:
            return False
        if isinstance(sample, str):
            return len(sample.split()) <= self.SHORT_TEXT_MAX_WORDS
        return True

    def looks_like_media(self, sample: Any) -> bool:
        """True if a scalar looks like a path/URL to an image, video or document."""
        return self._extension_kind(sample) is not None

    def media_accept(self, name: str, sample: Any = None) -> str:
        """Media category accepted by a media field: image, video or document."""
        from_sample = self._extension_kind(sample)
        if from_sample:
            return from_sample
        lowered = name.lower()
        if "video" in lowered:
            return "video"
        if any(word in lowered for word in ("document", "file", "pdf", "brochure")):
            return "document"
        return "image"

    def _extension_kind(self, sample: Any) -> Optional[str]:
        if not isinstance(sample, str) or not sample:
            return None
        # Drop query strings / fragments from URLs before looking at the suffix
        path = sample.split("?", 1)[0].split("#", 1)[0].lower()
        if path.endswith(self.rules.image_extensions):
            return "image"
        if path.endswith(self.rules.video_extensions):
            return "video"
        if path.endswith(self.rules.document_extensions):
            return "document"
        return None
