# ==============================================
# AnalysisHint
# ==============================================
#
# PURPOSE:
#   Parse and validate the optional, externally supplied per-section
#   hint (detected field names + identified field types) and resolve
#   it into typed HintField entries.
#
# HINT DOCUMENT SHAPE (per section):
# ----------------------------------
#   {
#     "detectedFields":       ["title", "logos (repeater, max 3)", "info (group)"],
#     "identifiedFieldTypes": ["input", "repeater", "group"],
#     "confidence":           "high" | "medium" | "low",
#     "mappingType":          "builtIn" | "custom"
#   }
#   snake_case spellings of the keys are accepted too.
#
# MARKERS:
# --------
#   "(repeater, max N)" / "(repeater)" → repeater (N caps the item count)
#   "(group)"                          → group
#   "(post_related)"                   → externalCollectionRef
#   Markers win over the identified type string.
#
# FUNCTIONS / CLASSES:
# --------------------
# - HintField (frozen dataclass)  → one resolved hinted field
# - AnalysisHint (frozen dataclass)
#     Raises HintLengthMismatchError on construction when the two
#     lists differ in length.
# - HintParseResult               → (hint | None, warnings)
# - load_hint(section_name, data) -> HintParseResult
#     Never raises for bad hint data: length mismatches and malformed
#     shapes become warnings and the section falls back to heuristics.
#
# ==============================================

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from template_infer.errors import HintLengthMismatchError, UnknownFieldTypeError
from template_infer.structure import NameNormalizer
from .decision import ConfidenceLabel, FieldType, MappingKind


MARKER_PATTERN = re.compile(r"^\s*(?P<name>.*?)\s*\((?P<marker>[^)]*)\)\s*$")
MAX_PATTERN = re.compile(r"max\s*[:=]?\s*(?P<count>\d+)", re.IGNORECASE)

# Accepted spellings for each field type (lower-cased)
TYPE_ALIASES: Dict[str, FieldType] = {
    "text": FieldType.TEXT,
    "input": FieldType.TEXT,
    "string": FieldType.TEXT,
    "longtext": FieldType.LONG_TEXT,
    "long_text": FieldType.LONG_TEXT,
    "textarea": FieldType.LONG_TEXT,
    "richtext": FieldType.RICH_TEXT,
    "rich_text": FieldType.RICH_TEXT,
    "texteditor": FieldType.RICH_TEXT,
    "choice": FieldType.CHOICE,
    "select": FieldType.CHOICE,
    "boolean": FieldType.BOOLEAN,
    "bool": FieldType.BOOLEAN,
    "toggle": FieldType.BOOLEAN,
    "media": FieldType.MEDIA,
    "image": FieldType.MEDIA,
    "repeater": FieldType.REPEATER,
    "group": FieldType.GROUP,
    "relationship": FieldType.RELATIONSHIP,
    "post_object": FieldType.RELATIONSHIP,
    "externalcollectionref": FieldType.EXTERNAL_COLLECTION_REF,
    "external_collection_ref": FieldType.EXTERNAL_COLLECTION_REF,
    "post_related": FieldType.EXTERNAL_COLLECTION_REF,
    "table": FieldType.TABLE,
}

MARKER_TYPES: Dict[str, FieldType] = {
    "repeater": FieldType.REPEATER,
    "group": FieldType.GROUP,
    "post_related": FieldType.EXTERNAL_COLLECTION_REF,
}


def resolve_field_type(type_name: str, field_name: str = "") -> FieldType:
    """
    Map a hint type string to a FieldType.

    Raises:
        UnknownFieldTypeError: if the string names no supported type
    """
    key = (type_name or "").strip().lower()
    if key in TYPE_ALIASES:
        return TYPE_ALIASES[key]
    raise UnknownFieldTypeError(type_name, field_name)


@dataclass(frozen=True)
class HintField:
    """One hinted field after marker parsing and type resolution."""
    raw_name: str                 # name as written, marker stripped
    name: str                     # snake_case
    field_type: FieldType
    marker: Optional[str] = None  # "repeater" | "group" | "post_related"
    max_items: Optional[int] = None


@dataclass(frozen=True)
class AnalysisHint:
    """
    Externally supplied, read-only classification data for one section.
    """

    section_name: str
    detected_field_names: Tuple[str, ...]
    detected_field_types: Tuple[str, ...]
    confidence: ConfidenceLabel = ConfidenceLabel.HIGH
    mapping_kind: MappingKind = MappingKind.CUSTOM

    def __post_init__(self):
        if len(self.detected_field_names) != len(self.detected_field_types):
            raise HintLengthMismatchError(
                self.section_name,
                len(self.detected_field_names),
                len(self.detected_field_types),
            )

    @property
    def is_authoritative(self) -> bool:
        """Only high-confidence hints with at least one field override heuristics."""
        return self.confidence is ConfidenceLabel.HIGH and bool(self.detected_field_names)

    @property
    def markers(self) -> List[str]:
        return [
            parsed[1]
            for parsed in (parse_marker(name) for name in self.detected_field_names)
            if parsed[1] is not None
        ]

    def resolve_fields(
        self,
        normalizer: NameNormalizer = None
    ) -> Tuple[Tuple[HintField, ...], Tuple[str, ...]]:
        """
        Resolve every (name, type) pair.

        Unknown type strings are downgraded to TEXT and reported in the
        returned warnings instead of raising.

        Returns:
            (hint fields in hint order, warnings)
        """
        normalizer = normalizer or NameNormalizer()
        fields: List[HintField] = []
        warnings: List[str] = []

        for raw, type_name in zip(self.detected_field_names, self.detected_field_types):
            base_name, marker, max_items = parse_marker(raw)
            if marker is not None:
                field_type = MARKER_TYPES[marker]
            else:
                try:
                    field_type = resolve_field_type(type_name, base_name)
                except UnknownFieldTypeError as e:
                    warnings.append(f"UnknownFieldTypeError: {e}; using text")
                    field_type = FieldType.TEXT

            fields.append(HintField(
                raw_name=base_name,
                name=normalizer.normalize(base_name),
                field_type=field_type,
                marker=marker,
                max_items=max_items,
            ))

        return tuple(fields), tuple(warnings)

    @classmethod
    def from_dict(cls, section_name: str, data: Dict[str, Any]) -> "AnalysisHint":
        """
        Build a hint from its document form.

        Raises:
            HintLengthMismatchError: if the two lists differ in length
            ValueError: if the lists are not lists of strings
        """
        names = _first(data, "detectedFields", "detected_fields", "detectedFieldNames") or []
        types = _first(data, "identifiedFieldTypes", "identified_field_types", "detectedFieldTypes") or []
        if not isinstance(names, list) or not isinstance(types, list):
            raise ValueError("detectedFields and identifiedFieldTypes must be lists")

        return cls(
            section_name=section_name,
            detected_field_names=tuple(str(name) for name in names),
            detected_field_types=tuple(str(type_name) for type_name in types),
            confidence=_parse_confidence(_first(data, "confidence", "confidenceLabel", "confidence_label")),
            mapping_kind=_parse_mapping_kind(_first(data, "mappingType", "mapping_type", "mappingKind")),
        )


@dataclass(frozen=True)
class HintParseResult:
    hint: Optional[AnalysisHint]
    warnings: Tuple[str, ...] = ()


def load_hint(section_name: str, data: Any) -> HintParseResult:
    """
    Parse a section's hint document without ever aborting the run.

    Args:
        section_name: Section the hint belongs to
        data: The hint document (dict) or None

    Returns:
        HintParseResult with the hint, or None plus the reason
    """
    if data is None:
        return HintParseResult(None)
    if isinstance(data, AnalysisHint):
        return HintParseResult(data)
    if not isinstance(data, dict):
        return HintParseResult(None, (
            f"Hint for section '{section_name}' is not an object; using heuristics",
        ))
    try:
        return HintParseResult(AnalysisHint.from_dict(section_name, data))
    except HintLengthMismatchError as e:
        return HintParseResult(None, (f"HintLengthMismatchError: {e}; using heuristics",))
    except ValueError as e:
        return HintParseResult(None, (f"Malformed hint for section '{section_name}': {e}; using heuristics",))


def parse_marker(raw_name: str) -> Tuple[str, Optional[str], Optional[int]]:
    """
    Split "logos (repeater, max 3)" into ("logos", "repeater", 3).

    Unrecognized parenthesized text is left in the name.
    """
    match = MARKER_PATTERN.match(raw_name or "")
    if not match:
        return (raw_name or "").strip(), None, None

    marker_text = match.group("marker").strip().lower()
    marker = next(
        (key for key in MARKER_TYPES if marker_text.split(",")[0].strip() == key),
        None,
    )
    if marker is None:
        return raw_name.strip(), None, None

    max_match = MAX_PATTERN.search(marker_text)
    max_items = int(max_match.group("count")) if max_match else None
    return match.group("name").strip(), marker, max_items


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_confidence(value: Any) -> ConfidenceLabel:
    # A missing label counts as high
    if value is None:
        return ConfidenceLabel.HIGH
    try:
        return ConfidenceLabel(str(value).strip().lower())
    except ValueError:
        return ConfidenceLabel.LOW


def _parse_mapping_kind(value: Any) -> MappingKind:
    if value is None:
        return MappingKind.CUSTOM
    folded = str(value).strip().replace("-", "_").lower()
    if folded in ("builtin", "built_in"):
        return MappingKind.BUILT_IN
    return MappingKind.CUSTOM
