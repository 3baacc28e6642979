# ==============================================
# Decision (Enums & Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of classification and
#   section resolution, plus the thresholds that control how the
#   resolver decides.
#
# WHY THIS FILE EXISTS:
#   Separating data classes from logic keeps the resolver clean.
#   These types are also used by Topic 3 (Synthesis) to know which
#   fields to build, and by Topic 4 (Template) to render and store
#   the per-section reasoning.
#
# ENUMS:
# ------
# - FieldType(Enum)        → closed set of synthesized field types
# - ArchetypeTag(Enum)     → structural category a section resolves to
# - ConfidenceLabel(Enum)  → confidence of an externally supplied hint
# - MappingKind(Enum)      → whether a hinted section is built-in or custom
#
# CLASSES:
# --------
# - ElementCounts (dataclass)  → text / image / button / input element tallies
# - SectionAnalysis (frozen dataclass)
#     The resolver's verdict for one section: element counts, media
#     ratio, per-archetype scores, the winning archetype and a
#     human-readable reasoning trail.
#
# - ResolverThresholds (dataclass)
#     Minimum score each archetype must reach to win.
#
# ==============================================

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


class FieldType(Enum):
    """Closed enumeration of synthesized field types."""
    TEXT = "text"
    LONG_TEXT = "longText"
    RICH_TEXT = "richText"
    CHOICE = "choice"
    BOOLEAN = "boolean"
    MEDIA = "media"
    REPEATER = "repeater"
    GROUP = "group"
    RELATIONSHIP = "relationship"
    EXTERNAL_COLLECTION_REF = "externalCollectionRef"
    TABLE = "table"

    @property
    def is_composite(self) -> bool:
        """Composite types own an ordered list of child fields."""
        return self in COMPOSITE_TYPES

    @property
    def is_textual(self) -> bool:
        """Textual types vary per language when the template is multilanguage."""
        return self in TEXTUAL_TYPES


COMPOSITE_TYPES = frozenset({FieldType.REPEATER, FieldType.GROUP, FieldType.TABLE})
TEXTUAL_TYPES = frozenset({FieldType.TEXT, FieldType.LONG_TEXT, FieldType.RICH_TEXT})


class ArchetypeTag(Enum):
    """
    Structural category of a section.

    Declaration order is NOT the priority order; see ARCHETYPE_PRIORITY.
    """
    SINGLE_FIELDS = "singleFields"
    REPEATER_COLLECTION = "repeaterCollection"
    NESTED_GROUP = "nestedGroup"
    MEDIA_GALLERY = "mediaGallery"
    FORM_SECTION = "formSection"
    EXTERNAL_COLLECTION_REF = "externalCollectionRef"


# Highest priority first. The first archetype whose score clears its
# threshold wins; SINGLE_FIELDS is the fallback.
ARCHETYPE_PRIORITY: Tuple[ArchetypeTag, ...] = (
    ArchetypeTag.EXTERNAL_COLLECTION_REF,
    ArchetypeTag.FORM_SECTION,
    ArchetypeTag.MEDIA_GALLERY,
    ArchetypeTag.REPEATER_COLLECTION,
    ArchetypeTag.NESTED_GROUP,
    ArchetypeTag.SINGLE_FIELDS,
)


class ConfidenceLabel(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MappingKind(Enum):
    BUILT_IN = "builtIn"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ElementCounts:
    """Tallies of leaf elements found while walking a section."""
    text: int = 0
    image: int = 0
    button: int = 0
    input: int = 0

    @property
    def total(self) -> int:
        return self.text + self.image + self.button + self.input

    def to_dict(self) -> Dict[str, int]:
        return {
            "text": self.text,
            "image": self.image,
            "button": self.button,
            "input": self.input,
        }


@dataclass(frozen=True)
class SectionAnalysis:
    """
    The resolver's verdict for a single section.

    Created once per section by the SectionResolver and never mutated;
    the synthesizer reads it to decide which FieldSpecs to build.
    """

    # --- Identity ---
    section_name: str

    # --- Observed structure ---
    element_counts: ElementCounts = field(default_factory=ElementCounts)
    has_repeating_pattern: bool = False
    media_ratio: float = 0.0  # image elements / total elements, 0.0-1.0
    input_roles: Tuple[str, ...] = ()  # distinct input roles, in discovery order
    has_submit: bool = False
    has_see_more: bool = False

    # --- Verdict ---
    scores: Dict[ArchetypeTag, float] = field(default_factory=dict)
    winning_archetype: ArchetypeTag = ArchetypeTag.SINGLE_FIELDS
    collection_key: str = ""  # key of the unwrapped collection, "" if the root itself
    hint_applied: bool = False

    # --- Reasoning ---
    reasoning: Tuple[str, ...] = ()  # human-readable score contributions
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the analysis to a dictionary for reports.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "section_name": self.section_name,
            "element_counts": self.element_counts.to_dict(),
            "has_repeating_pattern": self.has_repeating_pattern,
            "media_ratio": round(self.media_ratio, 4),
            "input_roles": list(self.input_roles),
            "has_submit": self.has_submit,
            "has_see_more": self.has_see_more,
            "scores": {tag.value: round(score, 4) for tag, score in self.scores.items()},
            "winning_archetype": self.winning_archetype.value,
            "collection_key": self.collection_key,
            "hint_applied": self.hint_applied,
            "reasoning": list(self.reasoning),
            "warnings": list(self.warnings),
        }


@dataclass
class ResolverThresholds:
    """
    Minimum scores each archetype must reach to win a section.

    SINGLE_FIELDS has no threshold: it wins whenever nothing else clears.
    """

    external_collection_ref: float = 0.8
    form_section: float = 0.9
    media_gallery: float = 0.8
    repeater_collection: float = 0.7
    nested_group: float = 0.6

    def for_archetype(self, archetype: ArchetypeTag) -> float:
        return {
            ArchetypeTag.EXTERNAL_COLLECTION_REF: self.external_collection_ref,
            ArchetypeTag.FORM_SECTION: self.form_section,
            ArchetypeTag.MEDIA_GALLERY: self.media_gallery,
            ArchetypeTag.REPEATER_COLLECTION: self.repeater_collection,
            ArchetypeTag.NESTED_GROUP: self.nested_group,
            ArchetypeTag.SINGLE_FIELDS: 0.0,
        }[archetype]
