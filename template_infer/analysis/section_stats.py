# ==============================================
# SectionStats & SectionObserver
# ==============================================
#
# PURPOSE:
#   Walk one section's RawValue tree and accumulate the evidence the
#   resolver scores: element counts, image aspect ratios, input roles,
#   submit / see-more affordances and repeated item shapes.
#
# WHY THIS CLASS EXISTS:
#   The resolver's score table is a list of independent predicates.
#   Computing the evidence once, up front, keeps every predicate a
#   cheap lookup that can be tested in isolation.
#
# CLASS: SectionStats (dataclass)
# -------------------------------
#   - text_count / image_count / button_count / input_count: int
#   - aspect_ratios: list[float]       → one entry per sized image
#   - input_roles: list[str]           → distinct roles, discovery order
#   - has_submit: bool
#   - see_more_phrase: str | None      → affordance that was found
#   - max_similar_elements: int        → largest group of same-shape items
#   - collection_key: str              → key of the unwrapped collection
#   - collection: RawValue | None      → root array, or sole array child
#
#   Computed Properties:
#   --------------------
#   - total_elements, media_ratio, has_repeating_pattern,
#     largest_shared_aspect_ratio_group
#
# CLASS: SectionObserver
# ----------------------
#   - observe(section_name, tree) -> SectionStats
#
# ==============================================

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from template_infer.structure import RawValue, NameNormalizer
from .decision import ElementCounts
from .rules import ClassificationRules, DEFAULT_RULES
from .semantic_classifier import SemanticClassifier


@dataclass
class SectionStats:
    """Evidence gathered from one section tree."""

    # --- Element tallies ---
    text_count: int = 0
    image_count: int = 0
    button_count: int = 0
    input_count: int = 0

    # --- Media evidence ---
    aspect_ratios: List[float] = field(default_factory=list)

    # --- Form evidence ---
    input_roles: List[str] = field(default_factory=list)
    has_submit: bool = False

    # --- Listing evidence ---
    see_more_phrase: Optional[str] = None
    max_similar_elements: int = 0

    # --- Collection candidate ---
    collection_key: str = ""
    collection: Optional[RawValue] = None

    @property
    def total_elements(self) -> int:
        return self.text_count + self.image_count + self.button_count + self.input_count

    @property
    def media_ratio(self) -> float:
        if self.total_elements == 0:
            return 0.0
        return self.image_count / self.total_elements

    @property
    def has_repeating_pattern(self) -> bool:
        return self.max_similar_elements >= 2

    @property
    def largest_shared_aspect_ratio_group(self) -> int:
        if not self.aspect_ratios:
            return 0
        return Counter(self.aspect_ratios).most_common(1)[0][1]

    def element_counts(self) -> ElementCounts:
        return ElementCounts(
            text=self.text_count,
            image=self.image_count,
            button=self.button_count,
            input=self.input_count,
        )

    def add_input_role(self, role: str) -> None:
        self.input_count += 1
        if role not in self.input_roles:
            self.input_roles.append(role)


class SectionObserver:
    """
    Walks a section tree once and returns its SectionStats.

    Scalars are classified into one element role each (button, input,
    image or text); objects that describe a form input are counted as
    a single input element and not descended into.
    """

    INPUT_TYPE_KEYS = ("type", "input_type", "field_type")
    INPUT_DESCRIPTOR_KEYS = ("label", "name", "placeholder", "required")
    SIZE_KEYS = ("width", "height")
    CTA_MAX_WORDS = 3

    def __init__(
        self,
        rules: ClassificationRules = None,
        classifier: SemanticClassifier = None,
        normalizer: NameNormalizer = None
    ):
        self.rules = rules or DEFAULT_RULES
        self.classifier = classifier or SemanticClassifier(self.rules)
        self.normalizer = normalizer or NameNormalizer()

    def observe(self, section_name: str, tree: RawValue) -> SectionStats:
        """
        Analyze a whole section.

        Args:
            section_name: Section name (used as the name of root scalars)
            tree: The section's analyzed value

        Returns:
            SectionStats for the section
        """
        stats = SectionStats()
        self._walk(self.normalizer.normalize(section_name), tree, stats)
        stats.collection_key, stats.collection = self._find_collection(tree)
        return stats

    # --- Tree walk ---

    def _walk(self, name: str, value: RawValue, stats: SectionStats) -> None:
        if value.is_scalar:
            self._observe_scalar(name, value, stats)
            return

        if value.is_array:
            self._observe_array_shapes(value, stats)
            for item in value.items:
                # Array items inherit the array's name for role detection
                self._walk(name, item, stats)
            return

        # OBJECT
        input_role = self._input_role_of_object(name, value)
        if input_role is not None:
            stats.add_input_role(input_role)
            return

        images_before = stats.image_count
        for key, child in value.iter_entries():
            child_name = self.normalizer.normalize(key)
            # Pixel dimensions describe an element, they are not elements
            if child_name in self.SIZE_KEYS and self._is_number(child.value):
                continue
            self._walk(child_name, child, stats)
        if stats.image_count > images_before:
            self._observe_aspect_ratio(value, stats)

    def _observe_scalar(self, name: str, value: RawValue, stats: SectionStats) -> None:
        if value.is_absent:
            return

        sample = value.value
        text_sample = sample if isinstance(sample, str) else ""
        is_button = self._is_button_name(name)

        # See-more affordance: in the key name, or in the text of a button
        # or a CTA-length string. Prose that merely mentions "see more" is text.
        phrase = self.rules.contains_phrase(name, self.rules.see_more_phrases)
        if phrase is None and text_sample and (is_button or self._is_cta_text(text_sample)):
            phrase = self.rules.contains_phrase(text_sample, self.rules.see_more_phrases)
        if phrase:
            stats.see_more_phrase = stats.see_more_phrase or phrase
            stats.button_count += 1
            return

        if self.rules.has_token(name, self.rules.submit_keywords) or (
            is_button and text_sample
            and self.rules.has_token(self._fold(text_sample), self.rules.submit_keywords)
        ):
            stats.has_submit = True
            stats.button_count += 1
            return

        if is_button:
            stats.button_count += 1
            return

        if self.rules.find_keyword(name, self.rules.input_keywords):
            stats.add_input_role(self._role_from_name(name))
            return

        if (
            self.rules.find_keyword(name, self.rules.media_keywords)
            or self.classifier.looks_like_media(sample)
        ):
            stats.image_count += 1
            return

        stats.text_count += 1

    def _observe_array_shapes(self, value: RawValue, stats: SectionStats) -> None:
        present = [item for item in value.items if not item.is_absent]
        if not present:
            return
        shapes = Counter(item.shape_signature() for item in present)
        largest = shapes.most_common(1)[0][1]
        stats.max_similar_elements = max(stats.max_similar_elements, largest)

    def _observe_aspect_ratio(self, value: RawValue, stats: SectionStats) -> None:
        width = value.get("width")
        height = value.get("height")
        if width is None or height is None:
            return
        w, h = width.value, height.value
        if not self._is_number(w) or not self._is_number(h) or h <= 0 or w <= 0:
            return
        stats.aspect_ratios.append(round(w / h, 2))

    # --- Affordance detection ---

    def _is_button_name(self, name: str) -> bool:
        return self.rules.has_token(name, self.rules.button_keywords) is not None

    def _is_cta_text(self, text: str) -> bool:
        """Short enough to be a button caption rather than prose."""
        return len(text.split()) <= self.CTA_MAX_WORDS

    @staticmethod
    def _fold(text: str) -> str:
        return "_".join(text.lower().replace("-", " ").split())

    # --- Input detection ---

    def _input_role_of_object(self, name: str, value: RawValue) -> Optional[str]:
        """Role of an object that describes one form input, else None."""
        keys = {self.normalizer.normalize(key): child for key, child in value.iter_entries()}

        declared_type = None
        for type_key in self.INPUT_TYPE_KEYS:
            child = keys.get(type_key)
            if child is not None and isinstance(child.value, str):
                candidate = child.value.strip().lower()
                if candidate in self.rules.input_types:
                    declared_type = candidate
                    break

        if declared_type and any(key in keys for key in self.INPUT_DESCRIPTOR_KEYS):
            return "tel" if declared_type == "phone" else declared_type
        if "placeholder" in keys:
            return self._role_from_name(name)
        return None

    def _role_from_name(self, name: str) -> str:
        lowered = name.lower()
        if "email" in lowered:
            return "email"
        if "phone" in lowered or "tel" in lowered.split("_"):
            return "tel"
        if any(word in lowered for word in ("message", "comment", "textarea")):
            return "textarea"
        if "checkbox" in lowered:
            return "checkbox"
        if any(word in lowered for word in ("select", "dropdown")):
            return "select"
        return "text"

    # --- Collection candidate ---

    def _find_collection(self, tree: RawValue):
        """
        The array the repeater predicates look at: the root itself, or
        the only value of a single-key object root.
        """
        if tree.is_array:
            return "", tree
        if tree.is_object and len(tree.entries) == 1:
            key, child = tree.entries[0]
            if child.is_array:
                return key, child
        return "", None

    @staticmethod
    def _is_number(value) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
