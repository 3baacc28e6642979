# ==============================================
# NameNormalizer
# ==============================================
#
# PURPOSE:
#   Convert designer-authored key names to a single canonical form
#   (snake_case) and derive display labels from them.
#
# WHY THIS CLASS EXISTS:
#   Design tools emit the same logical field under many spellings:
#     - "backgroundImage", "Background Image", "background-image"
#     - "CTA", "ctaButton", "cta_button"
#   Template field names must be snake_case identifiers that are
#   unique among siblings, and labels must read like "Background Image".
#
# CLASS: NameNormalizer
# ---------------------
#   Methods:
#   --------
#   - normalize(name: str) -> str
#       Convert a single name to snake_case (memoized, bounded by max_mappings).
#
#   - label(name: str) -> str
#       "background_image" → "Background Image"
#
#   - singularize(name: str) -> str
#       "companies" → "company", "logos" → "logo"
#
#   - unique(name: str, taken: set[str]) -> str
#       Append _2, _3, ... until the name is free among siblings.
#
# RULES:
# ------
#   1. camelCase    → snake_case    (ctaButton → cta_button)
#   2. PascalCase   → snake_case    (HeroTitle → hero_title)
#   3. ALLCAPS      → lowercase     (CTA → cta)
#   4. Spaces/dashes → underscores  (see more → see_more)
#   5. Leading digits are prefixed  (2col → field_2col)
#   6. Collapse multiple underscores, strip leading/trailing ones
#
# ==============================================

import re
from typing import Dict, Set


class NameNormalizer:
    """
    Converts field names to canonical snake_case format.
    Maintains a mapping of original names to canonical forms.
    """

    FALLBACK_NAME = "field"
    # Memo size; the oldest mapping is evicted once full
    MAX_MAPPINGS = 10000

    def __init__(self, max_mappings: int = MAX_MAPPINGS):
        self.max_mappings = max(1, max_mappings)
        self._mappings: Dict[str, str] = {}

    def normalize(self, name: str) -> str:
        """
        Convert a field name to snake_case.

        Args:
            name: Raw key name (e.g., "ctaButton", "Hero Title", "CTA")

        Returns:
            Canonical snake_case name; never empty
        """
        if name in self._mappings:
            return self._mappings[name]

        normalized = self._camel_to_snake(name or "")
        if not normalized:
            normalized = self.FALLBACK_NAME
        elif normalized[0].isdigit():
            normalized = f"{self.FALLBACK_NAME}_{normalized}"

        if len(self._mappings) >= self.max_mappings:
            self._mappings.pop(next(iter(self._mappings)))
        self._mappings[name] = normalized
        return normalized

    def label(self, name: str) -> str:
        """Human-readable label for a (raw or normalized) name."""
        return " ".join(part.capitalize() for part in self.normalize(name).split("_"))

    def singularize(self, name: str) -> str:
        """Naive English singular of the last word of a snake_case name."""
        normalized = self.normalize(name)
        head, _, last = normalized.rpartition("_")
        if last.endswith("ies") and len(last) > 4:
            last = last[:-3] + "y"
        elif last.endswith(("sses", "xes", "ches", "shes")):
            last = last[:-2]
        elif last.endswith("s") and not last.endswith(("ss", "us", "is")) and len(last) > 3:
            last = last[:-1]
        else:
            # Already singular (or uncountable): make it read as one item
            last = f"{last}_item" if not head else last
        return f"{head}_{last}" if head else last

    def unique(self, name: str, taken: Set[str]) -> str:
        """
        Return `name`, or `name_2`, `name_3`, ... if already taken.
        The returned name is added to `taken`.
        """
        candidate = name
        counter = 2
        while candidate in taken:
            candidate = f"{name}_{counter}"
            counter += 1
        taken.add(candidate)
        return candidate

    def get_mappings(self) -> Dict[str, str]:
        return self._mappings.copy()

    def _camel_to_snake(self, name: str) -> str:
        # Anything that is not alphanumeric becomes a separator
        name = re.sub(r'[^a-zA-Z0-9]', '_', name)

        # "XMLParser" -> "XML_Parser"
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

        # "ctaButton" -> "cta_Button"
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)
        return name.strip('_')
