# ==============================================
# ClassificationRules (Keyword Tables)
# ==============================================
#
# PURPOSE:
#   All keyword lists used by the semantic classifier and the
#   section resolver, held as ONE immutable value.
#
# WHY THIS CLASS EXISTS:
#   The heuristics are only as good as their keyword tables, and
#   tests need to swap those tables without touching process-wide
#   state. A frozen dataclass is passed into every stage instead of
#   module-level lists that anybody could mutate.
#
# CLASS: ClassificationRules (frozen dataclass)
# ---------------------------------------------
#   Scalar field-type tables (evaluated top to bottom, first match wins):
#     media → long_text → text → boolean → choice → fallback text
#     (sample_gated_long_text_keywords fall through to the text table
#     when the observed sample is short)
#
#   Section context tables:
#     collection_keywords, see_more_phrases, grouping_keywords,
#     listing_keywords, button_keywords, submit_keywords,
#     input_keywords, input_types
#
#   File extension tables (media accept detection):
#     image_extensions, video_extensions, document_extensions
#
#   Helpers:
#   --------
#   - find_keyword(name, keywords) -> str | None      (substring match)
#   - has_token(name, keywords) -> str | None         (whole-word match)
#   - contains_phrase(text, phrases) -> str | None    (see-more phrases)
#
# ==============================================

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class ClassificationRules:
    """Immutable keyword tables for field and section heuristics."""

    # --- Scalar field-type tables (order matters) ---
    media_keywords: Tuple[str, ...] = (
        "logo", "image", "avatar", "icon", "photo", "media", "banner",
        "picture", "thumbnail", "background", "video",
    )
    long_text_keywords: Tuple[str, ...] = (
        "description", "content", "text", "bio", "subtitle",
        "address", "summary", "excerpt", "body", "message", "quote",
    )
    # Generic long_text keywords that only count when the sample is long too
    sample_gated_long_text_keywords: Tuple[str, ...] = ("text", "subtitle")
    text_keywords: Tuple[str, ...] = (
        "title", "headline", "label", "name", "button", "cta", "link",
    )
    boolean_keywords: Tuple[str, ...] = (
        "enable", "status", "active", "show", "is_",
    )
    choice_keywords: Tuple[str, ...] = (
        "select", "type", "category", "option",
    )

    # --- Section context tables ---
    collection_keywords: Tuple[str, ...] = (
        "projects", "portfolio", "testimonials", "team", "work", "news", "blog",
        "case_studies",
    )
    see_more_phrases: Tuple[str, ...] = (
        "see_more", "view_more", "browse_all", "see_all", "view_all", "load_more",
    )
    grouping_keywords: Tuple[str, ...] = ("info", "details", "settings")
    listing_keywords: Tuple[str, ...] = (
        "list", "items", "collection", "entries", "slider", "carousel", "grid",
    )
    button_keywords: Tuple[str, ...] = ("button", "btn", "cta", "link")
    submit_keywords: Tuple[str, ...] = ("submit", "send")
    input_keywords: Tuple[str, ...] = (
        "input", "placeholder", "textarea", "checkbox", "radio", "dropdown", "form_field",
    )
    input_types: Tuple[str, ...] = (
        "text", "email", "tel", "phone", "number", "password", "textarea",
        "checkbox", "radio", "select", "date", "url", "file",
    )

    # --- Media accept detection ---
    image_extensions: Tuple[str, ...] = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".avif")
    video_extensions: Tuple[str, ...] = (".mp4", ".webm", ".mov", ".ogg")
    document_extensions: Tuple[str, ...] = (".pdf", ".doc", ".docx", ".xls", ".xlsx", ".csv")

    @staticmethod
    def find_keyword(name: str, keywords: Iterable[str]) -> Optional[str]:
        """First keyword contained in `name` (case-insensitive substring)."""
        lowered = name.lower()
        for keyword in keywords:
            if keyword in lowered:
                return keyword
        return None

    @staticmethod
    def has_token(name: str, keywords: Iterable[str]) -> Optional[str]:
        """
        First keyword equal to a whole snake_case token of `name`,
        or to the whole name (so "case_studies" matches as one keyword).
        """
        lowered = name.lower()
        tokens = set(lowered.split("_"))
        for keyword in keywords:
            if keyword == lowered or keyword in tokens:
                return keyword
        return None

    @staticmethod
    def contains_phrase(text: str, phrases: Iterable[str]) -> Optional[str]:
        """
        First phrase found in free text. Spaces and dashes in `text`
        are folded to underscores so "See More" matches "see_more".
        """
        folded = "_".join(text.lower().replace("-", " ").split())
        for phrase in phrases:
            if phrase in folded:
                return phrase
        return None

    def is_collection_name(self, name: str) -> Optional[str]:
        return self.has_token(name, self.collection_keywords)

    def is_grouping_name(self, name: str) -> Optional[str]:
        return self.has_token(name, self.grouping_keywords)


DEFAULT_RULES = ClassificationRules()
