# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   Exception types raised by the inference engine.
#
# SEVERITY:
# ---------
# - MalformedInputError      → fatal, aborts the whole run
# - HintLengthMismatchError  → fatal for one section's hint only;
#                              the section falls back to heuristics
# - UnknownFieldTypeError    → downgraded to the "text" type, recorded
# - DocumentLoadError        → loader could not read a document (CLI)
#
# EmptySectionWarning is not an exception: it is a reasoning line
# recorded on the SectionAnalysis (see EMPTY_SECTION_WARNING).
#
# ==============================================

EMPTY_SECTION_WARNING = "EmptySectionWarning"


class TemplateInferenceError(Exception):
    """Base class for every error raised by the engine."""


class MalformedInputError(TemplateInferenceError):
    """Input is not well-formed JSON-shaped data."""

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(f"{message} (at {path})")


class HintLengthMismatchError(TemplateInferenceError):
    """detectedFields and identifiedFieldTypes differ in length."""

    def __init__(self, section_name: str, names_count: int, types_count: int):
        self.section_name = section_name
        self.names_count = names_count
        self.types_count = types_count
        super().__init__(
            f"Hint for section '{section_name}' has {names_count} detected fields "
            f"but {types_count} identified field types"
        )


class UnknownFieldTypeError(TemplateInferenceError):
    """A hint names a field type outside the supported set."""

    def __init__(self, type_name: str, field_name: str = ""):
        self.type_name = type_name
        self.field_name = field_name
        where = f" for field '{field_name}'" if field_name else ""
        super().__init__(f"Unknown field type '{type_name}'{where}")


class DocumentLoadError(TemplateInferenceError):
    """A metadata or hint document could not be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load '{source}': {reason}")
