# ==============================================
# TOPIC 1: STRUCTURE
# ==============================================
#
# This package turns raw, already-extracted design metadata
# (any JSON value) into an immutable, typed value tree BEFORE
# it enters the classification pipeline.
#
# Modules:
# --------
# - raw_value.py           → RawValue tagged union (Array / Object / Scalar)
# - structural_analyzer.py → Classify any JSON value and recurse into children
# - name_normalizer.py     → snake_case field names, display labels, uniqueness
#
# ==============================================

from .raw_value import RawValue, ValueKind
from .structural_analyzer import StructuralAnalyzer, analyze, analyze_json
from .name_normalizer import NameNormalizer

__all__ = [
    "RawValue",
    "ValueKind",
    "StructuralAnalyzer",
    "analyze",
    "analyze_json",
    "NameNormalizer",
]
