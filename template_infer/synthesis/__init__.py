# ==============================================
# TOPIC 3: SYNTHESIS
# ==============================================
#
# This package decides WHICH FIELDS each resolved section gets.
#
# Modules:
# --------
# - field_spec.py        → FieldSpec, the immutable synthesized field
# - field_synthesizer.py → SectionAnalysis + tree (+ hint) → FieldSpecs
#
# ==============================================

from .field_spec import FieldSpec
from .field_synthesizer import FieldSynthesizer, SynthesisResult

__all__ = [
    "FieldSpec",
    "FieldSynthesizer",
    "SynthesisResult",
]
