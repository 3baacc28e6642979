# ==============================================
# TOPIC 2: ANALYSIS
# ==============================================
#
# This package decides WHAT each section is. It classifies field
# names into candidate types and scores whole sections against the
# archetype table.
#
# Modules:
# --------
# - decision.py            → FieldType, ArchetypeTag, SectionAnalysis, thresholds
# - rules.py               → Immutable keyword tables (ClassificationRules)
# - semantic_classifier.py → Name/kind → candidate FieldType
# - section_stats.py       → Walk a section and gather scoring evidence
# - hints.py               → Parse externally supplied AnalysisHints
# - section_resolver.py    → Score archetypes, pick the winner
#
# ==============================================

from .decision import (
    ARCHETYPE_PRIORITY,
    ArchetypeTag,
    ConfidenceLabel,
    ElementCounts,
    FieldType,
    MappingKind,
    ResolverThresholds,
    SectionAnalysis,
)
from .rules import ClassificationRules, DEFAULT_RULES
from .semantic_classifier import Classification, SemanticClassifier
from .section_stats import SectionObserver, SectionStats
from .hints import AnalysisHint, HintField, HintParseResult, load_hint, parse_marker
from .section_resolver import (
    DEFAULT_SCORE_TABLE,
    ScoreRule,
    SectionContext,
    SectionResolver,
)

__all__ = [
    "ARCHETYPE_PRIORITY",
    "ArchetypeTag",
    "ConfidenceLabel",
    "ElementCounts",
    "FieldType",
    "MappingKind",
    "ResolverThresholds",
    "SectionAnalysis",
    "ClassificationRules",
    "DEFAULT_RULES",
    "Classification",
    "SemanticClassifier",
    "SectionObserver",
    "SectionStats",
    "AnalysisHint",
    "HintField",
    "HintParseResult",
    "load_hint",
    "parse_marker",
    "DEFAULT_SCORE_TABLE",
    "ScoreRule",
    "SectionContext",
    "SectionResolver",
]
