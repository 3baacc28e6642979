# ==============================================
# InferTemplate: Final Orchestrator
# ==============================================
#
# PURPOSE:
#   This is the MAIN CLASS that ties all 4 topics together into
#   a single pipeline. Users interact with this class only.
#   Everything else is internal.
#
# HOW IT CONNECTS THE 4 TOPICS:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                      InferTemplate                       │
#   │                                                          │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 1: STRUCTURE                           │        │
#   │  │  StructuralAnalyzer → RawValue per section   │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ value trees (+ parsed hints)           │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 2: ANALYSIS                            │        │
#   │  │  SectionResolver → SectionAnalysis           │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │ winning archetypes                     │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 3: SYNTHESIS                           │        │
#   │  │  FieldSynthesizer → FieldSpecs               │        │
#   │  └──────────────┬───────────────────────────────┘        │
#   │                 │                                        │
#   │                 ▼                                        │
#   │  ┌──────────────────────────────────────────────┐        │
#   │  │ TOPIC 4: TEMPLATE                            │        │
#   │  │  TemplateAssembler → validate_template       │        │
#   │  │  TemplateStore.save_template(...)            │        │
#   │  └──────────────────────────────────────────────┘        │
#   └──────────────────────────────────────────────────────────┘
#
#
# CLASS: InferTemplate
# --------------------
#
#   Constructor:
#   ------------
#   - __init__(config: AppConfig | None = None)
#       1. Load config (from .env or passed in)
#       2. Initialize Topic 2: SemanticClassifier, SectionResolver
#       3. Initialize Topic 3: FieldSynthesizer
#       4. Initialize Topic 4: TemplateAssembler (store created on save)
#
#   Public Methods (User-facing API):
#   ---------------------------------
#   - infer(sections, hints=None, name=..., label=..., ...) -> InferenceResult
#       1. Analyze each section's raw JSON (Topic 1)
#       2. Parse its hint, resolve the archetype (Topic 2)
#       3. Synthesize fields (Topic 3)
#       4. Assemble and validate the template (Topic 4)
#
#   - save(result) -> dict
#       Persist template and analysis report (Topic 4).
#
#   - get_status() -> dict
#   - get_summary() -> dict
#       Archetype and field-type counts of the last run.
#
# ERRORS:
# -------
#   MalformedInputError aborts the run. Hint problems and unknown hint
#   types only produce per-section warnings; every other section is
#   still inferred.
#
# ==============================================

import sys
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from template_infer.config import AppConfig, get_config
from template_infer.errors import MalformedInputError
from template_infer.structure import NameNormalizer, StructuralAnalyzer
from template_infer.analysis import SectionAnalysis, SectionResolver, SemanticClassifier, load_hint
from template_infer.synthesis import FieldSpec, FieldSynthesizer
from template_infer.template import (
    TemplateAssembler,
    TemplateStore,
    ValidationResult,
    validate_template,
)


@dataclass
class InferenceResult:
    """Everything one inference run produced."""
    template: Dict[str, Any]
    analyses: Dict[str, SectionAnalysis] = field(default_factory=dict)
    fields: Dict[str, Tuple[FieldSpec, ...]] = field(default_factory=dict)
    warnings: Dict[str, List[str]] = field(default_factory=dict)
    skipped_sections: List[str] = field(default_factory=list)
    validation: ValidationResult = field(default_factory=ValidationResult)

    @property
    def all_warnings(self) -> List[str]:
        """Every section warning, prefixed with its section name."""
        return [
            f"{section}: {warning}"
            for section, section_warnings in self.warnings.items()
            for warning in section_warnings
        ]

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the run for reports.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "template": self.template,
            "sections": {
                name: {
                    "analysis": analysis.to_dict(),
                    "fields": [spec.to_dict() for spec in self.fields.get(name, ())],
                    "warnings": list(self.warnings.get(name, [])),
                }
                for name, analysis in self.analyses.items()
            },
            "skipped_sections": list(self.skipped_sections),
            "validation": self.validation.to_dict(),
        }


class InferTemplate:
    """
    Main orchestrator that integrates all 4 topics:
    1. Structure
    2. Analysis
    3. Synthesis
    4. Template
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize the complete pipeline with all components.

        Args:
            config: Application configuration. If None, loads from environment.
        """
        # Load configuration
        self._config = config or get_config()
        inference = self._config.inference

        self._normalizer = NameNormalizer()

        # TOPIC 2: Analysis
        self._classifier = SemanticClassifier(
            long_text_min_length=inference.long_text_min_length
        )
        self._resolver = SectionResolver(classifier=self._classifier)

        # TOPIC 3: Synthesis
        self._synthesizer = FieldSynthesizer(
            classifier=self._classifier,
            api_prefix=inference.api_prefix,
        )

        # TOPIC 4: Template
        self._assembler = TemplateAssembler(
            exclude_layout_sections=inference.exclude_layout_sections,
            layout_sections=inference.layout_sections,
        )
        self._store: Optional[TemplateStore] = None

        # Internal state
        self._runs = 0
        self._sections_analyzed = 0
        self._last_run: Optional[str] = None
        self._last_result: Optional[InferenceResult] = None

    def infer(
        self,
        sections: Mapping[str, Any],
        hints: Optional[Mapping[str, Any]] = None,
        name: str = "template",
        label: Optional[str] = None,
        multilanguage: Optional[bool] = None,
        is_content: Optional[bool] = None,
        is_multiple: Optional[bool] = None,
        description: Optional[str] = None
    ) -> InferenceResult:
        """
        Infer a template from extracted design metadata.

        Args:
            sections: Section name → raw JSON content, in document order
            hints: Optional section name → hint document
            name: Template name
            label: Template label (defaults to a label derived from name)
            multilanguage / is_content / is_multiple: Template flags;
                None means "use the configured default"
            description: Template description

        Returns:
            InferenceResult with the template and per-section details

        Raises:
            MalformedInputError: if sections or any section content is
                                 not JSON-shaped data
        """
        if not isinstance(sections, Mapping):
            raise MalformedInputError("sections must be an object")
        hints = hints or {}
        if not isinstance(hints, Mapping):
            raise MalformedInputError("hints must be an object", "$.hints")

        defaults = self._config.template
        multilanguage = defaults.multilanguage if multilanguage is None else multilanguage
        result = InferenceResult(template={})
        rendered_sections = []

        for section_name, raw in sections.items():
            if self._assembler.is_layout_section(section_name):
                result.skipped_sections.append(section_name)
                print(f"⚠ Skipped layout section '{section_name}'", file=sys.stderr)
                continue

            # TOPIC 1: Structure
            tree = StructuralAnalyzer.analyze(raw, path=f"$.{section_name}")

            # TOPIC 2: Analysis
            parsed = load_hint(section_name, self._hint_for(section_name, hints))
            analysis = self._resolver.resolve(section_name, tree, parsed.hint, parsed.warnings)

            # TOPIC 3: Synthesis
            synthesis = self._synthesizer.synthesize_with_warnings(
                analysis, tree, parsed.hint, multilanguage
            )

            result.analyses[section_name] = analysis
            result.fields[section_name] = synthesis.fields
            section_warnings = list(analysis.warnings) + list(synthesis.warnings)
            if section_warnings:
                result.warnings[section_name] = section_warnings
            rendered_sections.append((section_name, synthesis.fields))

        # TOPIC 4: Template
        result.template = self._assembler.assemble(
            name,
            label or self._normalizer.label(name),
            rendered_sections,
            multilanguage=multilanguage,
            is_content=defaults.is_content if is_content is None else is_content,
            is_multiple=defaults.is_multiple if is_multiple is None else is_multiple,
            description=description,
        )
        result.validation = validate_template(result.template)

        self._runs += 1
        self._sections_analyzed += len(result.analyses)
        self._last_run = datetime.now().isoformat()
        self._last_result = result

        status = "✓" if result.validation.valid else "✗"
        print(f"{status} Inferred template '{result.template['name']}' "
              f"({len(result.analyses)} sections, {len(result.all_warnings)} warnings)", file=sys.stderr)
        return result

    def save(self, result: InferenceResult) -> Dict[str, str]:
        """
        Persist a result's template and analysis report.

        Returns:
            {"template": path, "analysis": path}
        """
        if self._store is None:
            self._store = TemplateStore(self._config.output_dir)
        name = result.template["name"]
        template_path = self._store.save_template(result.template)
        analysis_path = self._store.save_analysis(name, result.to_dict())
        return {"template": str(template_path), "analysis": str(analysis_path)}

    def get_status(self) -> dict:
        """
        Get current pipeline status.

        Returns:
            Dictionary with pipeline state information.
        """
        return {
            "runs": self._runs,
            "sections_analyzed": self._sections_analyzed,
            "last_run": self._last_run,
            "api_prefix": self._config.inference.api_prefix,
            "long_text_min_length": self._config.inference.long_text_min_length,
            "exclude_layout_sections": self._config.inference.exclude_layout_sections,
            "output_dir": self._config.output_dir,
        }

    def get_summary(self) -> dict:
        """
        Get summary of the last run: archetype and field-type counts.

        Returns:
            Dictionary with per-section archetypes and totals.
        """
        if self._last_result is None:
            return {"sections": {}, "archetypes": {}, "field_types": {}, "valid": None}

        result = self._last_result
        field_types = Counter(
            spec.type.value
            for specs in result.fields.values()
            for top in specs
            for spec in top.walk()
        )
        return {
            "sections": {
                name: analysis.winning_archetype.value
                for name, analysis in result.analyses.items()
            },
            "archetypes": dict(Counter(
                analysis.winning_archetype.value for analysis in result.analyses.values()
            )),
            "field_types": dict(field_types),
            "warnings": len(result.all_warnings),
            "skipped_sections": list(result.skipped_sections),
            "valid": result.validation.valid,
        }

    def _hint_for(self, section_name: str, hints: Mapping[str, Any]) -> Any:
        if section_name in hints:
            return hints[section_name]
        wanted = self._normalizer.normalize(section_name)
        for key, value in hints.items():
            if self._normalizer.normalize(key) == wanted:
                return value
        return None
