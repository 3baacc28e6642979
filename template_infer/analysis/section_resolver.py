# ==============================================
# SectionResolver
# ==============================================
#
# PURPOSE:
#   Decide which archetype a whole section is: plain fields, a
#   repeating collection, a nested group, a media gallery, a form,
#   or a reference to an external collection.
#
# WHY THIS CLASS EXISTS:
#   The same raw shape is ambiguous without context. A 3-item array of
#   strings is a repeater; a 5-item array of rich objects next to a
#   "see more" button is a listing owned by another collection. The
#   resolver scores every archetype independently and picks a winner.
#
# SCORE TABLE (archetype → [(predicate, weight)], priority order):
# ---------------------------------------------------------------
#   1. externalCollectionRef (threshold 0.8)
#        +0.8 see-more affordance   +0.6 collection section name
#        +0.4 ≥3 structurally similar elements
#   2. formSection (threshold 0.9)
#        +0.5 ≥1 input              +0.3 per additional distinct role
#        +0.2 submit / CTA present
#   3. mediaGallery (threshold 0.8)
#        +mediaRatio                +0.3 ≥3 images share an aspect ratio
#   4. repeaterCollection (threshold 0.7)
#        +0.5 array of ≥2 uniform items (DECISIVE: lifts to threshold)
#        +0.3 more than 3 items     +0.3 plural / listing name
#   5. nestedGroup (threshold 0.6)
#        +0.4 object with ≥2 keys of mixed types
#        +0.3 grouping name (info, details, settings)
#   6. singleFields → fallback, 1.0 when nothing else clears
#
#   The first archetype in priority order whose score clears its
#   threshold wins.
#
# HINT PRECEDENCE:
# ----------------
#   A high-confidence hint forces the archetype through its markers:
#   repeater → repeaterCollection, group → nestedGroup,
#   post_related → externalCollectionRef. Without markers the scored
#   winner stands. Field typing is then taken from the hint by the
#   synthesizer.
#
# ==============================================

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from template_infer.errors import EMPTY_SECTION_WARNING
from template_infer.structure import RawValue, NameNormalizer
from .decision import (
    ARCHETYPE_PRIORITY,
    ArchetypeTag,
    ResolverThresholds,
    SectionAnalysis,
)
from .hints import AnalysisHint
from .rules import ClassificationRules, DEFAULT_RULES
from .section_stats import SectionObserver, SectionStats
from .semantic_classifier import SemanticClassifier


@dataclass(frozen=True)
class SectionContext:
    """Everything a score predicate may look at."""
    section_name: str   # snake_case
    tree: RawValue
    stats: SectionStats
    rules: ClassificationRules


Weight = Union[float, Callable[[SectionContext], float]]


@dataclass(frozen=True)
class ScoreRule:
    """
    One additive contribution to an archetype's score.

    `weight` is either a constant or a function of the context (for
    contributions such as the media ratio). A decisive rule lifts the
    archetype's score to at least its threshold when it matches.
    """
    name: str
    predicate: Callable[[SectionContext], bool]
    weight: Weight
    decisive: bool = False

    def contribution(self, ctx: SectionContext) -> float:
        if not self.predicate(ctx):
            return 0.0
        amount = self.weight(ctx) if callable(self.weight) else self.weight
        return max(0.0, amount)


# --- Predicates ---

def has_see_more(ctx: SectionContext) -> bool:
    return ctx.stats.see_more_phrase is not None


def is_collection_name(ctx: SectionContext) -> bool:
    return ctx.rules.is_collection_name(ctx.section_name) is not None


def has_similar_elements(ctx: SectionContext) -> bool:
    return ctx.stats.max_similar_elements >= 3


def has_input(ctx: SectionContext) -> bool:
    return ctx.stats.input_count >= 1


def has_extra_input_roles(ctx: SectionContext) -> bool:
    return len(ctx.stats.input_roles) > 1


def extra_input_roles_weight(ctx: SectionContext) -> float:
    return 0.3 * (len(ctx.stats.input_roles) - 1)


def has_submit(ctx: SectionContext) -> bool:
    return ctx.stats.has_submit


def has_media(ctx: SectionContext) -> bool:
    return ctx.stats.image_count > 0


def media_ratio_weight(ctx: SectionContext) -> float:
    return ctx.stats.media_ratio


def has_shared_aspect_ratio(ctx: SectionContext) -> bool:
    return ctx.stats.largest_shared_aspect_ratio_group >= 3


def is_uniform_array(ctx: SectionContext) -> bool:
    collection = ctx.stats.collection
    if collection is None or len(collection.items) < 2:
        return False
    signatures = {item.shape_signature() for item in collection.items}
    return len(signatures) == 1 and not collection.items[0].is_empty


def has_many_items(ctx: SectionContext) -> bool:
    collection = ctx.stats.collection
    return collection is not None and len(collection.items) > 3


def implies_plurality(ctx: SectionContext) -> bool:
    names = [ctx.section_name]
    if ctx.stats.collection_key:
        names.append(NameNormalizer().normalize(ctx.stats.collection_key))
    for name in names:
        if ctx.rules.has_token(name, ctx.rules.listing_keywords):
            return True
        last = name.rsplit("_", 1)[-1]
        if len(last) > 3 and last.endswith("s") and not last.endswith(("ss", "us", "is")):
            return True
    return False


def is_mixed_object(ctx: SectionContext) -> bool:
    tree = ctx.tree
    if not tree.is_object or len(tree.entries) < 2:
        return False
    kinds = set()
    for _, child in tree.iter_entries():
        if child.is_absent:
            continue
        kinds.add(child.scalar_type() if child.is_scalar else child.kind.value)
    return len(kinds) >= 2


def is_grouping_name(ctx: SectionContext) -> bool:
    return ctx.rules.is_grouping_name(ctx.section_name) is not None


DEFAULT_SCORE_TABLE: Dict[ArchetypeTag, Tuple[ScoreRule, ...]] = {
    ArchetypeTag.EXTERNAL_COLLECTION_REF: (
        ScoreRule("see-more affordance", has_see_more, 0.8),
        ScoreRule("collection section name", is_collection_name, 0.6),
        ScoreRule(">=3 structurally similar elements", has_similar_elements, 0.4),
    ),
    ArchetypeTag.FORM_SECTION: (
        ScoreRule("input element present", has_input, 0.5),
        ScoreRule("additional distinct input roles", has_extra_input_roles, extra_input_roles_weight),
        ScoreRule("submit/CTA present", has_submit, 0.2),
    ),
    ArchetypeTag.MEDIA_GALLERY: (
        ScoreRule("media ratio", has_media, media_ratio_weight),
        ScoreRule(">=3 images share aspect ratio", has_shared_aspect_ratio, 0.3),
    ),
    ArchetypeTag.REPEATER_COLLECTION: (
        ScoreRule("array of >=2 uniform items", is_uniform_array, 0.5, decisive=True),
        ScoreRule("more than 3 items", has_many_items, 0.3),
        ScoreRule("plural/listing name", implies_plurality, 0.3),
    ),
    ArchetypeTag.NESTED_GROUP: (
        ScoreRule("object with mixed-type keys", is_mixed_object, 0.4),
        ScoreRule("grouping name", is_grouping_name, 0.3),
    ),
}

HINT_MARKER_ARCHETYPES: Tuple[Tuple[str, ArchetypeTag], ...] = (
    ("repeater", ArchetypeTag.REPEATER_COLLECTION),
    ("group", ArchetypeTag.NESTED_GROUP),
    ("post_related", ArchetypeTag.EXTERNAL_COLLECTION_REF),
)


class SectionResolver:
    """
    Scores a section against every archetype and picks the winner.

    Stateless: section tree in, SectionAnalysis out.
    """

    def __init__(
        self,
        rules: ClassificationRules = None,
        thresholds: ResolverThresholds = None,
        score_table: Dict[ArchetypeTag, Sequence[ScoreRule]] = None,
        classifier: SemanticClassifier = None
    ):
        """
        Args:
            rules: Keyword tables (defaults to DEFAULT_RULES)
            thresholds: Per-archetype minimum scores
            score_table: archetype → score rules; tests may substitute it
            classifier: Shared classifier used for element detection
        """
        self.rules = rules or DEFAULT_RULES
        self.thresholds = thresholds or ResolverThresholds()
        self.score_table = score_table or DEFAULT_SCORE_TABLE
        self.normalizer = NameNormalizer()
        self.observer = SectionObserver(
            self.rules,
            classifier or SemanticClassifier(self.rules),
            self.normalizer,
        )

    def resolve(
        self,
        section_name: str,
        value_tree: RawValue,
        hint: Optional[AnalysisHint] = None,
        hint_warnings: Sequence[str] = ()
    ) -> SectionAnalysis:
        """
        Resolve one section.

        Args:
            section_name: Name of the section (any spelling)
            value_tree: The section's analyzed content
            hint: Parsed hint for this section, if any
            hint_warnings: Problems found while parsing the hint

        Returns:
            An immutable SectionAnalysis
        """
        reasoning: List[str] = []
        warnings: List[str] = list(hint_warnings)

        stats = self.observer.observe(section_name, value_tree)
        ctx = SectionContext(
            section_name=self.normalizer.normalize(section_name),
            tree=value_tree,
            stats=stats,
            rules=self.rules,
        )

        if value_tree.is_empty:
            reasoning.append(f"{EMPTY_SECTION_WARNING}: section '{section_name}' has no content")
            return self._build(section_name, stats, {ArchetypeTag.SINGLE_FIELDS: 1.0},
                               ArchetypeTag.SINGLE_FIELDS, False, reasoning, warnings)

        scores = self.score(ctx, reasoning)
        winner = self.pick_winner(scores)

        hint_applied = False
        if hint is not None:
            if hint.is_authoritative:
                hint_applied = True
                forced = self._archetype_from_markers(hint)
                reasoning.append(
                    f"hint ({hint.confidence.value}, {hint.mapping_kind.value}): "
                    f"{len(hint.detected_field_names)} field(s) override heuristic typing"
                )
                if forced is not None and forced is not winner:
                    reasoning.append(f"hint marker forces {forced.value} over scored {winner.value}")
                    winner = forced
            else:
                reasoning.append(
                    f"hint ignored: confidence {hint.confidence.value}"
                    if hint.detected_field_names else "hint ignored: no detected fields"
                )

        if winner is ArchetypeTag.SINGLE_FIELDS and scores[ArchetypeTag.SINGLE_FIELDS] == 0.0:
            scores[ArchetypeTag.SINGLE_FIELDS] = 1.0
            reasoning.append("singleFields: fallback, no archetype cleared its threshold (+1.0)")

        reasoning.append(f"winner: {winner.value}")
        return self._build(section_name, stats, scores, winner, hint_applied, reasoning, warnings)

    def score(self, ctx: SectionContext, reasoning: List[str] = None) -> Dict[ArchetypeTag, float]:
        """
        Compute every archetype's score.

        Args:
            ctx: Section context
            reasoning: Optional list that receives one line per contribution

        Returns:
            archetype → non-negative score (SINGLE_FIELDS starts at 0.0)
        """
        scores: Dict[ArchetypeTag, float] = {}
        for archetype in ARCHETYPE_PRIORITY:
            rules = self.score_table.get(archetype, ())
            threshold = self.thresholds.for_archetype(archetype)
            total = 0.0
            decisive = False
            for rule in rules:
                amount = rule.contribution(ctx)
                if amount > 0 or (rule.decisive and rule.predicate(ctx)):
                    total += amount
                    decisive = decisive or rule.decisive
                    if reasoning is not None:
                        reasoning.append(f"{archetype.value}: {rule.name} (+{amount:.2f})")
            if decisive and total < threshold:
                if reasoning is not None:
                    reasoning.append(
                        f"{archetype.value}: decisive rule lifts {total:.2f} to threshold {threshold:.2f}"
                    )
                total = threshold
            scores[archetype] = round(total, 6)
        return scores

    def pick_winner(self, scores: Dict[ArchetypeTag, float]) -> ArchetypeTag:
        """First archetype in priority order whose score clears its threshold."""
        for archetype in ARCHETYPE_PRIORITY:
            if archetype is ArchetypeTag.SINGLE_FIELDS:
                break
            if scores.get(archetype, 0.0) >= self.thresholds.for_archetype(archetype):
                return archetype
        return ArchetypeTag.SINGLE_FIELDS

    def _archetype_from_markers(self, hint: AnalysisHint) -> Optional[ArchetypeTag]:
        markers = set(hint.markers)
        for marker, archetype in HINT_MARKER_ARCHETYPES:
            if marker in markers:
                return archetype
        return None

    def _build(
        self,
        section_name: str,
        stats: SectionStats,
        scores: Dict[ArchetypeTag, float],
        winner: ArchetypeTag,
        hint_applied: bool,
        reasoning: List[str],
        warnings: List[str]
    ) -> SectionAnalysis:
        return SectionAnalysis(
            section_name=section_name,
            element_counts=stats.element_counts(),
            has_repeating_pattern=stats.has_repeating_pattern,
            media_ratio=stats.media_ratio,
            input_roles=tuple(stats.input_roles),
            has_submit=stats.has_submit,
            has_see_more=stats.see_more_phrase is not None,
            scores=dict(scores),
            winning_archetype=winner,
            collection_key=stats.collection_key,
            hint_applied=hint_applied,
            reasoning=tuple(reasoning),
            warnings=tuple(warnings),
        )
