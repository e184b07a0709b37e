"""Summary helpers: trait levels, ranking, dominance and comparison highlights.

All functions are *pure*.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from matchme.engine.similarity import SimilarityResult, validate_vector
from matchme.engine.trait_ranges import as_quiz
from matchme.quiz_models import QuizDefinition, TraitVector


TraitLevel = Literal["high", "mid", "low"]
MatchBand = Literal["high", "medium", "low"]

HIGH_LEVEL = 0.70
MID_LEVEL = 0.45

HIGH_MATCH_BAND = 80.0
MEDIUM_MATCH_BAND = 55.0
ALIGNED_SIMILARITY = 0.70
NOTABLE_GAP = 0.25
MAX_HIGHLIGHTS = 4


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class RankedTrait(BaseModel):
    trait: str
    label: str
    score: float
    level: TraitLevel


class ProfileSummary(BaseModel):
    """Ranked view of one normalized trait vector."""

    traits: list[RankedTrait] = Field(default_factory=list)
    top_trait: str | None = None
    bottom_trait: str | None = None
    dominance: float = 0.0


class ComparedTrait(BaseModel):
    trait: str
    label: str
    a: float
    b: float
    similarity: float = Field(ge=0.0, le=1.0)
    gap: float = Field(ge=0.0)


class ComparisonSummary(BaseModel):
    """Match band plus the traits two people share most and differ on most."""

    match_score: float = Field(ge=0.0, le=100.0)
    match_band: MatchBand
    aligned_traits: list[ComparedTrait] = Field(default_factory=list)
    gap_traits: list[ComparedTrait] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def extract_trait_labels(quiz: QuizDefinition | Mapping[str, Any]) -> dict[str, str]:
    """``{trait_id: label}`` for every trait that sets a label, even ``""``."""
    quiz = as_quiz(quiz)
    return {trait: d.label for trait, d in quiz.traits.items() if d.label is not None}


def display_label(trait: str, trait_labels: Mapping[str, str] | None = None) -> str:
    """Label from *trait_labels*, else the id with underscores spaced and first letter upper-cased."""
    if trait_labels and trait in trait_labels:
        return trait_labels[trait]
    text = trait.replace("_", " ")
    return text[:1].upper() + text[1:]


def trait_level(score: float) -> TraitLevel:
    if score >= HIGH_LEVEL:
        return "high"
    if score >= MID_LEVEL:
        return "mid"
    return "low"


def calculate_dominance(vector: Mapping[str, float]) -> float:
    """Gap between the strongest trait and the third strongest.

    Falls back to the second strongest for two-trait profiles; a single
    trait is measured against zero.
    """
    scores = sorted(vector.values(), reverse=True)
    if not scores:
        return 0.0
    if len(scores) == 1:
        return float(scores[0])
    return float(scores[0] - scores[min(2, len(scores) - 1)])


def summarize_profile(
    vector: TraitVector,
    trait_labels: Mapping[str, str] | None = None,
) -> ProfileSummary:
    """Rank *vector* high→low (ties keep input order) and tag each trait's level."""
    validate_vector(vector)
    labels = trait_labels or {}
    ranked = sorted(vector.items(), key=lambda kv: kv[1], reverse=True)
    traits = [
        RankedTrait(trait=t, label=labels.get(t, t), score=float(s), level=trait_level(s))
        for t, s in ranked
    ]
    return ProfileSummary(
        traits=traits,
        top_trait=traits[0].trait if traits else None,
        bottom_trait=traits[-1].trait if traits else None,
        dominance=calculate_dominance(vector),
    )


def match_band(score: float) -> MatchBand:
    if score >= HIGH_MATCH_BAND:
        return "high"
    if score >= MEDIUM_MATCH_BAND:
        return "medium"
    return "low"


def summarize_comparison(
    result: SimilarityResult,
    trait_labels: Mapping[str, str] | None = None,
) -> ComparisonSummary:
    """Band the match score and pick the traits worth calling out.

    Aligned traits are those with similarity >= 0.70, most similar first;
    gaps are those with ``|a - b| >= 0.25``, widest first.  Both lists hold
    at most four traits and fall back to the overall top four when nothing
    clears the threshold.  Ties keep breakdown order.
    """
    score = max(0.0, min(100.0, result.match_score))
    traits = [
        ComparedTrait(
            trait=trait,
            label=display_label(trait, trait_labels),
            a=ts.a,
            b=ts.b,
            similarity=ts.similarity,
            gap=abs(ts.a - ts.b),
        )
        for trait, ts in result.breakdown.traits.items()
    ]

    by_similarity = sorted(traits, key=lambda t: t.similarity, reverse=True)
    aligned = [t for t in by_similarity if t.similarity >= ALIGNED_SIMILARITY] or by_similarity

    by_gap = sorted(traits, key=lambda t: t.gap, reverse=True)
    gaps = [t for t in by_gap if t.gap >= NOTABLE_GAP] or by_gap

    return ComparisonSummary(
        match_score=score,
        match_band=match_band(score),
        aligned_traits=aligned[:MAX_HIGHLIGHTS],
        gap_traits=gaps[:MAX_HIGHLIGHTS],
    )
