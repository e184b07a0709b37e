"""Partial matching of multi-aspect profiles.

Only aspects both participants completed are compared, so an unanswered
quiz on either side is excluded rather than scored as zero.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field

from matchme.engine.errors import InvalidInputError
from matchme.engine.similarity import (
    MatchAlgorithm,
    TraitSimilarity,
    compute_match_with_breakdown,
)
from matchme.quiz_models import TraitVector


NO_SHARED_ASPECTS_MESSAGE = "No shared aspects found"


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class AspectMatch(BaseModel):
    """Score and trait breakdown for one shared aspect."""

    match_score: float = Field(ge=0.0, le=100.0)
    traits: dict[str, TraitSimilarity] = Field(default_factory=dict)


class AspectBreakdown(BaseModel):
    overall: float = Field(ge=0.0, le=100.0)
    aspects: dict[str, AspectMatch] = Field(default_factory=dict)
    shared_aspects: list[str] = Field(default_factory=list)
    message: str | None = None


class AspectMatchResult(BaseModel):
    match_score: float = Field(ge=0.0, le=100.0)
    breakdown: AspectBreakdown
    algorithm_used: MatchAlgorithm = MatchAlgorithm.COSINE


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def match_partial_aspects(
    aspects_a: Mapping[str, TraitVector],
    aspects_b: Mapping[str, TraitVector],
    weights: Mapping[str, float] | None = None,
    algorithm: MatchAlgorithm | str = MatchAlgorithm.COSINE,
) -> AspectMatchResult:
    """Weighted mean of per-aspect scores over the aspects both sides share.

    Aspect weights default to ``1.0``.  With no shared aspect the score is
    ``0.0`` and the breakdown carries an explanatory message.
    """
    algo = MatchAlgorithm.parse(algorithm)
    for name, aspects in (("aspects_a", aspects_a), ("aspects_b", aspects_b)):
        if not isinstance(aspects, Mapping):
            raise InvalidInputError(f"{name} must be a mapping of aspect_id → trait vector")
    weights = weights or {}
    for aspect_id, w in weights.items():
        if isinstance(w, bool) or not isinstance(w, (int, float)) or w < 0:
            raise InvalidInputError(f"weight for aspect {aspect_id!r} must be a non-negative number")

    shared = [aspect_id for aspect_id in aspects_a if aspect_id in aspects_b]
    if not shared:
        return AspectMatchResult(
            match_score=0.0,
            breakdown=AspectBreakdown(overall=0.0, message=NO_SHARED_ASPECTS_MESSAGE),
            algorithm_used=algo,
        )

    matches: dict[str, AspectMatch] = {}
    weighted_sum = total_weight = 0.0
    for aspect_id in shared:
        result = compute_match_with_breakdown(aspects_a[aspect_id], aspects_b[aspect_id], algo)
        matches[aspect_id] = AspectMatch(match_score=result.match_score, traits=result.breakdown.traits)
        w = float(weights.get(aspect_id, 1.0))
        weighted_sum += w * result.match_score
        total_weight += w

    overall = weighted_sum / total_weight if total_weight > 0 else 0.0
    overall = min(100.0, overall)  # float drift on all-100 aspects
    return AspectMatchResult(
        match_score=overall,
        breakdown=AspectBreakdown(overall=overall, aspects=matches, shared_aspects=shared),
        algorithm_used=algo,
    )
