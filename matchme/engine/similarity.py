"""Compatibility scoring between two trait vectors.

Three interchangeable algorithms, all returning 0-100 where 100 means
identical on the defined traits:

- cosine    – directional agreement, insensitive to magnitude (default)
- euclidean – weighted distance scaled by the maximum possible distance
- absolute  – mean absolute difference

All functions are *pure*: no side-effects, no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import math

from pydantic import BaseModel, Field

from matchme.engine.errors import InvalidInputError
from matchme.quiz_models import TraitVector


# ---------------------------------------------------------------------------
# Algorithm selector
# ---------------------------------------------------------------------------
class MatchAlgorithm(str, Enum):
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    ABSOLUTE = "absolute"

    @classmethod
    def parse(cls, value: MatchAlgorithm | str) -> MatchAlgorithm:
        """Resolve *value* by name; unknown names raise ``InvalidInputError``."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(a.value for a in cls)
            raise InvalidInputError(f"Unknown match algorithm '{value}' (expected one of: {valid})") from None


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class TraitSimilarity(BaseModel):
    """Both sides' values for one trait and their similarity."""

    a: float
    b: float
    similarity: float = Field(ge=0.0, le=1.0)


class SimilarityBreakdown(BaseModel):
    overall: float = Field(ge=0.0, le=100.0)
    traits: dict[str, TraitSimilarity] = Field(default_factory=dict)


class SimilarityResult(BaseModel):
    """Headline score plus per-trait explanation."""

    match_score: float = Field(ge=0.0, le=100.0)
    breakdown: SimilarityBreakdown
    algorithm_used: MatchAlgorithm = MatchAlgorithm.COSINE


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------
def _is_real(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_vector(vector: Mapping[str, float], name: str = "vector") -> None:
    """Raise ``InvalidInputError`` unless *vector* maps str → finite number."""
    if not isinstance(vector, Mapping):
        raise InvalidInputError(f"{name} must be a mapping of trait → number")
    for trait, value in vector.items():
        if not isinstance(trait, str):
            raise InvalidInputError(f"{name} has non-string trait key {trait!r}")
        if not _is_real(value):
            raise InvalidInputError(f"{name}[{trait!r}] is not a finite number: {value!r}")


def _validate_weights(weights: Mapping[str, float] | None) -> Mapping[str, float]:
    if weights is None:
        return {}
    validate_vector(weights, "weights")
    for trait, w in weights.items():
        if w < 0:
            raise InvalidInputError(f"weights[{trait!r}] must be non-negative, got {w}")
    return weights


def _trait_union(a: Mapping[str, float], b: Mapping[str, float]) -> list[str]:
    return list(dict.fromkeys([*a, *b]))


def _sorted_traits(a: Mapping[str, float], b: Mapping[str, float]) -> list[str]:
    # Scores must not depend on argument or key order.
    return sorted(set(a) | set(b))


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


# ---------------------------------------------------------------------------
# Algorithms
# ---------------------------------------------------------------------------
def compute_match_cosine(
    a: Mapping[str, float],
    b: Mapping[str, float],
    weights: Mapping[str, float] | None = None,
) -> float:
    """Weighted cosine similarity scaled to 0-100; zero magnitude → 0."""
    validate_vector(a, "vector_a")
    validate_vector(b, "vector_b")
    weights = _validate_weights(weights)
    traits = _sorted_traits(a, b)
    if not traits:
        return 0.0

    dot_terms, sq_a, sq_b = [], [], []
    for trait in traits:
        va, vb = float(a.get(trait, 0.0)), float(b.get(trait, 0.0))
        w = weights.get(trait, 1.0)
        dot_terms.append(w * (va * vb))
        sq_a.append(w * (va * va))
        sq_b.append(w * (vb * vb))

    mag_a_sq, mag_b_sq = math.fsum(sq_a), math.fsum(sq_b)
    if mag_a_sq == 0.0 or mag_b_sq == 0.0:
        return 0.0
    # sqrt(m * m) == m, so a vector scores exactly 100 against itself.
    denom = math.sqrt(mag_a_sq * mag_b_sq)
    if denom == 0.0:
        return 0.0
    return 100.0 * _clamp01(math.fsum(dot_terms) / denom)


def compute_match_euclidean(
    a: Mapping[str, float],
    b: Mapping[str, float],
    weights: Mapping[str, float] | None = None,
) -> float:
    """Weighted Euclidean distance turned into similarity; zero total weight → 100."""
    validate_vector(a, "vector_a")
    validate_vector(b, "vector_b")
    weights = _validate_weights(weights)
    traits = _sorted_traits(a, b)
    if not traits:
        return 0.0

    squared = math.fsum(
        weights.get(t, 1.0) * (float(a.get(t, 0.0)) - float(b.get(t, 0.0))) ** 2 for t in traits
    )
    max_distance = math.sqrt(math.fsum(weights.get(t, 1.0) for t in traits))
    if max_distance == 0.0:
        return 100.0
    return 100.0 * _clamp01(1.0 - math.sqrt(squared) / max_distance)


def compute_match_absolute(a: Mapping[str, float], b: Mapping[str, float]) -> float:
    """Unweighted mean absolute difference turned into similarity."""
    validate_vector(a, "vector_a")
    validate_vector(b, "vector_b")
    traits = _sorted_traits(a, b)
    if not traits:
        return 0.0

    mean_diff = math.fsum(abs(float(a.get(t, 0.0)) - float(b.get(t, 0.0))) for t in traits) / len(traits)
    return 100.0 * _clamp01(1.0 - mean_diff)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def compute_match(
    a: Mapping[str, float],
    b: Mapping[str, float],
    weights: Mapping[str, float] | None = None,
    algorithm: MatchAlgorithm | str = MatchAlgorithm.COSINE,
) -> float:
    """Return the 0-100 match score of *a* vs *b* using *algorithm*.

    *weights* apply to cosine and euclidean; the absolute algorithm is
    always unweighted.
    """
    algo = MatchAlgorithm.parse(algorithm)
    if algo is MatchAlgorithm.COSINE:
        return compute_match_cosine(a, b, weights)
    if algo is MatchAlgorithm.EUCLIDEAN:
        return compute_match_euclidean(a, b, weights)
    return compute_match_absolute(a, b)


def compute_trait_breakdown(a: Mapping[str, float], b: Mapping[str, float]) -> dict[str, TraitSimilarity]:
    """Per-trait ``1 - |a - b|`` over the union of traits (missing → 0.0)."""
    validate_vector(a, "vector_a")
    validate_vector(b, "vector_b")
    breakdown: dict[str, TraitSimilarity] = {}
    for trait in _trait_union(a, b):
        va, vb = float(a.get(trait, 0.0)), float(b.get(trait, 0.0))
        breakdown[trait] = TraitSimilarity(a=va, b=vb, similarity=_clamp01(1.0 - abs(va - vb)))
    return breakdown


def compute_match_with_breakdown(
    a: TraitVector,
    b: TraitVector,
    algorithm: MatchAlgorithm | str = MatchAlgorithm.COSINE,
    weights: Mapping[str, float] | None = None,
) -> SimilarityResult:
    """Headline score from *algorithm* plus the algorithm-independent breakdown."""
    algo = MatchAlgorithm.parse(algorithm)
    score = compute_match(a, b, weights=weights, algorithm=algo)
    return SimilarityResult(
        match_score=score,
        breakdown=SimilarityBreakdown(overall=score, traits=compute_trait_breakdown(a, b)),
        algorithm_used=algo,
    )
